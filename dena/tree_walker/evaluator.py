"""
The generic machinery that everything needs,
without the specific methods corresponding to particular syntax.

Evaluation dispatches on the type of the node through two tables,
which `attach_evaluation_methods` fills from functions named
`_eval_...` and `_exec_...` according to their annotations.

Executing a statement yields a signal: `None` to carry on with the next
statement, or a `Return` that every enclosing statement-list passes
straight back up until it reaches the call that is waiting for it.
Each call waits only for its own, so a return can never leak out
into some other activation.
"""
from typing import NamedTuple, Optional, Sequence
from .. import syntax
from ..ontology import DenaError
from ..environment import Environment
from .types import VALUE

class DenaRuntimeError(DenaError):
	pass

class Return(NamedTuple):
	value: VALUE

SIGNAL = Optional[Return]

EVALUATE = {}
EXECUTE = {}

def attach_evaluation_methods(python_scope):
	for _k, _v in list(python_scope.items()):
		if _k.startswith("_eval_"): table, key = EVALUATE, "expr"
		elif _k.startswith("_exec_"): table, key = EXECUTE, "stmt"
		else: continue
		_t = _v.__annotations__[key]
		assert isinstance(_t, type), (_k, _t)
		table[_t] = _v

class Interpreter:
	"""
	What every evaluation within one session has in common:
	the global frame, the resolver's table of scope-distances,
	and where `print` should send its output.

	Closures keep a reference to this, so the table they consult
	is the same one the resolver filled, even for code resolved
	later on (as in a REPL session).
	"""
	globals: Environment
	locals: dict[int, int]

	def __init__(self, globals_frame:Environment, output=None):
		assert globals_frame.parent is None, globals_frame
		self.globals = globals_frame
		self.locals = {}
		self.output = output  # None means sys.stdout, looked up at print-time.

	def resolve_variable(self, expr_id:int, distance:int):
		""" The resolver calls this at most once per expression. """
		prior = self.locals.setdefault(expr_id, distance)
		assert prior == distance, (expr_id, prior, distance)

	def distance(self, expr:syntax.Expr) -> Optional[int]:
		""" Absent means global. """
		return self.locals.get(expr.id)

	def evaluate(self, expr:syntax.Expr, frame:Environment) -> VALUE:
		try: fn = EVALUATE[type(expr)]
		except KeyError: raise NotImplementedError(type(expr), expr)
		return fn(self, expr, frame)

	def run_statement(self, stmt:syntax.Stmt, frame:Environment) -> SIGNAL:
		try: fn = EXECUTE[type(stmt)]
		except KeyError: raise NotImplementedError(type(stmt), stmt)
		return fn(self, stmt, frame)

	def run_block(self, statements:Sequence[syntax.Stmt], frame:Environment) -> SIGNAL:
		for stmt in statements:
			signal = self.run_statement(stmt, frame)
			if signal is not None: return signal
		return None

	def execute(self, statements:Sequence[syntax.Stmt], environment:Optional[Environment]=None):
		"""
		Entry point for the driver. Raises DenaRuntimeError on the first problem.
		A `return` at top level just ends the program early.
		"""
		self.run_block(statements, self.globals if environment is None else environment)
