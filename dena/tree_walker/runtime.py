import math
import operator
from .. import syntax
from ..ontology import Token, TokenKind
from ..environment import Environment
from .types import VALUE
from .evaluator import Interpreter, DenaRuntimeError, Return, SIGNAL, attach_evaluation_methods
from .values import Function, Closure

def type_name(value:VALUE) -> str:
	if value is None: return "Nil"
	if isinstance(value, bool): return "Boolean"
	if isinstance(value, (int, float)): return "Number"
	if isinstance(value, str): return "String"
	if isinstance(value, Function): return "Callable"
	return type(value).__name__

def is_truthy(value:VALUE, site:Token) -> bool:
	""" Zero, the empty string, false and nil are falsy. Callables are neither. """
	if isinstance(value, Function):
		raise DenaRuntimeError.at(site, "A Callable has no truth-value.")
	return bool(value)

def values_equal(a:VALUE, b:VALUE) -> bool:
	""" Never an error: values of different types are simply unequal. """
	if isinstance(a, Function) or isinstance(b, Function):
		return isinstance(a, Function) and isinstance(b, Function) and a == b
	return type_name(a) == type_name(b) and a == b

def stringify(value:VALUE) -> str:
	if value is None: return "nil"
	if value is True: return "true"
	if value is False: return "false"
	if isinstance(value, float):
		if not value.is_integer(): return repr(value)
		if value == 0 and math.copysign(1.0, value) < 0: return "-0"
		return "%d" % value
	if isinstance(value, str): return '"%s"' % value
	return str(value)

def _divide(a, b):
	# IEEE semantics rather than an exception.
	try: return a / b
	except ZeroDivisionError:
		if a == 0 or math.isnan(a): return math.nan
		return math.copysign(math.inf, a) * math.copysign(1.0, b)

_NUMBER, _STRING = "Number", "String"

OVERLOAD = {
	("+", _NUMBER, _NUMBER): operator.add,
	("+", _STRING, _STRING): operator.add,
	("-", _NUMBER, _NUMBER): operator.sub,
	("*", _NUMBER, _NUMBER): operator.mul,
	("/", _NUMBER, _NUMBER): _divide,
}
for _op, _fn in {">": operator.gt, ">=": operator.ge, "<": operator.lt, "<=": operator.le}.items():
	OVERLOAD[_op, _NUMBER, _NUMBER] = _fn
	OVERLOAD[_op, _STRING, _STRING] = _fn

EQUALITY = {
	"==": values_equal,
	"!=": lambda a, b: not values_equal(a, b),
}

def binary_op(op:Token, a:VALUE, b:VALUE) -> VALUE:
	if op.lexeme in EQUALITY:
		return EQUALITY[op.lexeme](a, b)
	left, right = type_name(a), type_name(b)
	try: fn = OVERLOAD[op.lexeme, left, right]
	except KeyError:
		message = "Operator '%s' is not defined for %s and %s." % (op.lexeme, left, right)
		raise DenaRuntimeError.at(op, message) from None
	return fn(a, b)

def unary_op(op:Token, a:VALUE) -> VALUE:
	if op.kind is TokenKind.BANG:
		return not is_truthy(a, op)
	if op.kind is TokenKind.MINUS and type_name(a) == _NUMBER:
		return -a
	raise DenaRuntimeError.at(op, "Operator '%s' is not defined for %s." % (op.lexeme, type_name(a)))

def _lookup(it:Interpreter, expr:syntax.Expr, name:Token, frame:Environment) -> VALUE:
	try: return frame.get(name.lexeme, it.distance(expr))
	except KeyError:
		raise DenaRuntimeError.at(name, "Undeclared variable '%s'." % name.lexeme) from None

###############################################################################

def _eval_literal(it:Interpreter, expr:syntax.Literal, frame:Environment):
	return expr.value

def _eval_grouping(it:Interpreter, expr:syntax.Grouping, frame:Environment):
	return it.evaluate(expr.expr, frame)

def _eval_unary(it:Interpreter, expr:syntax.Unary, frame:Environment):
	return unary_op(expr.op, it.evaluate(expr.expr, frame))

def _eval_binary(it:Interpreter, expr:syntax.Binary, frame:Environment):
	a = it.evaluate(expr.left, frame)
	b = it.evaluate(expr.right, frame)
	return binary_op(expr.op, a, b)

def _eval_logical(it:Interpreter, expr:syntax.Logical, frame:Environment):
	lhs = it.evaluate(expr.left, frame)
	shortcut = expr.op.kind is TokenKind.OR
	return lhs if is_truthy(lhs, expr.op) == shortcut else it.evaluate(expr.right, frame)

def _eval_variable(it:Interpreter, expr:syntax.Variable, frame:Environment):
	return _lookup(it, expr, expr.name, frame)

def _eval_assign(it:Interpreter, expr:syntax.Assign, frame:Environment):
	value = it.evaluate(expr.value, frame)
	if not frame.assign(expr.name.lexeme, value, it.distance(expr)):
		raise DenaRuntimeError.at(expr.name, "Undeclared variable '%s'." % expr.name.lexeme)
	return value

def _eval_call(it:Interpreter, expr:syntax.Call, frame:Environment):
	# A plain name in callee position is resolved against the call itself.
	if isinstance(expr.callee, syntax.Variable):
		function = _lookup(it, expr, expr.callee.name, frame)
	else:
		function = it.evaluate(expr.callee, frame)
	if not isinstance(function, Function):
		raise DenaRuntimeError.at(expr.paren, "Can only call functions, not %s." % type_name(function))
	if len(expr.arguments) != function.arity:
		pattern = "Function '%s' expected %d argument%s but got %d."
		plural = "" if function.arity == 1 else "s"
		message = pattern % (function.name, function.arity, plural, len(expr.arguments))
		raise DenaRuntimeError.at(expr.paren, message)
	args = [it.evaluate(a, frame) for a in expr.arguments]
	return function.apply(args)

def _eval_anon_function(it:Interpreter, expr:syntax.AnonFunction, frame:Environment):
	return Closure(it, expr, frame)

###############################################################################

def _exec_expression(it:Interpreter, stmt:syntax.ExpressionStmt, frame:Environment) -> SIGNAL:
	it.evaluate(stmt.expr, frame)

def _exec_print(it:Interpreter, stmt:syntax.Print, frame:Environment) -> SIGNAL:
	print(stringify(it.evaluate(stmt.expr, frame)), file=it.output)

def _exec_var_decl(it:Interpreter, stmt:syntax.VarDecl, frame:Environment) -> SIGNAL:
	frame.define(stmt.name.lexeme, it.evaluate(stmt.initializer, frame))

def _exec_block(it:Interpreter, stmt:syntax.Block, frame:Environment) -> SIGNAL:
	# The outer frame is untouched, so leaving by any route restores it.
	return it.run_block(stmt.statements, Environment(frame))

def _exec_if(it:Interpreter, stmt:syntax.If, frame:Environment) -> SIGNAL:
	if is_truthy(it.evaluate(stmt.predicate, frame), stmt.predicate.head()):
		return it.run_statement(stmt.then, frame)
	elif stmt.else_ is not None:
		return it.run_statement(stmt.else_, frame)

def _exec_while(it:Interpreter, stmt:syntax.While, frame:Environment) -> SIGNAL:
	site = stmt.condition.head()
	while is_truthy(it.evaluate(stmt.condition, frame), site):
		signal = it.run_statement(stmt.body, frame)
		if signal is not None: return signal

def _exec_function_decl(it:Interpreter, stmt:syntax.FunctionDecl, frame:Environment) -> SIGNAL:
	frame.define(stmt.name, Closure(it, stmt, frame))

def _exec_return(it:Interpreter, stmt:syntax.Return, frame:Environment) -> SIGNAL:
	return Return(None if stmt.value is None else it.evaluate(stmt.value, frame))

attach_evaluation_methods(globals())
