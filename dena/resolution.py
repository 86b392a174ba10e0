"""
All the scope-distance stuff goes here.
By the time this pass is finished, every local variable reference and
assignment has told the interpreter how many frames out its binding lives.

Globals are not tracked: a name found in no open scope gets no entry,
and the interpreter then looks for it in the global frame.
"""
from typing import Sequence
from boozetools.support.foundation import Visitor
from . import syntax
from .ontology import DenaError, Token

class Yuck(Exception):
	"""
	The first argument will be the name of the phase fraught with error.
	The end-user might not care about this, but it's handy for testing.
	"""
	pass

class ResolutionError(DenaError):
	pass

class Resolver(Visitor):
	"""
	A single top-down walk, keeping a stack of the lexical scopes that
	would exist at run-time. Each scope maps a name to whether its
	definition is complete yet; a name that is declared but not yet
	defined is one whose initializer is still being resolved.

	The "interpreter" need only offer a `resolve_variable(id, distance)` method.
	"""
	_scopes: list[dict[str, bool]]

	def __init__(self, interpreter):
		self._interpreter = interpreter
		self._scopes = []

	def resolve(self, statements:Sequence[syntax.Stmt]):
		""" Raises ResolutionError on the first problem; does not try to recover. """
		for stmt in statements: self.visit(stmt)

	def begin_scope(self): self._scopes.append({})

	def end_scope(self):
		assert self._scopes, "Scope stack underflow"
		self._scopes.pop()

	def declare(self, name:Token):
		if self._scopes: self._scopes[-1][name.lexeme] = False

	def define(self, name:Token):
		if self._scopes: self._scopes[-1][name.lexeme] = True

	def _resolve_local(self, expr:syntax.Expr, name:Token):
		depth = len(self._scopes)
		for index in reversed(range(depth)):
			if name.lexeme in self._scopes[index]:
				self._interpreter.resolve_variable(expr.id, depth - 1 - index)
				return

	def _resolve_reference(self, expr:syntax.Expr, name:Token):
		if self._scopes and self._scopes[-1].get(name.lexeme) is False:
			raise ResolutionError.at(name, "Can't read local variable '%s' in its own initializer." % name.lexeme)
		self._resolve_local(expr, name)

	def _resolve_function(self, sub):
		self.begin_scope()
		for param in sub.params:
			self.declare(param)
			self.define(param)
		self.resolve(sub.body)
		self.end_scope()

	# Statements

	def visit_Block(self, stmt:syntax.Block):
		self.begin_scope()
		self.resolve(stmt.statements)
		self.end_scope()

	def visit_VarDecl(self, stmt:syntax.VarDecl):
		self.declare(stmt.name)
		self.visit(stmt.initializer)
		self.define(stmt.name)

	def visit_FunctionDecl(self, stmt:syntax.FunctionDecl):
		# Defined before the body is resolved, so the function may call itself.
		self.declare(stmt.name_token)
		self.define(stmt.name_token)
		self._resolve_function(stmt)

	def visit_ExpressionStmt(self, stmt:syntax.ExpressionStmt): self.visit(stmt.expr)
	def visit_Print(self, stmt:syntax.Print): self.visit(stmt.expr)

	def visit_If(self, stmt:syntax.If):
		self.visit(stmt.predicate)
		self.visit(stmt.then)
		if stmt.else_ is not None: self.visit(stmt.else_)

	def visit_While(self, stmt:syntax.While):
		self.visit(stmt.condition)
		self.visit(stmt.body)

	def visit_Return(self, stmt:syntax.Return):
		if stmt.value is not None: self.visit(stmt.value)

	# Expressions

	def visit_Literal(self, expr:syntax.Literal): pass
	def visit_Grouping(self, expr:syntax.Grouping): self.visit(expr.expr)
	def visit_Unary(self, expr:syntax.Unary): self.visit(expr.expr)

	def visit_Binary(self, expr:syntax.Binary):
		self.visit(expr.left)
		self.visit(expr.right)

	def visit_Logical(self, expr:syntax.Logical):
		self.visit(expr.left)
		self.visit(expr.right)

	def visit_Variable(self, expr:syntax.Variable):
		self._resolve_reference(expr, expr.name)

	def visit_Assign(self, expr:syntax.Assign):
		self.visit(expr.value)
		self._resolve_local(expr, expr.name)

	def visit_Call(self, expr:syntax.Call):
		# The interpreter looks up a plain-name callee by the call's own id.
		if isinstance(expr.callee, syntax.Variable):
			self._resolve_reference(expr, expr.callee.name)
		else:
			self.visit(expr.callee)
		for arg in expr.arguments:
			self.visit(arg)

	def visit_AnonFunction(self, expr:syntax.AnonFunction):
		self._resolve_function(expr)
