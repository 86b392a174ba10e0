"""
The set of parse-nodes in simple form.
The parser calls these constructors top-down as it recognizes each phrase.

Every expression gets a serial number at construction. The resolver keys
its table of scope-distances by that number, so it must never be reused.
Statements need no such identity.
"""
from itertools import count
from typing import Optional, Sequence, Any
from .ontology import Phrase, Token

_serial = count(1)

class Expr(Phrase):
	id: int
	def __init__(self): self.id = next(_serial)

class Stmt(Phrase):
	pass

###############################################################################

class Literal(Expr):
	def __init__(self, value:Any, token:Token):
		super().__init__()
		self.value, self.token = value, token
	def head(self): return self.token
	def __repr__(self): return "<lit %r>" % (self.value,)

class Grouping(Expr):
	def __init__(self, expr:Expr):
		super().__init__()
		self.expr = expr
	def head(self): return self.expr.head()

class Unary(Expr):
	def __init__(self, op:Token, expr:Expr):
		super().__init__()
		self.op, self.expr = op, expr
	def head(self): return self.op

class Binary(Expr):
	def __init__(self, left:Expr, op:Token, right:Expr):
		super().__init__()
		self.left, self.op, self.right = left, op, right
	def head(self): return self.op

class Logical(Expr):
	""" The operator is either `and` or `or`; both short-circuit. """
	def __init__(self, left:Expr, op:Token, right:Expr):
		super().__init__()
		self.left, self.op, self.right = left, op, right
	def head(self): return self.op

class Variable(Expr):
	def __init__(self, name:Token):
		super().__init__()
		self.name = name
	def head(self): return self.name
	def __repr__(self): return "<var %s#%d>" % (self.name.lexeme, self.id)

class Assign(Expr):
	def __init__(self, name:Token, value:Expr):
		super().__init__()
		self.name, self.value = name, value
	def head(self): return self.name

class Call(Expr):
	def __init__(self, callee:Expr, paren:Token, arguments:Sequence[Expr]):
		super().__init__()
		self.callee, self.paren, self.arguments = callee, paren, arguments
	def head(self): return self.paren

class AnonFunction(Expr):
	name = "anonymous"
	def __init__(self, keyword:Token, params:Sequence[Token], body:Sequence[Stmt]):
		super().__init__()
		self.keyword, self.params, self.body = keyword, params, body
	def head(self): return self.keyword

###############################################################################

class ExpressionStmt(Stmt):
	def __init__(self, expr:Expr): self.expr = expr
	def head(self): return self.expr.head()

class Print(Stmt):
	def __init__(self, expr:Expr): self.expr = expr
	def head(self): return self.expr.head()

class VarDecl(Stmt):
	def __init__(self, name:Token, initializer:Expr):
		self.name, self.initializer = name, initializer
	def head(self): return self.name

class Block(Stmt):
	def __init__(self, statements:Sequence[Stmt]): self.statements = statements

class If(Stmt):
	def __init__(self, predicate:Expr, then:Stmt, else_:Optional[Stmt]):
		self.predicate, self.then, self.else_ = predicate, then, else_
	def head(self): return self.predicate.head()

class While(Stmt):
	def __init__(self, condition:Expr, body:Stmt):
		self.condition, self.body = condition, body
	def head(self): return self.condition.head()

class FunctionDecl(Stmt):
	def __init__(self, name_token:Token, params:Sequence[Token], body:Sequence[Stmt]):
		self.name_token, self.params, self.body = name_token, params, body
	@property
	def name(self): return self.name_token.lexeme
	def head(self): return self.name_token
	def __repr__(self): return "<fun %s/%d>" % (self.name, len(self.params))

class Return(Stmt):
	def __init__(self, value:Optional[Expr]): self.value = value
