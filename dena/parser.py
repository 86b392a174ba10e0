"""
Recursive descent from tokens to statements.

Each grammar rule is a method; precedence climbs from `_assignment` down to
`_primary`. The one piece of sugar is `for`, which comes out as a block
around a `while` loop, so nothing downstream ever hears about it.

When a rule cannot make sense of the tokens, it raises a ParseError. The
nearest enclosing declaration catches it, files it, and skips ahead to
what looks like the next statement boundary. That way one typo costs one
complaint rather than a cascade, and all the complaints come out together.
"""
from typing import Optional
from .ontology import TokenKind, Token, DenaError
from . import syntax

class ParseError(DenaError):
	pass

MAX_ARGUMENTS = 255

_SYNCHRONIZING = frozenset({
	TokenKind.CLASS, TokenKind.FUN, TokenKind.VAR, TokenKind.FOR,
	TokenKind.IF, TokenKind.WHILE, TokenKind.PRINT, TokenKind.RETURN,
})

_EQUALITY = (TokenKind.BANG_EQUAL, TokenKind.EQUAL_EQUAL)
_COMPARISON = (TokenKind.GREATER, TokenKind.GREATER_EQUAL, TokenKind.LESS, TokenKind.LESS_EQUAL)
_TERM = (TokenKind.MINUS, TokenKind.PLUS)
_FACTOR = (TokenKind.SLASH, TokenKind.STAR)
_UNARY = (TokenKind.BANG, TokenKind.MINUS)

class Parser:
	errors: list[ParseError]

	def __init__(self, tokens:list[Token]):
		assert tokens and tokens[-1].kind is TokenKind.EOF, tokens
		self._tokens = tokens
		self._current = 0
		self.errors = []

	def parse(self) -> list[syntax.Stmt]:
		statements = []
		while not self._at_end():
			stmt = self._declaration()
			if stmt is not None: statements.append(stmt)
		return statements

	# Declarations and statements

	def _declaration(self) -> Optional[syntax.Stmt]:
		try:
			if self._check(TokenKind.FUN) and self._check_next(TokenKind.IDENTIFIER):
				self._advance()
				return self._function_declaration()
			if self._match(TokenKind.VAR): return self._var_declaration()
			return self._statement()
		except ParseError as ex:
			self.errors.append(ex)
			self._synchronize()
			return None

	def _function_declaration(self) -> syntax.FunctionDecl:
		name = self._consume(TokenKind.IDENTIFIER, "Expect function name.")
		params, body = self._function_tail("function")
		return syntax.FunctionDecl(name, params, body)

	def _function_tail(self, kind:str):
		self._consume(TokenKind.LEFT_PAREN, "Expect '(' after %s name." % kind)
		params = []
		if not self._check(TokenKind.RIGHT_PAREN):
			while True:
				if len(params) >= MAX_ARGUMENTS:
					self._complain(self._peek(), "Can't have more than %d parameters." % MAX_ARGUMENTS)
				params.append(self._consume(TokenKind.IDENTIFIER, "Expect parameter name."))
				if not self._match(TokenKind.COMMA): break
		self._consume(TokenKind.RIGHT_PAREN, "Expect ')' after parameters.")
		self._consume(TokenKind.LEFT_BRACE, "Expect '{' before %s body." % kind)
		return params, self._block()

	def _var_declaration(self) -> syntax.VarDecl:
		name = self._consume(TokenKind.IDENTIFIER, "Expect variable name.")
		if self._match(TokenKind.EQUAL):
			initializer = self._expression()
		else:
			initializer = syntax.Literal(None, name)
		self._consume(TokenKind.SEMICOLON, "Expect ';' after variable declaration.")
		return syntax.VarDecl(name, initializer)

	def _statement(self) -> syntax.Stmt:
		if self._match(TokenKind.FOR): return self._for_statement()
		if self._match(TokenKind.IF): return self._if_statement()
		if self._match(TokenKind.PRINT): return self._print_statement()
		if self._match(TokenKind.RETURN): return self._return_statement()
		if self._match(TokenKind.WHILE): return self._while_statement()
		if self._match(TokenKind.LEFT_BRACE): return syntax.Block(self._block())
		return self._expression_statement()

	def _for_statement(self) -> syntax.Block:
		keyword = self._previous()
		self._consume(TokenKind.LEFT_PAREN, "Expect '(' after 'for'.")
		if self._match(TokenKind.SEMICOLON): initializer = None
		elif self._match(TokenKind.VAR): initializer = self._var_declaration()
		else: initializer = self._expression_statement()

		if self._check(TokenKind.SEMICOLON): condition = syntax.Literal(True, keyword)
		else: condition = self._expression()
		self._consume(TokenKind.SEMICOLON, "Expect ';' after loop condition.")

		increment = None if self._check(TokenKind.RIGHT_PAREN) else self._expression()
		self._consume(TokenKind.RIGHT_PAREN, "Expect ')' after for clauses.")
		body = self._statement()

		inner = [body] if increment is None else [body, syntax.ExpressionStmt(increment)]
		loop = syntax.While(condition, syntax.Block(inner))
		return syntax.Block([loop] if initializer is None else [initializer, loop])

	def _if_statement(self) -> syntax.If:
		self._consume(TokenKind.LEFT_PAREN, "Expect '(' after 'if'.")
		predicate = self._expression()
		self._consume(TokenKind.RIGHT_PAREN, "Expect ')' after if condition.")
		then = self._statement()
		else_ = self._statement() if self._match(TokenKind.ELSE) else None
		return syntax.If(predicate, then, else_)

	def _print_statement(self) -> syntax.Print:
		value = self._expression()
		self._consume(TokenKind.SEMICOLON, "Expect ';' after value.")
		return syntax.Print(value)

	def _return_statement(self) -> syntax.Return:
		value = None if self._check(TokenKind.SEMICOLON) else self._expression()
		self._consume(TokenKind.SEMICOLON, "Expect ';' after return value.")
		return syntax.Return(value)

	def _while_statement(self) -> syntax.While:
		self._consume(TokenKind.LEFT_PAREN, "Expect '(' after 'while'.")
		condition = self._expression()
		self._consume(TokenKind.RIGHT_PAREN, "Expect ')' after condition.")
		return syntax.While(condition, self._statement())

	def _block(self) -> list[syntax.Stmt]:
		statements = []
		while not self._check(TokenKind.RIGHT_BRACE) and not self._at_end():
			stmt = self._declaration()
			if stmt is not None: statements.append(stmt)
		self._consume(TokenKind.RIGHT_BRACE, "Expect '}' after block.")
		return statements

	def _expression_statement(self) -> syntax.ExpressionStmt:
		expr = self._expression()
		self._consume(TokenKind.SEMICOLON, "Expect ';' after expression.")
		return syntax.ExpressionStmt(expr)

	# Expressions

	def _expression(self) -> syntax.Expr:
		return self._assignment()

	def _assignment(self) -> syntax.Expr:
		expr = self._or()
		if self._match(TokenKind.EQUAL):
			equals = self._previous()
			value = self._assignment()
			if isinstance(expr, syntax.Variable):
				return syntax.Assign(expr.name, value)
			# Reported, but the parse carries on from here.
			self._complain(equals, "Invalid assignment target.")
		return expr

	def _or(self) -> syntax.Expr:
		expr = self._and()
		while self._match(TokenKind.OR):
			op = self._previous()
			expr = syntax.Logical(expr, op, self._and())
		return expr

	def _and(self) -> syntax.Expr:
		expr = self._binary(_EQUALITY)
		while self._match(TokenKind.AND):
			op = self._previous()
			expr = syntax.Logical(expr, op, self._binary(_EQUALITY))
		return expr

	_NEXT_TIER = {_EQUALITY: _COMPARISON, _COMPARISON: _TERM, _TERM: _FACTOR}

	def _binary(self, operators) -> syntax.Expr:
		""" All the left-associative binary tiers share this one shape. """
		tier = self._NEXT_TIER.get(operators)
		operand = (lambda: self._binary(tier)) if tier else self._unary
		expr = operand()
		while self._match(*operators):
			op = self._previous()
			expr = syntax.Binary(expr, op, operand())
		return expr

	def _unary(self) -> syntax.Expr:
		if self._match(*_UNARY):
			op = self._previous()
			return syntax.Unary(op, self._unary())
		return self._call()

	def _call(self) -> syntax.Expr:
		expr = self._primary()
		while self._match(TokenKind.LEFT_PAREN):
			expr = self._finish_call(expr)
		return expr

	def _finish_call(self, callee:syntax.Expr) -> syntax.Call:
		arguments = []
		if not self._check(TokenKind.RIGHT_PAREN):
			while True:
				if len(arguments) >= MAX_ARGUMENTS:
					self._complain(self._peek(), "Can't have more than %d arguments." % MAX_ARGUMENTS)
				arguments.append(self._expression())
				if not self._match(TokenKind.COMMA): break
		paren = self._consume(TokenKind.RIGHT_PAREN, "Expect ')' after arguments.")
		return syntax.Call(callee, paren, arguments)

	def _primary(self) -> syntax.Expr:
		token = self._peek()
		if self._match(TokenKind.FALSE): return syntax.Literal(False, token)
		if self._match(TokenKind.TRUE): return syntax.Literal(True, token)
		if self._match(TokenKind.NIL): return syntax.Literal(None, token)
		if self._match(TokenKind.NUMBER, TokenKind.STRING): return syntax.Literal(token.literal, token)
		if self._match(TokenKind.IDENTIFIER): return syntax.Variable(token)
		if self._match(TokenKind.FUN):
			params, body = self._function_tail("anonymous function")
			return syntax.AnonFunction(token, params, body)
		if self._match(TokenKind.LEFT_PAREN):
			expr = self._expression()
			self._consume(TokenKind.RIGHT_PAREN, "Expect ')' after expression.")
			return syntax.Grouping(expr)
		raise self._error(token, "Expect expression.")

	# Token-stream plumbing

	def _match(self, *kinds:TokenKind) -> bool:
		for kind in kinds:
			if self._check(kind):
				self._advance()
				return True
		return False

	def _consume(self, kind:TokenKind, message:str) -> Token:
		if self._check(kind): return self._advance()
		raise self._error(self._peek(), message)

	def _check(self, kind:TokenKind) -> bool:
		return self._peek().kind is kind

	def _check_next(self, kind:TokenKind) -> bool:
		if self._at_end(): return False
		return self._tokens[self._current + 1].kind is kind

	def _advance(self) -> Token:
		if not self._at_end(): self._current += 1
		return self._previous()

	def _at_end(self) -> bool: return self._peek().kind is TokenKind.EOF
	def _peek(self) -> Token: return self._tokens[self._current]
	def _previous(self) -> Token: return self._tokens[self._current - 1]

	@staticmethod
	def _error(token:Token, message:str) -> ParseError:
		if token.kind is TokenKind.EOF: message += " (at end)"
		return ParseError.at(token, message)

	def _complain(self, token:Token, message:str):
		self.errors.append(self._error(token, message))

	def _synchronize(self):
		self._advance()
		while not self._at_end():
			if self._previous().kind is TokenKind.SEMICOLON: return
			if self._peek().kind in _SYNCHRONIZING: return
			self._advance()

def parse(tokens:list[Token]) -> tuple[list[syntax.Stmt], list[ParseError]]:
	parser = Parser(tokens)
	statements = parser.parse()
	return statements, parser.errors
