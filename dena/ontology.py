"""
These most-fundamental classes are separate from the rest
to avoid various circular-import scenarios. Tokens come out
of the scanner, every syntax node is some kind of Phrase,
and every complaint a phase can raise is some kind of DenaError.
"""
from enum import Enum, auto
from typing import NamedTuple, Any

class TokenKind(Enum):
	# Single-character punctuation
	LEFT_PAREN = auto()
	RIGHT_PAREN = auto()
	LEFT_BRACE = auto()
	RIGHT_BRACE = auto()
	COMMA = auto()
	DOT = auto()
	MINUS = auto()
	PLUS = auto()
	SEMICOLON = auto()
	SLASH = auto()
	STAR = auto()

	# One or two characters
	BANG = auto()
	BANG_EQUAL = auto()
	EQUAL = auto()
	EQUAL_EQUAL = auto()
	GREATER = auto()
	GREATER_EQUAL = auto()
	LESS = auto()
	LESS_EQUAL = auto()

	# Literals
	IDENTIFIER = auto()
	STRING = auto()
	NUMBER = auto()

	# Keywords
	AND = auto()
	CLASS = auto()
	ELSE = auto()
	FALSE = auto()
	FUN = auto()
	FOR = auto()
	IF = auto()
	NIL = auto()
	OR = auto()
	PRINT = auto()
	RETURN = auto()
	SUPER = auto()
	THIS = auto()
	TRUE = auto()
	VAR = auto()
	WHILE = auto()

	EOF = auto()

class Token(NamedTuple):
	""" Immutable. The offset is where the lexeme starts in the source text. """
	kind: TokenKind
	lexeme: str
	literal: Any
	line: int
	offset: int = 0

	def __repr__(self): return "<%s %r @%d>" % (self.kind.name, self.lexeme, self.line)

class Phrase:
	def head(self) -> Token:
		""" Return the token most worth pointing at when something goes wrong here. """
		raise NotImplementedError(type(self))

class DenaError(Exception):
	"""
	Base for every complaint about a Dena program, as distinct
	from bugs in the interpreter itself (which are assertions).
	"""
	line: int
	offset: int
	width: int
	message: str

	def __init__(self, line:int, offset:int, width:int, message:str):
		super().__init__(message)
		self.line, self.offset, self.width, self.message = line, offset, width, message

	@classmethod
	def at(cls, token:Token, message:str):
		return cls(token.line, token.offset, len(token.lexeme), message)

	def __str__(self): return "[line %d] %s" % (self.line, self.message)
