"""
Characters in, tokens out.

The lexicon is a booze-tools MiniScan definition. Each rule's action hands
the scanner a token kind together with the extent of the match and its
literal value. Errors are just another kind of token at this level: the
`Scanner` collects them so the front-end can report every one of them
together, and the scan carries on past each.
"""
from boozetools.scanning import miniscan
from boozetools.scanning.engine import IterableScanner
from .ontology import TokenKind, Token, DenaError

class LexError(DenaError):
	pass

PUNCTUATION = {
	"(": TokenKind.LEFT_PAREN,
	")": TokenKind.RIGHT_PAREN,
	"{": TokenKind.LEFT_BRACE,
	"}": TokenKind.RIGHT_BRACE,
	",": TokenKind.COMMA,
	".": TokenKind.DOT,
	"-": TokenKind.MINUS,
	"+": TokenKind.PLUS,
	";": TokenKind.SEMICOLON,
	"/": TokenKind.SLASH,
	"*": TokenKind.STAR,
	"!": TokenKind.BANG,
	"!=": TokenKind.BANG_EQUAL,
	"=": TokenKind.EQUAL,
	"==": TokenKind.EQUAL_EQUAL,
	">": TokenKind.GREATER,
	">=": TokenKind.GREATER_EQUAL,
	"<": TokenKind.LESS,
	"<=": TokenKind.LESS_EQUAL,
}

RESERVED = {
	kind.name.lower(): kind
	for kind in (
		TokenKind.AND, TokenKind.CLASS, TokenKind.ELSE, TokenKind.FALSE,
		TokenKind.FUN, TokenKind.FOR, TokenKind.IF, TokenKind.NIL,
		TokenKind.OR, TokenKind.PRINT, TokenKind.RETURN, TokenKind.SUPER,
		TokenKind.THIS, TokenKind.TRUE, TokenKind.VAR, TokenKind.WHILE,
	)
}

ERROR = "error"

# The longest match wins; among equals, the rule given first.
LEXICON = miniscan.Definition("Dena")
LEXICON.ignore(r"\s+")
LEXICON.ignore(r"\/\/[^\n]*")

@LEXICON.on(r"\d+(\.\d+)?")
def scan_number(yy:IterableScanner): yy.token(TokenKind.NUMBER, (yy.slice(), float(yy.match())))

@LEXICON.on(r"[\l_]\w*")
def scan_word(yy:IterableScanner):
	yy.token(RESERVED.get(yy.match(), TokenKind.IDENTIFIER), (yy.slice(), None))

@LEXICON.on(r'"[^"]*"')
def scan_string(yy:IterableScanner): yy.token(TokenKind.STRING, (yy.slice(), yy.match()[1:-1]))

@LEXICON.on(r'"[^"]*')
def scan_unterminated(yy:IterableScanner): yy.token(ERROR, (yy.slice(), "Unterminated string."))

@LEXICON.on(r"[!=<>]=?|[(){},.\-+;/*]")
def scan_punctuation(yy:IterableScanner): yy.token(PUNCTUATION[yy.match()], (yy.slice(), None))

@LEXICON.on(r"{ANY}")
def scan_bogus(yy:IterableScanner): yy.token(ERROR, (yy.slice(), "Unexpected character %r." % yy.match()))

class Scanner:
	errors: list[LexError]

	def __init__(self, source:str):
		self._source = source
		self._tokens = []
		self._line, self._seen = 1, 0
		self.errors = []

	def _line_at(self, offset:int) -> int:
		# Offsets only ever increase, so count the newlines passed since last time.
		self._line += self._source.count("\n", self._seen, offset)
		self._seen = offset
		return self._line

	def scan_tokens(self) -> list[Token]:
		"""
		Not restartable: call once. The result always ends with an EOF token,
		even if there were errors along the way.
		"""
		for kind, (extent, payload) in LEXICON.scan(self._source):
			line = self._line_at(extent.start)
			lexeme = self._source[extent]
			if kind == ERROR: self.errors.append(LexError(line, extent.start, len(lexeme), payload))
			else: self._tokens.append(Token(kind, lexeme, payload, line, extent.start))
		end = len(self._source)
		self._tokens.append(Token(TokenKind.EOF, "", None, self._line_at(end), end))
		return self._tokens

def scan(source:str) -> tuple[list[Token], list[LexError]]:
	scanner = Scanner(source)
	tokens = scanner.scan_tokens()
	return tokens, scanner.errors
