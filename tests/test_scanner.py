import unittest

from dena.ontology import TokenKind
from dena.scanner import scan, Scanner, LEXICON, ERROR

def _kinds(text):
	tokens, errors = scan(text)
	assert not errors, errors
	return [t.kind for t in tokens]

class ScannerTests(unittest.TestCase):

	def test_punctuation_prefers_the_longer_lexeme(self):
		self.assertEqual([
			TokenKind.BANG_EQUAL, TokenKind.EQUAL_EQUAL, TokenKind.LESS_EQUAL,
			TokenKind.GREATER, TokenKind.EQUAL, TokenKind.BANG, TokenKind.EOF,
		], _kinds("!= == <= > = !"))

	def test_keywords_and_identifiers(self):
		self.assertEqual([
			TokenKind.VAR, TokenKind.IDENTIFIER, TokenKind.FUN, TokenKind.IDENTIFIER,
			TokenKind.WHILE, TokenKind.OR, TokenKind.NIL, TokenKind.EOF,
		], _kinds("var variable fun fun_thing while or nil"))

	def test_literals(self):
		tokens, errors = scan('12 3.5 "some text"')
		self.assertEqual([], errors)
		self.assertEqual(12.0, tokens[0].literal)
		self.assertIsInstance(tokens[0].literal, float)
		self.assertEqual(3.5, tokens[1].literal)
		self.assertEqual("some text", tokens[2].literal)
		self.assertEqual('"some text"', tokens[2].lexeme)

	def test_trailing_dot_is_not_part_of_the_number(self):
		self.assertEqual([TokenKind.NUMBER, TokenKind.DOT, TokenKind.EOF], _kinds("1."))

	def test_comments_and_whitespace_vanish(self):
		self.assertEqual([TokenKind.PRINT, TokenKind.NUMBER, TokenKind.SEMICOLON, TokenKind.EOF],
			_kinds("print 1; // and the rest is silence\n\t  "))

	def test_lines_and_offsets(self):
		tokens, _ = scan('a\n"two\nlines"\nb')
		a, string, b, eof = tokens
		self.assertEqual((1, 0), (a.line, a.offset))
		self.assertEqual((2, 2), (string.line, string.offset))
		self.assertEqual(4, b.line)
		self.assertEqual(TokenKind.EOF, eof.kind)
		self.assertEqual(len('a\n"two\nlines"\nb'), eof.offset)

	def test_all_errors_are_collected(self):
		tokens, errors = scan('var a = 1 @ 2;\nvar b = # 3;\nprint "oops')
		self.assertEqual(3, len(errors))
		self.assertEqual([1, 2, 3], [e.line for e in errors])
		self.assertIn("Unexpected character", errors[0].message)
		self.assertIn("Unterminated string", errors[2].message)
		# Scanning carried on regardless, and still ends properly.
		self.assertEqual(TokenKind.EOF, tokens[-1].kind)
		self.assertIn(TokenKind.PRINT, [t.kind for t in tokens])

	def test_slash_is_not_a_comment(self):
		self.assertEqual([TokenKind.NUMBER, TokenKind.SLASH, TokenKind.NUMBER, TokenKind.EOF], _kinds("6 / 3 //"))

	def test_lexicon_yields_errors_in_line(self):
		kinds = [kind for kind, _ in LEXICON.scan('x $ "open')]
		self.assertEqual([TokenKind.IDENTIFIER, ERROR, ERROR], kinds)

	def test_every_character_is_accounted_for(self):
		tokens, errors = scan("a\x0c\x0bb\r\n\x00c")
		self.assertEqual(["a", "b", "c", ""], [t.lexeme for t in tokens])
		self.assertEqual(1, len(errors))
		self.assertEqual((2, 6), (errors[0].line, errors[0].offset))

	def test_always_ends_with_eof(self):
		scanner = Scanner("")
		self.assertEqual([TokenKind.EOF], [t.kind for t in scanner.scan_tokens()])
		self.assertEqual([], scanner.errors)

if __name__ == '__main__':
	unittest.main()
