import unittest

from dena import syntax
from dena.environment import Environment
from dena.scanner import scan
from dena.parser import parse
from dena.resolution import Resolver, ResolutionError
from dena.tree_walker.evaluator import Interpreter

def _resolve(text):
	tokens, _ = scan(text)
	statements, errors = parse(tokens)
	assert not errors, errors
	interpreter = Interpreter(Environment())
	Resolver(interpreter).resolve(statements)
	return statements, interpreter

class ResolverTests(unittest.TestCase):

	def test_globals_are_not_recorded(self):
		statements, interpreter = _resolve("var a = 1; print a; a = 2;")
		self.assertEqual({}, interpreter.locals)

	def test_distance_counts_enclosing_blocks(self):
		statements, interpreter = _resolve("{ var a = 1; { { print a; } print a; } }")
		outer, = statements
		middle = outer.statements[1]
		innermost, second_print = middle.statements
		first_use = innermost.statements[0].expr
		second_use = second_print.expr
		self.assertEqual(2, interpreter.distance(first_use))
		self.assertEqual(1, interpreter.distance(second_use))

	def test_innermost_declaration_wins(self):
		statements, interpreter = _resolve("{ var a = 1; { var a = 2; print a; } }")
		use = statements[0].statements[1].statements[1].expr
		self.assertEqual(0, interpreter.distance(use))

	def test_assignment_is_recorded_against_the_assignment(self):
		statements, interpreter = _resolve("{ var a = 1; { a = 2; } }")
		assign = statements[0].statements[1].statements[0].expr
		self.assertIsInstance(assign, syntax.Assign)
		self.assertEqual(1, interpreter.distance(assign))

	def test_parameters_and_closures(self):
		statements, interpreter = _resolve("""
			fun outer(x) {
				fun inner() { return x; }
				return inner;
			}
		""")
		outer, = statements
		inner, ret = outer.body
		x_use = inner.body[0].value
		self.assertEqual(1, interpreter.distance(x_use))
		self.assertEqual(0, interpreter.distance(ret.value))

	def test_call_records_callee_against_the_call(self):
		statements, interpreter = _resolve("{ fun f() {} f(); }")
		call = statements[0].statements[1].expr
		self.assertIsInstance(call, syntax.Call)
		self.assertEqual(0, interpreter.distance(call))
		self.assertIsNone(interpreter.distance(call.callee))

	def test_recursive_function_sees_itself(self):
		statements, interpreter = _resolve("{ fun f(n) { return f(n); } }")
		fn = statements[0].statements[0]
		call = fn.body[0].value
		self.assertEqual(1, interpreter.distance(call))

	def test_anonymous_function_parameters(self):
		statements, interpreter = _resolve("var f = fun (a) { return a; };")
		anon = statements[0].initializer
		self.assertEqual(0, interpreter.distance(anon.body[0].value))

	def test_own_initializer_is_an_error(self):
		for text in ["{ var a = a; }", "{ var a = 1; { var a = a + 1; } }", "{ var f = f(); }"]:
			with self.subTest(text):
				with self.assertRaises(ResolutionError) as cm:
					_resolve(text)
				self.assertIn("own initializer", cm.exception.message)

	def test_own_initializer_at_global_scope_is_not_tracked(self):
		statements, interpreter = _resolve("var a = a;")
		self.assertEqual({}, interpreter.locals)

	def test_resolution_is_write_once(self):
		interpreter = Interpreter(Environment())
		interpreter.resolve_variable(7, 1)
		interpreter.resolve_variable(7, 1)
		with self.assertRaises(AssertionError):
			interpreter.resolve_variable(7, 2)

	def test_scope_underflow_is_a_bug(self):
		with self.assertRaises(AssertionError):
			Resolver(Interpreter(Environment())).end_scope()

if __name__ == '__main__':
	unittest.main()
