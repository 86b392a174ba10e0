import io
import unittest
from contextlib import redirect_stdout, redirect_stderr
from pathlib import Path
from unittest import mock

from dena.cmdline import parser, run

base_folder = Path(__file__).parent.parent

def _run(*argv) -> tuple[int, str, str]:
	out, err = io.StringIO(), io.StringIO()
	with redirect_stdout(out), redirect_stderr(err):
		code = run(parser.parse_args(list(argv)))
	return code, out.getvalue(), err.getvalue()

class CommandLineTests(unittest.TestCase):

	def test_eval(self):
		code, out, err = _run("-e", "print 1 + 2;")
		self.assertEqual(0, code)
		self.assertEqual("3\n", out)

	def test_failure_is_reported_and_exits_one(self):
		code, out, err = _run("-e", "print nope;")
		self.assertEqual(1, code)
		self.assertEqual("", out)
		self.assertIn("Undeclared variable 'nope'.", err)

	def test_check_does_not_execute(self):
		code, out, err = _run("--check", "-e", "print 1;")
		self.assertEqual(0, code)
		self.assertEqual("", out)
		self.assertIn("plausible", err)

	def test_check_still_finds_scope_trouble(self):
		code, out, err = _run("-c", "-e", "{ var a = a; }")
		self.assertEqual(1, code)
		self.assertIn("own initializer", err)

	def test_runs_a_file(self):
		code, out, err = _run(str(base_folder / "examples" / "hello_world.dena"))
		self.assertEqual(0, code)
		self.assertEqual('"Hello, World!"\n', out)

	def test_missing_file(self):
		code, out, err = _run(str(base_folder / "no such program.dena"))
		self.assertEqual(1, code)
		self.assertIn("no file called", err)

	def test_verbose_talks_about_the_phases(self):
		code, out, err = _run("-v", "-e", "print 1;")
		self.assertEqual(0, code)
		self.assertIn("Scanned", err)
		self.assertIn("Resolved", err)

	def test_too_many_issues(self):
		text = "\n".join(["print ;"] * 20)
		code, out, err = _run("-e", text)
		self.assertEqual(1, code)
		self.assertIn("Giving up", err)

	def test_program_and_eval_are_exclusive(self):
		err = io.StringIO()
		with redirect_stderr(err), self.assertRaises(SystemExit) as cm:
			parser.parse_args(["program.dena", "-e", "print 1;"])
		self.assertEqual(2, cm.exception.code)
		self.assertIn("not allowed with", err.getvalue())

	def test_runaway_recursion_is_reported_not_raised(self):
		with mock.patch("dena.tree_walker.executive.run_text", side_effect=RecursionError):
			code, out, err = _run("-e", "fun f() { return f(); } f();")
		self.assertEqual(1, code)
		self.assertIn("recursed too deeply", err)

class InteractiveTests(unittest.TestCase):

	def test_lines_share_the_global_frame(self):
		lines = ["var a = 20;", "fun f(x) { return a + x; }", "print f(22);", EOFError]
		with mock.patch("builtins.input", side_effect=lines):
			code, out, err = _run()
		self.assertEqual(0, code)
		self.assertEqual("42\n", out)

	def test_mistakes_are_forgiven(self):
		lines = ["print nope;", "print 1 +;", "print 5;", ""]
		with mock.patch("builtins.input", side_effect=lines):
			code, out, err = _run()
		self.assertEqual(0, code)
		self.assertEqual("5\n", out)
		self.assertIn("Undeclared variable", err)
		self.assertIn("Expect expression", err)

	def test_runaway_recursion_ends_the_session(self):
		lines = ["print 1;", "print 2;"]
		with mock.patch("builtins.input", side_effect=lines):
			with mock.patch("dena.tree_walker.executive.run_text", side_effect=[None, RecursionError]):
				code, out, err = _run()
		self.assertEqual(1, code)
		self.assertIn("recursed too deeply", err)


if __name__ == '__main__':
	unittest.main()
