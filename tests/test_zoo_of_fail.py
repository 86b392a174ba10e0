from pathlib import Path
import io
import unittest
from unittest import mock

from dena.diagnostics import Report
from dena.resolution import Yuck
from dena.tree_walker.executive import new_interpreter, run_file

class Silence(Report):
	def __init__(self):
		super().__init__(verbose=False, max_issues=30)
		self.complain_to_console = mock.Mock()
	pass

base_folder = Path(__file__).parent.parent
zoo_fail = base_folder/"zoo/fail"

def _identify_problem(folder:Path, filename:str):
	specimen_path = folder / filename
	assert specimen_path.exists(), specimen_path
	report = Silence()
	try:
		run_file(specimen_path, new_interpreter(io.StringIO()), report)
	except Yuck as ex:
		assert 0 == report.complain_to_console.call_count
		assert report.sick()
		return ex.args[0]
	else:
		return "failed to fail"

class ZooOfFail(unittest.TestCase):
	""" Tests that assert about failure modes. """

	def expect(self, folder, cases):
		for basename in cases:
			with self.subTest(basename):
				self.assertEqual(folder, _identify_problem(zoo_fail / folder, basename + ".dena"))

	def test_00_parse(self):
		self.expect("parse", [
			"bad_character",
			"invalid_assignment",
			"missing_semicolon",
			"unterminated_string",
		])

	def test_01_resolve(self):
		self.expect("resolve", [
			"own_initializer",
			"own_initializer_call",
		])

	def test_02_runtime(self):
		self.expect("runtime", [
			"call_non_function",
			"callable_truth",
			"negate_string",
			"string_plus_number",
			"undeclared",
			"undeclared_assignment",
			"wrong_arity",
		])

	def test_every_specimen_is_covered(self):
		for folder in zoo_fail.iterdir():
			for specimen in folder.glob("*.dena"):
				with self.subTest(specimen.name):
					self.assertEqual(folder.name, _identify_problem(folder, specimen.name))

	def test_directory_is_not_a_program(self):
		self.assertEqual("read", _identify_problem(zoo_fail, "parse"))


if __name__ == '__main__':
	unittest.main()
