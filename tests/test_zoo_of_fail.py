from pathlib import Path
import unittest
from unittest import mock

from belated.diagnostics import Report
from belated.errors import ScriptError
from belated.front_end import parse_file
from belated.resolution import check_module, Yuck
from belated.tree_walker.executive import run_program

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
	module = parse_file(specimen_path, report)
	if module is None:
		assert report.sick()
		return "parse"
	try: check_module(module, report)
	except Yuck as ex:
		assert 0 == report.complain_to_console.call_count
		return ex.args[0]
	report.assert_no_issues()
	try:
		with mock.patch("belated.tree_walker.runtime.emit"):
			run_program(module, report)
	except ScriptError as ex:
		report.runtime_fault(ex)
		assert len(report.issues) == 1
		return "run"
	return "failed to fail"

class ZooOfFail(unittest.TestCase):
	""" Tests that assert about failure modes. """

	def expect(self, folder, cases):
		for basename in cases:
			with self.subTest(basename):
				self.assertEqual(folder, _identify_problem(zoo_fail / folder, basename + ".bel"))

	def test_00_syntax_error(self):
		self.expect("parse", [
			"pattern_without_initializer",
			"unknown_character",
		])

	def test_01_check(self):
		self.expect("check", [
			"declared_twice",
			"duplicate_parameter",
			"return_at_top_level",
		])

	def test_02_run(self):
		self.expect("run", [
			"written_twice",
			"read_too_soon",
			"pause_inside_expression",
			"early_write_from_closure",
		])

	def test_runtime_fault_points_at_the_culprit(self):
		report = Silence()
		module = parse_file(zoo_fail/"run"/"written_twice.bel", report)
		with self.assertRaises(ScriptError) as cm:
			run_program(module, report)
		report.runtime_fault(cm.exception)
		text = report.issues[0].as_text()
		self.assertIn("Uncaught TypeError: Assignment to constant variable 'answer'", text)
		self.assertIn("answer = 43;", text)

if __name__ == '__main__':
	unittest.main()
