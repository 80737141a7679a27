from pathlib import Path
import io
import unittest
from unittest import mock

from belated import cmdline

base_folder = Path(__file__).parent.parent
examples = base_folder/"examples"
zoo_fail = base_folder/"zoo/fail"

def _invoke(*argv):
	""" Returns the exit status, what was printed, and what went to stderr. """
	printed = []
	args = cmdline.parser.parse_args([str(a) for a in argv])
	with mock.patch("belated.tree_walker.runtime.emit", printed.append):
		with mock.patch("sys.stderr", new_callable=io.StringIO) as stderr:
			status = cmdline.run(args)
	return status, printed, stderr.getvalue()

class CommandLineTests(unittest.TestCase):

	def test_runs_a_program(self):
		status, printed, _ = _invoke(examples/"write_once.bel")
		self.assertIsNone(status)
		self.assertEqual("undefined", printed[0])

	def test_check_only(self):
		status, printed, complaint = _invoke("--check", examples/"tasks.bel")
		self.assertIsNone(status)
		self.assertEqual([], printed)
		self.assertIn("Looks plausible", complaint)

	def test_parse_failure(self):
		status, printed, complaint = _invoke(zoo_fail/"parse"/"pattern_without_initializer.bel")
		self.assertEqual(1, status)
		self.assertIn("confused", complaint)

	def test_static_failure(self):
		status, printed, complaint = _invoke(zoo_fail/"check"/"declared_twice.bel")
		self.assertEqual(1, status)
		self.assertIn("declared more than once", complaint)

	def test_runtime_failure(self):
		status, printed, complaint = _invoke(zoo_fail/"run"/"read_too_soon.bel")
		self.assertEqual(1, status)
		self.assertIn("Uncaught ReferenceError: Cannot access 'later' before initialization", complaint)

	def test_missing_file(self):
		status, _, complaint = _invoke(base_folder/"no_such_program.bel")
		self.assertEqual(1, status)
		self.assertIn("I see no file called", complaint)

	def test_verbose_narrates_tasks(self):
		status, printed, notes = _invoke("-v", examples/"tasks.bel")
		self.assertIsNone(status)
		self.assertIn("Paused producer#2", notes)

	def test_too_many_issues(self):
		status, _, complaint = _invoke("--max-issues", "1", zoo_fail/"check"/"declared_twice.bel")
		self.assertEqual(1, status)
		self.assertIn("Giving up", complaint)

if __name__ == '__main__':
	unittest.main()
