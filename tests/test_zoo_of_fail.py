import io
import unittest

from common import Silence, zoo_fail
from moth.executive import Session, State

def _identify_problem(folder, filename:str):
	""" Which phase first noticed something wrong with the specimen? """
	specimen_path = folder / filename
	assert specimen_path.exists(), specimen_path
	report = Silence()
	session = Session(report, out=io.StringIO(), stdin=io.StringIO())
	state = session.run(specimen_path.read_text(encoding="utf-8"), specimen_path)
	assert 0 == report.complain_to_console.call_count
	if state is State.COMPLETED:
		return "failed to fail"
	assert report.sick()
	return report.issues[0].phase

class ZooOfFail(unittest.TestCase):
	""" Tests that assert about failure modes. """

	def expect(self, folder, cases):
		for basename in cases:
			with self.subTest(basename):
				self.assertEqual(folder, _identify_problem(zoo_fail / folder, basename + ".moth"))

	def test_00_scan(self):
		self.expect("scan", [
			"unexpected_character",
			"unterminated_string",
		])

	def test_01_parse(self):
		self.expect("parse", [
			"invalid_assignment",
			"missing_semicolon",
			"nameless_class",
			"unclosed_paren",
		])

	def test_02_resolve(self):
		self.expect("resolve", [
			"inherit_from_self",
			"own_initializer",
			"redeclared_local",
			"super_without_superclass",
			"this_outside_class",
			"top_level_return",
			"value_from_initializer",
		])

	def test_03_runtime(self):
		self.expect("runtime", [
			"add_number_string",
			"assign_undeclared",
			"bad_random_range",
			"call_non_callable",
			"negate_string",
			"superclass_not_class",
			"undefined_property",
			"undefined_variable",
			"wrong_arity",
		])

	def test_every_specimen_is_accounted_for(self):
		named = {
			"scan": 2, "parse": 4, "resolve": 7, "runtime": 9,
		}
		for folder, count in named.items():
			with self.subTest(folder):
				self.assertEqual(count, len(list((zoo_fail / folder).glob("*.moth"))))

	def test_illustrations_render(self):
		# Each issue should be able to show where in the text it happened.
		for specimen in sorted(zoo_fail.glob("*/*.moth")):
			with self.subTest(specimen.stem):
				report = Silence()
				Session(report, out=io.StringIO()).run(specimen.read_text(encoding="utf-8"), specimen)
				for issue in report.issues:
					text = issue.as_text()
					self.assertTrue(text.startswith(issue.headline()))

if __name__ == '__main__':
	unittest.main()
