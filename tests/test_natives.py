import unittest
from unittest import mock

from common import run, session
from moth.executive import State
from test_interpreter import Behavior

class NativeTests(Behavior):

	def test_clock_moves_forward(self):
		self.expect("var t = clock(); print t > 0; print clock() >= t;", "true", "true")

	def test_string_to_num(self):
		self.expect('print stringToNum("42"); print stringToNum(" 2.5 "); print stringToNum("-3"); print stringToNum("1e3");',
			"42", "2.5", "-3", "1000")

	def test_string_to_num_gives_nil_for_nonsense(self):
		self.expect('print stringToNum("forty-two"); print stringToNum(""); print stringToNum("1.2.3");', "nil", "nil", "nil")

	def test_string_to_num_wants_a_string(self):
		self.expect_runtime_error("stringToNum(42);", "Argument to 'stringToNum' must be a string.")

	def test_random_num_stays_in_range(self):
		self.expect('''
			var ok = true;
			for (var i = 0; i < 50; i = i + 1) {
				var r = randomNum(1, 6);
				if (r < 1 or r > 6) ok = false;
			}
			print ok;
			print randomNum(4, 4);
		''', "true", "4")

	def test_random_num_uses_the_random_module(self):
		with mock.patch("random.randint", return_value=3) as randint:
			self.expect("print randomNum(1.9, 5.5);", "3")
		randint.assert_called_once_with(1, 5)

	def test_random_num_argument_checks(self):
		self.expect_runtime_error('randomNum("a", 1);', "'from' must be a number.")
		self.expect_runtime_error('randomNum(1, nil);', "'to' must be a number.")
		self.expect_runtime_error("randomNum(6, 1);", "Invalid range for randomNum.")
		self.expect_runtime_error("randomNum(0, 1/0);", "Invalid range for randomNum.")

	def test_input_reads_a_line(self):
		state, output, report = run('var name = input("Name? "); print "hello " + name;', stdin="Moth\nignored\n")
		report.assert_no_issues("input should work")
		self.assertEqual("Name? hello Moth\n", output)

	def test_input_at_end_of_file_is_nil(self):
		state, output, _ = run('print input("> ");', stdin="")
		self.assertIs(State.COMPLETED, state)
		self.assertEqual("> nil\n", output)

	def test_input_wants_a_string_prompt(self):
		self.expect_runtime_error("input(1);", "Argument to 'input' must be a string.")

	def test_natives_can_be_shadowed(self):
		s = session()
		self.assertIs(State.COMPLETED, s.run('fun clock() { return "mine"; } print clock();'))
		self.assertEqual("mine\n", s.out.getvalue())

if __name__ == '__main__':
	unittest.main()
