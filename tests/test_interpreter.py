import unittest

from common import run, session
from moth.executive import State

class Behavior(unittest.TestCase):
	""" Programs go in, printed output comes out. """

	def expect(self, source, *lines):
		state, output, report = run(source)
		report.assert_no_issues("Program should run cleanly")
		self.assertIs(State.COMPLETED, state)
		self.assertEqual(list(lines), output.splitlines())

	def expect_runtime_error(self, source, message, *lines):
		state, output, report = run(source)
		self.assertIs(State.HALTED_ON_RUNTIME_ERROR, state)
		self.assertEqual([message], [i.message for i in report.issues])
		self.assertEqual(list(lines), output.splitlines())
		return report

class ValueTests(Behavior):

	def test_printing(self):
		self.expect('print nil; print true; print false; print 3; print 2.5; print "s"; print -0;',
			"nil", "true", "false", "3", "2.5", "s", "0")

	def test_arithmetic(self):
		self.expect("print 1 + 2 * 3; print (1 + 2) * 3; print 7 / 2; print 10 - 4 - 3;", "7", "9", "3.5", "3")

	def test_division_by_zero_follows_ieee(self):
		self.expect("print 1 / 0; print -1 / 0; print 0 / 0;", "inf", "-inf", "nan")

	def test_large_integral_numbers_print_in_full(self):
		self.expect("print 100000000000000000000; print 123456789 * 1000;", "100000000000000000000", "123456789000")

	def test_nan_is_not_equal_to_itself(self):
		self.expect("var n = 0 / 0; print n == n; print n != n;", "false", "true")

	def test_string_concatenation(self):
		self.expect('print "moth" + "ball";', "mothball")

	def test_truthiness(self):
		self.expect('print !nil; print !false; print !0; print !""; print !!"x";', "true", "true", "false", "false", "true")

	def test_equality_is_type_strict(self):
		self.expect('print 1 == 1; print nil == nil; print true == 1; print "1" == 1; print nil == false; print "a" != "a";',
			"true", "true", "false", "false", "false", "false")

	def test_logical_operators_yield_operands(self):
		self.expect('print nil or "yes"; print "first" or "second"; print false and 1; print 1 and 2;',
			"yes", "first", "false", "2")

	def test_logical_operators_short_circuit(self):
		self.expect('var hit = false; fun f() { hit = true; return true; } print false and f(); print hit; print true or f(); print hit;',
			"false", "false", "true", "false")

	def test_comparison(self):
		self.expect("print 1 < 2; print 2 <= 2; print 3 > 4; print 4 >= 5;", "true", "true", "false", "false")

class StatementTests(Behavior):

	def test_uninitialized_variable_is_nil(self):
		self.expect("var a; print a;", "nil")

	def test_while_and_for(self):
		self.expect("var i = 0; while (i < 3) { print i; i = i + 1; }", "0", "1", "2")
		self.expect("for (var i = 0; i < 3; i = i + 1) print i;", "0", "1", "2")

	def test_if_else(self):
		self.expect('if (0) print "zero is true"; else print "never";', "zero is true")
		self.expect('if (nil) print "never"; else print "nil is false";', "nil is false")

	def test_block_scoping(self):
		self.expect('var a = "global"; { var a = "inner"; print a; } print a;', "inner", "global")

	def test_assignment_reaches_enclosing_scope(self):
		self.expect("var a = 1; { a = 2; } print a;", "2")

	def test_static_scoping(self):
		# The closure keeps seeing the global it saw when it was resolved.
		self.expect('''
			var a = "global";
			{
				fun show() { print a; }
				show();
				var a = "block";
				show();
			}
		''', "global", "global")

class FunctionTests(Behavior):

	def test_recursion(self):
		self.expect("fun fib(n) { if (n < 2) return n; return fib(n - 1) + fib(n - 2); } print fib(10);", "55")

	def test_implicit_return_is_nil(self):
		self.expect("fun f() {} print f(); fun g() { return; } print g();", "nil", "nil")

	def test_return_from_inside_loops(self):
		self.expect("fun f() { while (true) { for (;;) { return 42; } } } print f();", "42")

	def test_closures_keep_their_own_state(self):
		self.expect('''
			fun counter() { var n = 0; fun bump() { n = n + 1; return n; } return bump; }
			var a = counter(); var b = counter();
			print a(); print a(); print b();
		''', "1", "2", "1")

	def test_functions_print_by_name(self):
		self.expect("fun f() {} print f; print clock;", "<fn f>", "<native fn clock>")

	def test_arity_is_checked_before_the_body_runs(self):
		self.expect_runtime_error('fun pair(a, b) { print "called"; } pair(1);', "Expected 2 arguments but got 1.")
		self.expect_runtime_error('fun pair(a, b) { print "called"; } pair(1, 2, 3);', "Expected 2 arguments but got 3.")

	def test_calling_a_non_callable(self):
		self.expect_runtime_error('"not a function"();', "Can only call functions and classes.")

class RuntimeErrorTests(Behavior):

	def test_operand_checks(self):
		self.expect_runtime_error('print -"x";', "Operand must be a number.")
		self.expect_runtime_error('print 1 < "x";', "Operands must be numbers.")
		self.expect_runtime_error('print 1 + "x";', "Operands must be two numbers or two strings.")
		self.expect_runtime_error('print true * 2;', "Operands must be numbers.")

	def test_undefined_variable(self):
		self.expect_runtime_error("print nope;", "Undefined variable 'nope'.")
		self.expect_runtime_error("nope = 1;", "Undefined variable 'nope'.")

	def test_error_stops_the_rest_of_the_unit(self):
		report = self.expect_runtime_error('print "before"; print 1 + nil; print "after";',
			"Operands must be two numbers or two strings.", "before")
		self.assertEqual("Operands must be two numbers or two strings.\n[line 1]", report.issues[0].headline())

	def test_error_line_comes_from_the_offending_token(self):
		_, _, report = run('var a = 1;\n\nprint a\n  + "x";')
		self.assertEqual(4, report.issues[0].line)

class SessionTests(unittest.TestCase):

	def test_globals_persist_between_units(self):
		s = session()
		self.assertIs(State.COMPLETED, s.run("var a = 1; fun inc() { a = a + 1; }"))
		self.assertIs(State.COMPLETED, s.run("inc(); print a;"))
		self.assertEqual("2\n", s.out.getvalue())
		self.assertIs(State.READY, s.state)

	def test_session_survives_runtime_error(self):
		s = session()
		self.assertIs(State.HALTED_ON_RUNTIME_ERROR, s.run("var a = 1; print a; a(); print \"never\";"))
		self.assertIs(State.READY, s.state)
		self.assertIs(State.COMPLETED, s.run("print a + 1;"))
		self.assertEqual("1\n2\n", s.out.getvalue())
		self.assertTrue(s.report.ok())

	def test_runtime_error_inside_a_block_leaves_globals_current(self):
		s = session()
		s.run("fun f() { var local = 1; nil(); }")
		self.assertIs(State.HALTED_ON_RUNTIME_ERROR, s.run("f();"))
		self.assertIs(State.COMPLETED, s.run("var g = 5; print g;"))
		self.assertIs(s.interpreter.globals, s.interpreter.environment)

	def test_deep_recursion_is_fine(self):
		state, output, report = run("fun count(n) { if (n == 0) return 0; return 1 + count(n - 1); } print count(500);")
		report.assert_no_issues("Five hundred calls deep is ordinary")
		self.assertEqual("500\n", output)

	def test_runaway_recursion_is_a_runtime_error(self):
		s = session()
		self.assertIs(State.HALTED_ON_RUNTIME_ERROR, s.run("fun f(n) { return f(n + 1); }\nf(0);"))
		self.assertEqual(["Stack overflow."], [i.message for i in s.report.issues])
		self.assertIs(State.READY, s.state)
		self.assertIs(s.interpreter.globals, s.interpreter.environment)
		self.assertIs(State.COMPLETED, s.run("print 1;"))
		self.assertEqual("1\n", s.out.getvalue())
		state, value = s.evaluate("f(0)")
		self.assertIs(State.HALTED_ON_RUNTIME_ERROR, state)
		self.assertIs(State.READY, s.state)

	def test_absurd_nesting_is_a_syntax_error(self):
		s = session()
		deep = "(" * 5000 + "1" + ")" * 5000
		self.assertIs(State.HALTED_ON_STATIC_ERROR, s.run("print %s;" % deep))
		self.assertEqual(["Too much nesting."], [i.message for i in s.report.issues])
		self.assertIs(State.HALTED_ON_STATIC_ERROR, s.evaluate(deep)[0])
		self.assertIs(State.COMPLETED, s.run("print 2;"))

	def test_errors_in_older_units_are_not_illustrated_against_newer_text(self):
		s = session()
		s.run("fun f() {\n  return nil();\n}")
		self.assertIs(State.HALTED_ON_RUNTIME_ERROR, s.run("f();"))
		[issue] = s.report.issues
		self.assertEqual(2, issue.line)
		self.assertEqual(issue.headline(), issue.as_text())
		self.assertIs(State.HALTED_ON_RUNTIME_ERROR, s.run("nil();"))
		[issue] = s.report.issues
		self.assertNotEqual(issue.headline(), issue.as_text())

	def test_static_error_prevents_any_execution(self):
		s = session()
		self.assertIs(State.HALTED_ON_STATIC_ERROR, s.run('print "ran"; { var a = 1; var a = 2; }'))
		self.assertIs(State.HALTED_ON_STATIC_ERROR, s.run('print "ran"; print;'))
		self.assertEqual("", s.out.getvalue())
		self.assertTrue(s.report.had_static_error())

	def test_evaluate_gives_back_a_value(self):
		s = session()
		s.run("var x = 20;")
		self.assertEqual((State.COMPLETED, 22.0), s.evaluate("x + 2"))
		self.assertEqual((State.COMPLETED, None), s.evaluate("nil"))
		state, value = s.evaluate("x +")
		self.assertIs(State.HALTED_ON_STATIC_ERROR, state)
		state, value = s.evaluate("x()")
		self.assertIs(State.HALTED_ON_RUNTIME_ERROR, state)
		self.assertIsNone(value)

	def test_dry_run_checks_without_running(self):
		s = session()
		s.dry_run = True
		self.assertIs(State.COMPLETED, s.run('print "not really";'))
		self.assertEqual("", s.out.getvalue())

	def test_show_tokens_and_parse(self):
		s = session()
		s.show_tokens = s.show_parse = True
		s.run("print 1+2;")
		self.assertEqual([
			"PRINT 'print' null @1",
			"NUMBER '1' 1.0 @1",
			"PLUS '+' null @1",
			"NUMBER '2' 2.0 @1",
			"SEMICOLON ';' null @1",
			"EOF '' null @1",
			"print (1 + 2);",
			"3",
		], s.out.getvalue().splitlines())

if __name__ == '__main__':
	unittest.main()
