import unittest
from unittest import mock

from lox import syntax
from lox.diagnostics import Report, SYNTAX
from lox.front_end import parse_text
from lox.printer import AstPrinter

class Silence(Report):
	def __init__(self):
		super().__init__(verbose=0)
		self.complain_to_console = mock.Mock()

def _parse(text):
	report = Silence()
	return parse_text(text, report), report

def _tree(text):
	statements, report = _parse(text)
	return AstPrinter().dump(statements), report

class ShapeTests(unittest.TestCase):
	""" Each of these should parse cleanly into exactly the tree shown. """

	SHAPES = {
		"print 1 + 2 * 3;": "(print (+ 1.0 (* 2.0 3.0)))",
		"print -(1 - 2);": "(print (- (group (- 1.0 2.0))))",
		"print !!true;": "(print (! (! true)))",
		"1 - 2 - 3;": "(; (- (- 1.0 2.0) 3.0))",
		"a == b < c;": "(; (== a (< b c)))",
		"a or b and c;": "(; (or a (and b c)))",
		"a = b = c;": "(; (= a (= b c)))",
		"a.b(c).d;": "(; (. (call (. a b) c) d))",
		"a.b.c = 1;": "(; (= (. (. a b) c) 1.0))",
		"f()();": "(; (call (call f)))",
		'var s = "hi";': '(var s "hi")',
		"var n;": "(var n)",
		"print nil;": "(print nil)",
		"if (x) print 1; else print 2;": "(if x (print 1.0) (print 2.0))",
		"if (x) if (y) print 1; else print 2;": "(if x (if y (print 1.0) (print 2.0)))",
		"while (x) { x = false; }": "(while x (block (; (= x false))))",
		"fun f(a, b) { return a; }": "(fun f (a b) (return a))",
		"fun f() { return; }": "(fun f () (return))",
		"class A { }": "(class A)",
		"class B < A { init(x) { this.x = x; } m() { return super.m(); } }":
			"(class B < A (fun init (x) (; (= (. this x) x))) (fun m () (return (call (super m)))))",
	}

	def test_shapes(self):
		for text, expect in self.SHAPES.items():
			with self.subTest(text):
				tree, report = _tree(text)
				report.assert_no_issues(text)
				self.assertEqual(expect, tree)

	def test_one_line_per_statement(self):
		tree, _ = _tree("print 1; print 2;")
		self.assertEqual("(print 1.0)\n(print 2.0)", tree)

	def test_set_replaces_get(self):
		statements, _ = _parse("a.b = 1;")
		expr = statements[0].expr
		self.assertIsInstance(expr, syntax.Set)
		self.assertIsInstance(expr.target, syntax.Variable)
		self.assertEqual("b", expr.name.lexeme)

class ForLoopTests(unittest.TestCase):

	def test_full_desugaring(self):
		tree, _ = _tree("for (var i = 0; i < 3; i = i + 1) print i;")
		expect = "(block (var i 0.0) (while (< i 3.0) (block (print i) (; (= i (+ i 1.0))))))"
		self.assertEqual(expect, tree)

	def test_empty_clauses(self):
		tree, _ = _tree("for (;;) print 1;")
		self.assertEqual("(while true (print 1.0))", tree)

	def test_expression_initializer(self):
		tree, _ = _tree("for (i = 0; i < 1;) print i;")
		self.assertEqual("(block (; (= i 0.0)) (while (< i 1.0) (print i)))", tree)

class ErrorTests(unittest.TestCase):

	def test_invalid_assignment_target_does_not_unwind(self):
		tree, report = _tree("1 = 2; print 3;")
		[issue] = report.issues()
		self.assertEqual("Invalid assignment target.", issue.message)
		self.assertEqual(" at '='", issue.where)
		self.assertEqual("(; 1.0)\n(print 3.0)", tree)

	def test_recovery_after_bad_declaration(self):
		tree, report = _tree("var = 1; print 2; print ;")
		issues = report.issues(SYNTAX)
		self.assertEqual(["Expect variable name.", "Expect expression."], [i.message for i in issues])
		self.assertEqual("[line 1] Error at '=': Expect variable name.", issues[0].as_text())
		self.assertEqual("(print 2.0)", tree)

	def test_recovery_at_statement_keyword(self):
		tree, report = _tree("print 1 + ;\nvar a = 1;")
		self.assertEqual(1, len(report.issues()))
		self.assertEqual("(var a 1.0)", tree)

	def test_error_at_end(self):
		_, report = _tree("print 1")
		[issue] = report.issues()
		self.assertEqual(" at end", issue.where)
		self.assertEqual("Expect ';' after value.", issue.message)

	def test_assorted_messages(self):
		cases = {
			"class { }": "Expect class name.",
			"class A < { }": "Expect superclass name.",
			"class A": "Expect '{' before class body.",
			"fun (){}": "Expect function name.",
			"fun f {}": "Expect '(' after function name.",
			"fun f(1) {}": "Expect parameter name.",
			"if x) print 1;": "Expect '(' after 'if'.",
			"while (x print 1;": "Expect ')' after condition.",
			"print (1;": "Expect ')' after expression.",
			"f(1;": "Expect ')' after arguments.",
			"a.1;": "Expect property name after '.'.",
			"print super;": "Expect '.' after 'super'.",
			"{ print 1;": "Expect '}' after block.",
			"for var i;;) {}": "Expect '(' after 'for'.",
			"return 1": "Expect ';' after return value.",
		}
		for text, message in cases.items():
			with self.subTest(text):
				_, report = _tree(text)
				self.assertTrue(report.had_syntax_error())
				self.assertEqual(message, report.issues()[0].message)

	def test_lexical_errors_do_not_stop_the_parse(self):
		tree, report = _tree("print 1; @ print 2;")
		self.assertEqual(["Unexpected character."], [i.message for i in report.issues()])
		self.assertEqual("(print 1.0)\n(print 2.0)", tree)

class LimitTests(unittest.TestCase):

	def test_too_many_arguments_is_reported_but_parsed(self):
		text = "f(%s);" % ", ".join(["1"] * 256)
		statements, report = _parse(text)
		[issue] = report.issues()
		self.assertEqual("Can't have more than 255 arguments.", issue.message)
		self.assertEqual(1, len(statements))
		self.assertEqual(256, len(statements[0].expr.args))

	def test_too_many_parameters_is_reported_but_parsed(self):
		params = ", ".join("p%d" % i for i in range(256))
		statements, report = _parse("fun f(%s) {}" % params)
		[issue] = report.issues()
		self.assertEqual("Can't have more than 255 parameters.", issue.message)
		self.assertEqual(256, len(statements[0].params))

	def test_exactly_255_is_fine(self):
		text = "f(%s);" % ", ".join(["1"] * 255)
		_, report = _parse(text)
		self.assertTrue(report.ok())


if __name__ == '__main__':
	unittest.main()
