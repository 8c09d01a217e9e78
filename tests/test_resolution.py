import unittest
from unittest import mock

from lox.diagnostics import Report, RESOLUTION
from lox.front_end import parse_text
from lox.resolution import Resolver

class Silence(Report):
	def __init__(self):
		super().__init__(verbose=0)
		self.complain_to_console = mock.Mock()

def _resolve(text):
	report = Silence()
	statements = parse_text(text, report)
	report.assert_no_issues("Test is subverted.")
	distances = {}
	Resolver(distances, report).resolve(statements)
	return statements, distances, report

def _messages(report):
	return [i.message for i in report.issues(RESOLUTION)]

class StaticErrorTests(unittest.TestCase):

	ZOO = {
		"{ var a = a; }": "Can't read local variable in its own initializer.",
		"{ var a = 1; var a = 2; }": "Already a variable with this name in this scope.",
		"fun f(a, a) {}": "Already a variable with this name in this scope.",
		"return 1;": "Can't return from top-level code.",
		"return;": "Can't return from top-level code.",
		"class A { init() { return 1; } }": "Can't return a value from an initializer.",
		"print this;": "Can't use 'this' outside of a class.",
		"fun f() { return this; }": "Can't use 'this' outside of a class.",
		"print super.x;": "Can't use 'super' outside of a class.",
		"class A { m() { super.m(); } }": "Can't use 'super' in a class with no superclass.",
		"class A < A {}": "A class can't inherit from itself.",
	}

	def test_zoo(self):
		for text, message in self.ZOO.items():
			with self.subTest(text):
				_, _, report = _resolve(text)
				self.assertEqual([message], _messages(report))

	def test_permitted(self):
		for text in [
			"var a = 1; var a = a;",
			"{ var a = 1; { var a = 2; } }",
			"class A { init() { return; } }",
			"fun f() { return 1; }",
			"class A { m() { return this; } }",
			"class A {} class B < A { m() { return super.m; } }",
			"fun f() { fun g() { return f; } }",
		]:
			with self.subTest(text):
				_, _, report = _resolve(text)
				self.assertTrue(report.ok())

	def test_resolver_keeps_going(self):
		_, _, report = _resolve("return 1; print this; { var a = a; }")
		self.assertEqual(3, len(report.issues()))

	def test_error_text(self):
		_, _, report = _resolve("{\n var a = a;\n}")
		[issue] = report.issues()
		self.assertEqual("[line 2] Error at 'a': Can't read local variable in its own initializer.", issue.as_text())

class DistanceTests(unittest.TestCase):

	def test_globals_get_no_entry(self):
		statements, distances, _ = _resolve("var g = 1; { print g; }")
		reference = statements[1].statements[0].expr
		self.assertNotIn(reference, distances)
		self.assertEqual({}, distances)

	def test_one_scope_out(self):
		statements, distances, _ = _resolve("{ var a = 1; { print a; } }")
		reference = statements[0].statements[1].statements[0].expr
		self.assertEqual(1, distances[reference])

	def test_assignment_is_resolved_too(self):
		statements, distances, _ = _resolve("{ var a = 1; a = 2; }")
		assignment = statements[0].statements[1].expr
		self.assertEqual(0, distances[assignment])

	def test_parameters_share_the_body_scope(self):
		statements, distances, _ = _resolve("fun f(x) { return x; }")
		reference = statements[0].body[0].value
		self.assertEqual(0, distances[reference])

	def test_closure_captures(self):
		statements, distances, _ = _resolve("fun f(x) { fun g() { return x; } }")
		reference = statements[0].body[0].body[0].value
		self.assertEqual(1, distances[reference])

	def test_this_is_just_outside_the_method(self):
		statements, distances, _ = _resolve("class A { m() { return this; } }")
		this = statements[0].methods[0].body[0].value
		self.assertEqual(1, distances[this])

	def test_super_is_just_outside_this(self):
		statements, distances, _ = _resolve("class A {} class B < A { m() { return super.m; } }")
		sup = statements[1].methods[0].body[0].value
		self.assertEqual(2, distances[sup])

	def test_each_node_is_its_own_key(self):
		# Two textually identical references at different depths.
		statements, distances, _ = _resolve("{ var a = 1; print a; { print a; } }")
		near = statements[0].statements[1].expr
		far = statements[0].statements[2].statements[0].expr
		self.assertEqual(0, distances[near])
		self.assertEqual(1, distances[far])

	def test_resolution_is_repeatable(self):
		statements, distances, report = _resolve("fun f(x) { { var y = x; return y; } } class A { m() { return this; } }")
		again = {}
		Resolver(again, report).resolve(statements)
		self.assertTrue(report.ok())
		self.assertEqual(distances, again)


if __name__ == '__main__':
	unittest.main()
