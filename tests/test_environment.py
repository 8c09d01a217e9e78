import unittest

from lox.diagnostics import LoxRuntimeError
from lox.environment import Environment
from lox.tokens import Token, NAME

def _name(text):
	return Token(NAME, text, None, 1)

class EnvironmentTests(unittest.TestCase):

	def setUp(self):
		self.outer = Environment()
		self.outer.define("a", "outer a")
		self.outer.define("b", "outer b")
		self.inner = Environment(self.outer)
		self.inner.define("a", "inner a")

	def test_define_is_local(self):
		self.assertIn("a", self.inner)
		self.assertNotIn("b", self.inner)
		self.assertIn("b", self.outer)

	def test_get_searches_outward(self):
		self.assertEqual("inner a", self.inner.get(_name("a")))
		self.assertEqual("outer b", self.inner.get(_name("b")))

	def test_redefinition_is_allowed(self):
		self.outer.define("a", 1)
		self.outer.define("a", 2)
		self.assertEqual(2, self.outer.get(_name("a")))

	def test_assign_finds_the_nearest_binding(self):
		self.inner.assign(_name("b"), "changed")
		self.assertNotIn("b", self.inner)
		self.assertEqual("changed", self.outer.get(_name("b")))

	def test_misses_are_errors(self):
		with self.assertRaises(LoxRuntimeError) as cm:
			self.inner.get(_name("c"))
		self.assertEqual("Undefined variable 'c'.", cm.exception.message)
		with self.assertRaises(LoxRuntimeError):
			self.inner.assign(_name("c"), 1)
		self.assertNotIn("c", self.outer)

	def test_distance_access_skips_nearer_bindings(self):
		self.assertEqual("outer a", self.inner.get_at(1, "a"))
		self.assertIs(self.outer, self.inner.ancestor(1))
		self.inner.assign_at(1, _name("a"), "new outer a")
		self.assertEqual("inner a", self.inner.get_at(0, "a"))
		self.assertEqual("new outer a", self.outer.get(_name("a")))

	def test_sharing_is_visible_through_every_reference(self):
		a = Environment(self.outer)
		b = Environment(self.outer)
		a.assign(_name("b"), 42)
		self.assertEqual(42, b.get(_name("b")))


if __name__ == '__main__':
	unittest.main()
