"""
The canonical list-structured search: A flat table of bindings plus a link to the enclosing scope.

Closures share these freely, so nobody owns an environment outright,
and an assignment through any one reference is visible through all of them.
"""
from typing import Any, Optional
from .tokens import Token
from .diagnostics import LoxRuntimeError

class Environment:
	_values: dict[str, Any]

	def __init__(self, enclosing:Optional["Environment"]=None):
		self._values = {}
		self.enclosing = enclosing

	def __contains__(self, name:str) -> bool:
		return name in self._values

	def define(self, name:str, value:Any):
		""" Always the innermost scope. Redefinition is fine. """
		self._values[name] = value

	def get(self, name:Token) -> Any:
		env = self
		while env is not None:
			if name.lexeme in env._values:
				return env._values[name.lexeme]
			env = env.enclosing
		raise _undefined(name)

	def assign(self, name:Token, value:Any):
		# Assignment never creates a binding, not even at global scope.
		env = self
		while env is not None:
			if name.lexeme in env._values:
				env._values[name.lexeme] = value
				return
			env = env.enclosing
		raise _undefined(name)

	def ancestor(self, distance:int) -> "Environment":
		env = self
		for _ in range(distance):
			env = env.enclosing
		return env

	def get_at(self, distance:int, name:str) -> Any:
		""" The resolver promises the name is exactly `distance` hops out. """
		return self.ancestor(distance)._values[name]

	def assign_at(self, distance:int, name:Token, value:Any):
		self.ancestor(distance)._values[name.lexeme] = value

def _undefined(name:Token):
	return LoxRuntimeError(name, "Undefined variable '%s'." % name.lexeme)
