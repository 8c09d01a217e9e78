"""
This module defines the specialized value-types that the tree-walker operates in terms of.
Basic primitive values play themselves: nil is None, and booleans, numbers, and strings are
the corresponding Python types. Callable things, classes, and instances need more help.
"""
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional
from .. import syntax
from ..diagnostics import LoxRuntimeError
from ..environment import Environment
from ..tokens import Token

class Function(ABC):
	""" A run-time object that can be applied to a fixed number of arguments. """
	@abstractmethod
	def arity(self) -> int: pass

	@abstractmethod
	def apply(self, interpreter, args: list) -> Any: pass

class Primitive(Function):
	""" Host-implemented. This is how `clock` gets in, and how a host program would add more. """
	def __init__(self, name:str, arity:int, fn:Callable):
		self.name = name
		self._arity = arity
		self._fn = fn

	def arity(self): return self._arity

	def apply(self, interpreter, args: list) -> Any:
		return self._fn(*args)

	def __str__(self): return "<native fn>"

class Closure(Function):
	"""
	The run-time manifestation of a function declaration: a callable value tied to its natal environment.
	Each call gets a fresh frame whose parent is that natal environment, never the caller's frame.
	"""
	def __init__(self, declaration:syntax.Function, closure:Environment, is_initializer:bool=False):
		self.declaration = declaration
		self._closure = closure
		self.is_initializer = is_initializer

	def bind(self, instance:"Instance") -> "Closure":
		""" Same declaration, with one more scope in between where `this` means the instance. """
		env = Environment(self._closure)
		env.define("this", instance)
		return Closure(self.declaration, env, self.is_initializer)

	def arity(self): return len(self.declaration.params)

	def apply(self, interpreter, args: list) -> Any:
		frame = Environment(self._closure)
		for param, arg in zip(self.declaration.params, args):
			frame.define(param.lexeme, arg)
		outcome = interpreter.execute_block(self.declaration.body, frame)
		# An initializer hands back the instance, whatever the body says.
		if self.is_initializer: return self._closure.get_at(0, "this")
		if outcome is None: return None
		return outcome.value

	def __str__(self): return "<fn %s>" % self.declaration.name.lexeme

class UserClass(Function):
	""" Calling a class makes an instance, then runs `init` on it if there is one. """
	def __init__(self, name:str, superclass:Optional["UserClass"], methods:dict[str, Closure]):
		self.name = name
		self.superclass = superclass
		self._methods = methods

	def find_method(self, name:str) -> Optional[Closure]:
		klass = self
		while klass is not None:
			if name in klass._methods:
				return klass._methods[name]
			klass = klass.superclass
		return None

	def arity(self):
		initializer = self.find_method("init")
		return 0 if initializer is None else initializer.arity()

	def apply(self, interpreter, args: list) -> "Instance":
		instance = Instance(self)
		initializer = self.find_method("init")
		if initializer is not None:
			initializer.bind(instance).apply(interpreter, args)
		return instance

	def __str__(self): return "<class %s>" % self.name

class Instance:
	""" Fields spring into being on first assignment. They shadow methods of the same name. """
	fields: dict[str, Any]

	def __init__(self, klass:UserClass):
		self.klass = klass
		self.fields = {}

	def get(self, name:Token) -> Any:
		if name.lexeme in self.fields:
			return self.fields[name.lexeme]
		method = self.klass.find_method(name.lexeme)
		if method is not None:
			return method.bind(self)
		raise LoxRuntimeError(name, "Undefined property '%s'." % name.lexeme)

	def set(self, name:Token, value:Any):
		self.fields[name.lexeme] = value

	def __str__(self): return "<class instance %s>" % self.klass.name
