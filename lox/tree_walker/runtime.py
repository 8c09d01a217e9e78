"""
The tree-walker proper: statements execute for effect, expressions evaluate to values.

Every visit method takes the current environment as an argument, rather than keeping it
in a mutable attribute, so there is nothing to save and restore around blocks and calls.

Executing a statement yields a completion: None means "carry on", and a `Returned`
means a return statement is unwinding toward the nearest function call.
Completions are ordinary return values, so they never mix with the run-time error
exception, which unwinds the whole execution unit.
"""
import math
import operator
import time
import weakref
from typing import Any, NamedTuple, Optional, Sequence
from .. import syntax
from ..diagnostics import LoxRuntimeError, Report
from ..environment import Environment
from ..tokens import Token
from .values import Function, Primitive, Closure, UserClass, Instance

class Returned(NamedTuple):
	value: Any

COMPLETION = Optional[Returned]

###############################################################################

def is_number(x) -> bool:
	# bool is a subclass of int in Python, but not a number in Lox.
	return isinstance(x, (float, int)) and not isinstance(x, bool)

def is_truthy(x) -> bool:
	return x is not None and x is not False

def is_equal(a, b) -> bool:
	if is_number(a) and is_number(b): return a == b
	if type(a) is not type(b): return False
	return a == b

def stringify(x) -> str:
	if x is None: return "nil"
	if x is True: return "true"
	if x is False: return "false"
	if is_number(x):
		x = float(x)
		if math.isnan(x): return "NaN"
		if math.isinf(x): return "Infinity" if x > 0 else "-Infinity"
		text = repr(x)
		return text[:-2] if text.endswith(".0") else text
	return str(x)

def _divide(a, b):
	try: return a / b
	except ZeroDivisionError:
		# IEEE-754 says what this should be, even if Python disagrees.
		if a == 0 or math.isnan(a): return math.nan
		return math.copysign(math.inf, a) * math.copysign(1.0, b)

NUMERIC_BINARY = {
	"-" : operator.sub,
	"*" : operator.mul,
	"/" : _divide,
	">" : operator.gt,
	">=": operator.ge,
	"<" : operator.lt,
	"<=": operator.le,
}

def _check_number(op:Token, operand):
	if not is_number(operand):
		raise LoxRuntimeError(op, "Operand must be a number.")

def _check_numbers(op:Token, lhs, rhs):
	if not (is_number(lhs) and is_number(rhs)):
		raise LoxRuntimeError(op, "Operands must be numbers.")

###############################################################################

class Interpreter:
	"""
	Owns the global environment and the distance table the resolver fills in.
	Both persist across execution units, which is how an interactive session remembers things.

	Dispatch is by a table from node class to `visit_` method, looked up on the exact type.
	Each Lox call then costs only plain Python calls, which the host can nest deeply.
	"""
	globals: Environment
	distances: "weakref.WeakKeyDictionary[syntax.Expr, int]"

	def __init__(self, out=None):
		self.globals = Environment()
		# Weak, so the trees of finished units can go once no closure holds on to them.
		self.distances = weakref.WeakKeyDictionary()
		self._out = out  # None means whatever sys.stdout is at the time.
		self._visit = {
			getattr(syntax, name[len("visit_"):]): getattr(self, name)
			for name in dir(self) if name.startswith("visit_")
		}
		self.define_native("clock", 0, time.time)

	def define_native(self, name:str, arity:int, fn):
		self.globals.define(name, Primitive(name, arity, fn))

	def interpret(self, statements:Sequence[syntax.Stmt], report:Report) -> bool:
		""" Run an execution unit. A run-time error abandons the rest of it and gets reported. """
		try:
			for stmt in statements:
				self.execute(stmt, self.globals)
		except LoxRuntimeError as ex:
			report.runtime_error(ex)
			return False
		return True

	def execute(self, stmt:syntax.Stmt, env:Environment) -> COMPLETION:
		return self._visit[type(stmt)](stmt, env)

	def evaluate(self, expr:syntax.Expr, env:Environment) -> Any:
		return self._visit[type(expr)](expr, env)

	def execute_block(self, statements:Sequence[syntax.Stmt], env:Environment) -> COMPLETION:
		for stmt in statements:
			outcome = self.execute(stmt, env)
			if outcome is not None: return outcome
		return None

	def _look_up(self, name:Token, expr:syntax.Expr, env:Environment):
		distance = self.distances.get(expr)
		if distance is None: return self.globals.get(name)
		return env.get_at(distance, name.lexeme)

	# Statements

	def visit_Expression(self, stmt:syntax.Expression, env:Environment):
		self.evaluate(stmt.expr, env)

	def visit_Print(self, stmt:syntax.Print, env:Environment):
		print(stringify(self.evaluate(stmt.expr, env)), file=self._out)

	def visit_Var(self, stmt:syntax.Var, env:Environment):
		value = None if stmt.initializer is None else self.evaluate(stmt.initializer, env)
		env.define(stmt.name.lexeme, value)

	def visit_Block(self, stmt:syntax.Block, env:Environment) -> COMPLETION:
		return self.execute_block(stmt.statements, Environment(env))

	def visit_If(self, stmt:syntax.If, env:Environment) -> COMPLETION:
		if is_truthy(self.evaluate(stmt.condition, env)):
			return self.execute(stmt.then_branch, env)
		elif stmt.else_branch is not None:
			return self.execute(stmt.else_branch, env)

	def visit_While(self, stmt:syntax.While, env:Environment) -> COMPLETION:
		while is_truthy(self.evaluate(stmt.condition, env)):
			outcome = self.execute(stmt.body, env)
			if outcome is not None: return outcome

	def visit_Function(self, stmt:syntax.Function, env:Environment):
		env.define(stmt.name.lexeme, Closure(stmt, env))

	def visit_Return(self, stmt:syntax.Return, env:Environment) -> Returned:
		return Returned(None if stmt.value is None else self.evaluate(stmt.value, env))

	def visit_Class(self, stmt:syntax.Class, env:Environment):
		superclass = None
		if stmt.superclass is not None:
			superclass = self.evaluate(stmt.superclass, env)
			if not isinstance(superclass, UserClass):
				raise LoxRuntimeError(stmt.superclass.name, "Superclass must be a class.")
		# Bound early, so methods can refer to their own class.
		env.define(stmt.name.lexeme, None)
		method_env = env
		if superclass is not None:
			method_env = Environment(env)
			method_env.define("super", superclass)
		methods = {
			m.name.lexeme: Closure(m, method_env, m.name.lexeme == "init")
			for m in stmt.methods
		}
		env.assign(stmt.name, UserClass(stmt.name.lexeme, superclass, methods))

	# Expressions

	def visit_Literal(self, expr:syntax.Literal, env:Environment):
		return expr.value

	def visit_Grouping(self, expr:syntax.Grouping, env:Environment):
		return self.evaluate(expr.inner, env)

	def visit_Unary(self, expr:syntax.Unary, env:Environment):
		operand = self.evaluate(expr.operand, env)
		if expr.op.kind == "!": return not is_truthy(operand)
		assert expr.op.kind == "-", expr.op
		_check_number(expr.op, operand)
		return -operand

	def visit_Binary(self, expr:syntax.Binary, env:Environment):
		lhs = self.evaluate(expr.lhs, env)
		rhs = self.evaluate(expr.rhs, env)
		op = expr.op.kind
		if op == "==": return is_equal(lhs, rhs)
		if op == "!=": return not is_equal(lhs, rhs)
		if op == "+":
			if is_number(lhs) and is_number(rhs): return lhs + rhs
			if isinstance(lhs, str) and isinstance(rhs, str): return lhs + rhs
			raise LoxRuntimeError(expr.op, "Operands must be two numbers or two strings.")
		_check_numbers(expr.op, lhs, rhs)
		return NUMERIC_BINARY[op](lhs, rhs)

	def visit_Logical(self, expr:syntax.Logical, env:Environment):
		lhs = self.evaluate(expr.lhs, env)
		if expr.op.kind == "OR":
			if is_truthy(lhs): return lhs
		elif not is_truthy(lhs): return lhs
		return self.evaluate(expr.rhs, env)

	def visit_Variable(self, expr:syntax.Variable, env:Environment):
		return self._look_up(expr.name, expr, env)

	def visit_Assign(self, expr:syntax.Assign, env:Environment):
		value = self.evaluate(expr.value, env)
		distance = self.distances.get(expr)
		if distance is None: self.globals.assign(expr.name, value)
		else: env.assign_at(distance, expr.name, value)
		return value

	def visit_Call(self, expr:syntax.Call, env:Environment):
		callee = self.evaluate(expr.callee, env)
		if not isinstance(callee, Function):
			raise LoxRuntimeError(expr.paren, "Can only call functions and classes.")
		args = [self.evaluate(a, env) for a in expr.args]
		if len(args) != callee.arity():
			pattern = "Expected %d arguments but got %d."
			raise LoxRuntimeError(expr.paren, pattern % (callee.arity(), len(args)))
		return callee.apply(self, args)

	def visit_Get(self, expr:syntax.Get, env:Environment):
		target = self.evaluate(expr.target, env)
		if isinstance(target, Instance): return target.get(expr.name)
		raise LoxRuntimeError(expr.name, "Only instances have properties.")

	def visit_Set(self, expr:syntax.Set, env:Environment):
		target = self.evaluate(expr.target, env)
		if not isinstance(target, Instance):
			raise LoxRuntimeError(expr.name, "Only instances have fields.")
		value = self.evaluate(expr.value, env)
		target.set(expr.name, value)
		return value

	def visit_This(self, expr:syntax.This, env:Environment):
		return self._look_up(expr.keyword, expr, env)

	def visit_Super(self, expr:syntax.Super, env:Environment):
		"""
		Look for the method starting in the superclass of the class whose method is running,
		(statically known: it is whatever `super` is bound to) but bind it to the actual receiver,
		which sits in the scope just inside the one binding `super`.
		"""
		distance = self.distances[expr]
		superclass = env.get_at(distance, "super")
		receiver = env.get_at(distance - 1, "this")
		method = superclass.find_method(expr.method.lexeme)
		if method is None:
			raise LoxRuntimeError(expr.method, "Undefined property '%s'." % expr.method.lexeme)
		return method.bind(receiver)
