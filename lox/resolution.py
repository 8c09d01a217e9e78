"""
All the static scope business goes here.

By the time this pass is finished, every reference to a local variable (and every `this` and `super`)
has an entry in the distance table saying how many scopes out its binding lives.
References with no entry are globals, which the tree-walker looks up by name at run-time.

Along the way, this pass catches the scope mistakes that are cheap to catch statically.
It complains to the report and keeps going; it never throws.
"""
from typing import Optional, Sequence
from boozetools.support.foundation import Visitor
from . import syntax
from .diagnostics import Report
from .tokens import Token

# What sort of function body are we in?
NO_FUNCTION = None
FUNCTION = "function"
METHOD = "method"
INITIALIZER = "initializer"

# What sort of class body are we in?
NO_CLASS = None
CLASS = "class"
SUBCLASS = "subclass"

class Resolver(Visitor):
	"""
	Each scope maps a name to whether its initializer has finished.
	A name is declared (False) before its initializer is resolved and defined (True) after;
	reading it in between is the classic `var a = a;` mistake.

	The global scope is not on the stack: Globals may be redeclared and are resolved late.
	"""
	_scopes: list[dict[str, bool]]
	_function: Optional[str]
	_class: Optional[str]

	def __init__(self, distances:dict[syntax.Expr, int], report:Report):
		self._distances = distances
		self._report = report
		self._scopes = []
		self._function = NO_FUNCTION
		self._class = NO_CLASS
		self._locals_resolved = 0

	def resolve(self, statements:Sequence[syntax.Stmt]):
		self.tour(statements)
		self._report.info("Resolved %d local reference(s)." % self._locals_resolved)

	def tour(self, items):
		for i in items:
			self.visit(i)

	# Scope bookkeeping

	def _begin_scope(self, **preset:bool):
		self._scopes.append(dict(preset))

	def _end_scope(self):
		self._scopes.pop()

	def _declare(self, name:Token):
		if not self._scopes: return
		scope = self._scopes[-1]
		if name.lexeme in scope:
			self._report.resolution_error(name, "Already a variable with this name in this scope.")
		scope[name.lexeme] = False

	def _define(self, name:Token):
		if not self._scopes: return
		self._scopes[-1][name.lexeme] = True

	def _resolve_local(self, expr:syntax.Expr, name:Token):
		for distance, scope in enumerate(reversed(self._scopes)):
			if name.lexeme in scope:
				self._distances[expr] = distance
				self._locals_resolved += 1
				return
		# Not found: assume it is global.

	def _resolve_function(self, fn:syntax.Function, kind:str):
		enclosing_function = self._function
		self._function = kind
		self._begin_scope()
		for param in fn.params:
			self._declare(param)
			self._define(param)
		self.tour(fn.body)
		self._end_scope()
		self._function = enclosing_function

	# Statements

	def visit_Block(self, stmt:syntax.Block):
		self._begin_scope()
		self.tour(stmt.statements)
		self._end_scope()

	def visit_Var(self, stmt:syntax.Var):
		self._declare(stmt.name)
		if stmt.initializer is not None:
			self.visit(stmt.initializer)
		self._define(stmt.name)

	def visit_Function(self, stmt:syntax.Function):
		# Defined before the body, so the function may call itself.
		self._declare(stmt.name)
		self._define(stmt.name)
		self._resolve_function(stmt, FUNCTION)

	def visit_Class(self, stmt:syntax.Class):
		enclosing_class = self._class
		self._class = CLASS
		self._declare(stmt.name)
		self._define(stmt.name)

		if stmt.superclass is not None:
			if stmt.superclass.name.lexeme == stmt.name.lexeme:
				self._report.resolution_error(stmt.superclass.name, "A class can't inherit from itself.")
			self._class = SUBCLASS
			self.visit(stmt.superclass)
			self._begin_scope(super=True)

		self._begin_scope(this=True)
		for method in stmt.methods:
			kind = INITIALIZER if method.name.lexeme == "init" else METHOD
			self._resolve_function(method, kind)
		self._end_scope()

		if stmt.superclass is not None: self._end_scope()
		self._class = enclosing_class

	def visit_Expression(self, stmt:syntax.Expression):
		self.visit(stmt.expr)

	def visit_Print(self, stmt:syntax.Print):
		self.visit(stmt.expr)

	def visit_If(self, stmt:syntax.If):
		self.visit(stmt.condition)
		self.visit(stmt.then_branch)
		if stmt.else_branch is not None: self.visit(stmt.else_branch)

	def visit_While(self, stmt:syntax.While):
		self.visit(stmt.condition)
		self.visit(stmt.body)

	def visit_Return(self, stmt:syntax.Return):
		if self._function is NO_FUNCTION:
			self._report.resolution_error(stmt.keyword, "Can't return from top-level code.")
		if stmt.value is not None:
			if self._function == INITIALIZER:
				self._report.resolution_error(stmt.keyword, "Can't return a value from an initializer.")
			self.visit(stmt.value)

	# Expressions

	def visit_Variable(self, expr:syntax.Variable):
		if self._scopes and self._scopes[-1].get(expr.name.lexeme) is False:
			self._report.resolution_error(expr.name, "Can't read local variable in its own initializer.")
		self._resolve_local(expr, expr.name)

	def visit_Assign(self, expr:syntax.Assign):
		self.visit(expr.value)
		self._resolve_local(expr, expr.name)

	def visit_This(self, expr:syntax.This):
		if self._class is NO_CLASS:
			self._report.resolution_error(expr.keyword, "Can't use 'this' outside of a class.")
			return
		self._resolve_local(expr, expr.keyword)

	def visit_Super(self, expr:syntax.Super):
		if self._class is NO_CLASS:
			self._report.resolution_error(expr.keyword, "Can't use 'super' outside of a class.")
		elif self._class != SUBCLASS:
			self._report.resolution_error(expr.keyword, "Can't use 'super' in a class with no superclass.")
		self._resolve_local(expr, expr.keyword)

	def visit_Literal(self, expr:syntax.Literal): pass

	def visit_Grouping(self, expr:syntax.Grouping):
		self.visit(expr.inner)

	def visit_Unary(self, expr:syntax.Unary):
		self.visit(expr.operand)

	def visit_Binary(self, expr:syntax.Binary):
		self.visit(expr.lhs)
		self.visit(expr.rhs)

	def visit_Logical(self, expr:syntax.Logical):
		self.visit(expr.lhs)
		self.visit(expr.rhs)

	def visit_Call(self, expr:syntax.Call):
		self.visit(expr.callee)
		self.tour(expr.args)

	def visit_Get(self, expr:syntax.Get):
		# Properties are looked up dynamically; only the target has names to resolve.
		self.visit(expr.target)

	def visit_Set(self, expr:syntax.Set):
		self.visit(expr.value)
		self.visit(expr.target)
