"""
Render syntax trees in a parenthesized prefix form, mostly for debugging the parser.

	(* (- 123.0) (group 45.67))

The for-loop has no node of its own, so it shows up here already desugared.
"""
from typing import Sequence
from boozetools.support.foundation import Visitor
from . import syntax

class AstPrinter(Visitor):

	def dump(self, statements:Sequence[syntax.Stmt]) -> str:
		return "\n".join(self.visit(s) for s in statements)

	def _parenthesize(self, head:str, *parts) -> str:
		words = [head]
		for p in parts:
			words.append(p if isinstance(p, str) else self.visit(p))
		return "(%s)" % " ".join(words)

	def visit_Literal(self, expr:syntax.Literal):
		value = expr.value
		if value is None: return "nil"
		if value is True: return "true"
		if value is False: return "false"
		if isinstance(value, str): return '"%s"' % value
		return repr(value)

	def visit_Grouping(self, expr:syntax.Grouping):
		return self._parenthesize("group", expr.inner)

	def visit_Unary(self, expr:syntax.Unary):
		return self._parenthesize(expr.op.lexeme, expr.operand)

	def visit_Binary(self, expr:syntax.Binary):
		return self._parenthesize(expr.op.lexeme, expr.lhs, expr.rhs)

	def visit_Logical(self, expr:syntax.Logical):
		return self._parenthesize(expr.op.lexeme, expr.lhs, expr.rhs)

	def visit_Variable(self, expr:syntax.Variable):
		return expr.name.lexeme

	def visit_Assign(self, expr:syntax.Assign):
		return self._parenthesize("=", expr.name.lexeme, expr.value)

	def visit_Call(self, expr:syntax.Call):
		return self._parenthesize("call", expr.callee, *expr.args)

	def visit_Get(self, expr:syntax.Get):
		return self._parenthesize(".", expr.target, expr.name.lexeme)

	def visit_Set(self, expr:syntax.Set):
		target = self._parenthesize(".", expr.target, expr.name.lexeme)
		return self._parenthesize("=", target, expr.value)

	def visit_This(self, expr:syntax.This):
		return "this"

	def visit_Super(self, expr:syntax.Super):
		return self._parenthesize("super", expr.method.lexeme)

	def visit_Expression(self, stmt:syntax.Expression):
		return self._parenthesize(";", stmt.expr)

	def visit_Print(self, stmt:syntax.Print):
		return self._parenthesize("print", stmt.expr)

	def visit_Var(self, stmt:syntax.Var):
		if stmt.initializer is None:
			return self._parenthesize("var", stmt.name.lexeme)
		return self._parenthesize("var", stmt.name.lexeme, stmt.initializer)

	def visit_Block(self, stmt:syntax.Block):
		return self._parenthesize("block", *stmt.statements)

	def visit_If(self, stmt:syntax.If):
		if stmt.else_branch is None:
			return self._parenthesize("if", stmt.condition, stmt.then_branch)
		return self._parenthesize("if", stmt.condition, stmt.then_branch, stmt.else_branch)

	def visit_While(self, stmt:syntax.While):
		return self._parenthesize("while", stmt.condition, stmt.body)

	def visit_Function(self, stmt:syntax.Function):
		params = "(%s)" % " ".join(p.lexeme for p in stmt.params)
		return self._parenthesize("fun", stmt.name.lexeme, params, *stmt.body)

	def visit_Return(self, stmt:syntax.Return):
		if stmt.value is None: return "(return)"
		return self._parenthesize("return", stmt.value)

	def visit_Class(self, stmt:syntax.Class):
		if stmt.superclass is None:
			return self._parenthesize("class", stmt.name.lexeme, *stmt.methods)
		return self._parenthesize("class", stmt.name.lexeme, "<", stmt.superclass.name.lexeme, *stmt.methods)
