"""
The set of parse-nodes in simple form.

There are two closed families: expressions and statements.
Every pass over the tree (resolver, tree-walker, printer) is a Visitor
with one method per concrete class named here, so adding a node means visiting it everywhere.

Nodes compare and hash by identity: The resolver's distance table is keyed on expression nodes,
and two textually-identical references in different places must stay distinct.
"""
from typing import Any, Optional, Sequence
from .tokens import Token

class Expr:
	""" Base of all expression nodes """

class Stmt:
	""" Base of all statement nodes """

###############################################################################

class Literal(Expr):
	def __init__(self, value: Any): self.value = value
	def __repr__(self): return "<Literal %r>" % self.value

class Grouping(Expr):
	def __init__(self, inner: Expr): self.inner = inner

class Unary(Expr):
	def __init__(self, op: Token, operand: Expr):
		self.op, self.operand = op, operand

class Binary(Expr):
	def __init__(self, lhs: Expr, op: Token, rhs: Expr):
		self.lhs, self.op, self.rhs = lhs, op, rhs

class Logical(Expr):
	""" Like Binary, but `and` / `or` only evaluate the right side if they must. """
	def __init__(self, lhs: Expr, op: Token, rhs: Expr):
		self.lhs, self.op, self.rhs = lhs, op, rhs

class Variable(Expr):
	def __init__(self, name: Token): self.name = name
	def __repr__(self): return "<ref:%s>" % self.name.lexeme

class Assign(Expr):
	def __init__(self, name: Token, value: Expr):
		self.name, self.value = name, value

class Call(Expr):
	# The closing paren is kept so run-time errors can point at the call.
	def __init__(self, callee: Expr, paren: Token, args: Sequence[Expr]):
		self.callee, self.paren, self.args = callee, paren, args

class Get(Expr):
	def __init__(self, target: Expr, name: Token):
		self.target, self.name = target, name

class Set(Expr):
	def __init__(self, target: Expr, name: Token, value: Expr):
		self.target, self.name, self.value = target, name, value

class This(Expr):
	def __init__(self, keyword: Token): self.keyword = keyword

class Super(Expr):
	def __init__(self, keyword: Token, method: Token):
		self.keyword, self.method = keyword, method

###############################################################################

class Expression(Stmt):
	def __init__(self, expr: Expr): self.expr = expr

class Print(Stmt):
	def __init__(self, expr: Expr): self.expr = expr

class Var(Stmt):
	def __init__(self, name: Token, initializer: Optional[Expr]):
		self.name, self.initializer = name, initializer

class Block(Stmt):
	def __init__(self, statements: Sequence[Stmt]): self.statements = statements

class If(Stmt):
	def __init__(self, condition: Expr, then_branch: Stmt, else_branch: Optional[Stmt]):
		self.condition, self.then_branch, self.else_branch = condition, then_branch, else_branch

class While(Stmt):
	def __init__(self, condition: Expr, body: Stmt):
		self.condition, self.body = condition, body

class Function(Stmt):
	def __init__(self, name: Token, params: Sequence[Token], body: Sequence[Stmt]):
		self.name, self.params, self.body = name, params, body
	def __repr__(self):
		return "{fun|%s(%s)}" % (self.name.lexeme, ", ".join(p.lexeme for p in self.params))

class Return(Stmt):
	def __init__(self, keyword: Token, value: Optional[Expr]):
		self.keyword, self.value = keyword, value

class Class(Stmt):
	def __init__(self, name: Token, superclass: Optional[Variable], methods: Sequence[Function]):
		self.name, self.superclass, self.methods = name, superclass, methods
	def __repr__(self): return "{class|%s}" % self.name.lexeme
