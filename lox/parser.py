"""
Recursive descent, one method per level of the grammar.

Precedence climbs with the call chain, loosest first:
	assignment, or, and, equality, comparison, term, factor, unary, call, primary.

A malformed statement gets reported, then the parser skips ahead to something that looks
like the start of the next statement and carries on. So the result is every statement that
parsed well. Callers must consult the report to learn whether anything went wrong.
"""
from typing import Optional
from boozetools.parsing.interface import ParseError
from . import syntax
from .tokens import Token, NAME, NUMBER, STRING, END, STATEMENT_STARTERS
from .diagnostics import Report

MAX_ARGUMENTS = 255

class Confusion(ParseError):
	"""
	Local signal: the current declaration is hopeless.
	It is always caught at the declaration boundary, after the report already has the details.
	"""
	pass

class Parser:
	def __init__(self, tokens:list[Token], report:Report):
		assert tokens and tokens[-1].kind == END
		self._tokens = tokens
		self._report = report
		self._current = 0

	def parse(self) -> list[syntax.Stmt]:
		statements = []
		while not self._at_end():
			stmt = self._declaration()
			if stmt is not None: statements.append(stmt)
		return statements

	# Declarations and statements

	def _declaration(self) -> Optional[syntax.Stmt]:
		try:
			if self._match("CLASS"): return self._class_declaration()
			if self._match("FUN"): return self._function("function")
			if self._match("VAR"): return self._var_declaration()
			return self._statement()
		except Confusion:
			self._synchronize()
			return None

	def _class_declaration(self) -> syntax.Class:
		name = self._consume(NAME, "Expect class name.")
		superclass = None
		if self._match("<"):
			superclass = syntax.Variable(self._consume(NAME, "Expect superclass name."))
		self._consume("{", "Expect '{' before class body.")
		methods = []
		while not self._check("}") and not self._at_end():
			methods.append(self._function("method"))
		self._consume("}", "Expect '}' after class body.")
		return syntax.Class(name, superclass, methods)

	def _function(self, kind:str) -> syntax.Function:
		name = self._consume(NAME, "Expect %s name." % kind)
		self._consume("(", "Expect '(' after %s name." % kind)
		params = []
		if not self._check(")"):
			params.append(self._parameter())
			while self._match(","):
				if len(params) >= MAX_ARGUMENTS:
					self._error(self._peek(), "Can't have more than %d parameters." % MAX_ARGUMENTS)
				params.append(self._parameter())
		self._consume(")", "Expect ')' after parameters.")
		self._consume("{", "Expect '{' before %s body." % kind)
		return syntax.Function(name, params, self._block())

	def _parameter(self) -> Token:
		return self._consume(NAME, "Expect parameter name.")

	def _var_declaration(self) -> syntax.Var:
		name = self._consume(NAME, "Expect variable name.")
		initializer = self._expression() if self._match("=") else None
		self._consume(";", "Expect ';' after variable declaration.")
		return syntax.Var(name, initializer)

	def _statement(self) -> syntax.Stmt:
		if self._match("FOR"): return self._for_statement()
		if self._match("IF"): return self._if_statement()
		if self._match("PRINT"): return self._print_statement()
		if self._match("RETURN"): return self._return_statement()
		if self._match("WHILE"): return self._while_statement()
		if self._match("{"): return syntax.Block(self._block())
		return self._expression_statement()

	def _for_statement(self) -> syntax.Stmt:
		"""
		There is no for-loop node. Instead,
			for (init; cond; incr) body
		becomes
			{ init; while (cond) { body; incr; } }
		and the outer block keeps the loop variable to the loop.
		"""
		self._consume("(", "Expect '(' after 'for'.")
		if self._match(";"): initializer = None
		elif self._match("VAR"): initializer = self._var_declaration()
		else: initializer = self._expression_statement()

		condition = None if self._check(";") else self._expression()
		self._consume(";", "Expect ';' after loop condition.")
		increment = None if self._check(")") else self._expression()
		self._consume(")", "Expect ')' after for clauses.")
		body = self._statement()

		if increment is not None:
			body = syntax.Block([body, syntax.Expression(increment)])
		if condition is None:
			condition = syntax.Literal(True)
		body = syntax.While(condition, body)
		if initializer is not None:
			body = syntax.Block([initializer, body])
		return body

	def _if_statement(self) -> syntax.If:
		self._consume("(", "Expect '(' after 'if'.")
		condition = self._expression()
		self._consume(")", "Expect ')' after if condition.")
		then_branch = self._statement()
		else_branch = self._statement() if self._match("ELSE") else None
		return syntax.If(condition, then_branch, else_branch)

	def _print_statement(self) -> syntax.Print:
		value = self._expression()
		self._consume(";", "Expect ';' after value.")
		return syntax.Print(value)

	def _return_statement(self) -> syntax.Return:
		keyword = self._previous()
		value = None if self._check(";") else self._expression()
		self._consume(";", "Expect ';' after return value.")
		return syntax.Return(keyword, value)

	def _while_statement(self) -> syntax.While:
		self._consume("(", "Expect '(' after 'while'.")
		condition = self._expression()
		self._consume(")", "Expect ')' after condition.")
		return syntax.While(condition, self._statement())

	def _block(self) -> list[syntax.Stmt]:
		statements = []
		while not self._check("}") and not self._at_end():
			stmt = self._declaration()
			if stmt is not None: statements.append(stmt)
		self._consume("}", "Expect '}' after block.")
		return statements

	def _expression_statement(self) -> syntax.Expression:
		expr = self._expression()
		self._consume(";", "Expect ';' after expression.")
		return syntax.Expression(expr)

	# Expressions

	def _expression(self) -> syntax.Expr:
		return self._assignment()

	def _assignment(self) -> syntax.Expr:
		expr = self._or()
		if self._match("="):
			equals = self._previous()
			value = self._assignment()
			if isinstance(expr, syntax.Variable):
				return syntax.Assign(expr.name, value)
			if isinstance(expr, syntax.Get):
				return syntax.Set(expr.target, expr.name, value)
			# Report, but no need to unwind: the parser is not actually confused.
			self._error(equals, "Invalid assignment target.")
		return expr

	def _or(self) -> syntax.Expr:
		expr = self._and()
		while self._match("OR"):
			op = self._previous()
			expr = syntax.Logical(expr, op, self._and())
		return expr

	def _and(self) -> syntax.Expr:
		expr = self._equality()
		while self._match("AND"):
			op = self._previous()
			expr = syntax.Logical(expr, op, self._equality())
		return expr

	def _left_associative(self, operand, *kinds) -> syntax.Expr:
		expr = operand()
		while self._match(*kinds):
			op = self._previous()
			expr = syntax.Binary(expr, op, operand())
		return expr

	def _equality(self) -> syntax.Expr:
		return self._left_associative(self._comparison, "!=", "==")

	def _comparison(self) -> syntax.Expr:
		return self._left_associative(self._term, ">", ">=", "<", "<=")

	def _term(self) -> syntax.Expr:
		return self._left_associative(self._factor, "-", "+")

	def _factor(self) -> syntax.Expr:
		return self._left_associative(self._unary, "/", "*")

	def _unary(self) -> syntax.Expr:
		if self._match("!", "-"):
			op = self._previous()
			return syntax.Unary(op, self._unary())
		return self._call()

	def _call(self) -> syntax.Expr:
		expr = self._primary()
		while True:
			if self._match("("):
				expr = self._finish_call(expr)
			elif self._match("."):
				name = self._consume(NAME, "Expect property name after '.'.")
				expr = syntax.Get(expr, name)
			else:
				return expr

	def _finish_call(self, callee:syntax.Expr) -> syntax.Call:
		args = []
		if not self._check(")"):
			args.append(self._expression())
			while self._match(","):
				if len(args) >= MAX_ARGUMENTS:
					self._error(self._peek(), "Can't have more than %d arguments." % MAX_ARGUMENTS)
				args.append(self._expression())
		paren = self._consume(")", "Expect ')' after arguments.")
		return syntax.Call(callee, paren, args)

	def _primary(self) -> syntax.Expr:
		if self._match("FALSE"): return syntax.Literal(False)
		if self._match("TRUE"): return syntax.Literal(True)
		if self._match("NIL"): return syntax.Literal(None)
		if self._match(NUMBER, STRING): return syntax.Literal(self._previous().literal)
		if self._match("THIS"): return syntax.This(self._previous())
		if self._match("SUPER"):
			keyword = self._previous()
			self._consume(".", "Expect '.' after 'super'.")
			method = self._consume(NAME, "Expect superclass method name.")
			return syntax.Super(keyword, method)
		if self._match(NAME): return syntax.Variable(self._previous())
		if self._match("("):
			expr = self._expression()
			self._consume(")", "Expect ')' after expression.")
			return syntax.Grouping(expr)
		raise self._error(self._peek(), "Expect expression.")

	# Recovery

	def _synchronize(self):
		""" Discard tokens until just past a semicolon, or just before the start of a statement. """
		self._advance()
		while not self._at_end():
			if self._previous().kind == ";": return
			if self._peek().kind in STATEMENT_STARTERS: return
			self._advance()

	def _error(self, token:Token, message:str) -> Confusion:
		""" Report the problem. Return (not raise) the signal, so the caller decides whether to unwind. """
		self._report.parse_error(token, message)
		return Confusion(token, message)

	# Token-stream primitives

	def _match(self, *kinds:str) -> bool:
		if self._peek().kind in kinds:
			self._advance()
			return True
		return False

	def _consume(self, kind:str, message:str) -> Token:
		if self._check(kind): return self._advance()
		raise self._error(self._peek(), message)

	def _check(self, kind:str) -> bool:
		return self._peek().kind == kind

	def _advance(self) -> Token:
		if not self._at_end(): self._current += 1
		return self._previous()

	def _at_end(self) -> bool:
		return self._peek().kind == END

	def _peek(self) -> Token:
		return self._tokens[self._current]

	def _previous(self) -> Token:
		return self._tokens[self._current-1]
