"""
Recursive-descent parser: tokens in, syntax tree out.

Each grammar rule is one method, arranged from lowest precedence to highest.
On a syntax error, the parser reports the problem, then skips ahead to
something that looks like the start of a statement and carries on,
so that one mistake yields one complaint rather than a cascade.
"""
from typing import Optional
from . import syntax
from .diagnostics import Report
from .scanner import scan
from .tokens import Token, TokenKind as K

MAX_ARGS = 255

class ParseError(Exception):
	""" Unwinds the parser to the nearest statement boundary. Already reported by then. """

# Tokens that begin a fresh declaration or statement; synchronization stops before these.
_STATEMENT_STARTERS = frozenset([K.CLASS, K.FUN, K.VAR, K.FOR, K.IF, K.WHILE, K.PRINT, K.RETURN])

class Parser:
	def __init__(self, tokens:list[Token], report:Report):
		assert tokens and tokens[-1].kind is K.EOF
		self.tokens = tokens
		self.report = report
		self.current = 0

	# Entry points:

	def parse(self) -> list[syntax.Stmt]:
		""" A whole program. Statements that fail to parse are left out. """
		statements = []
		while not self.at_end():
			try:
				stmt = self.declaration()
			except RecursionError:
				self.error(self.peek(), "Too much nesting.")
				break
			if stmt is not None:
				statements.append(stmt)
		return statements

	def parse_expression(self) -> Optional[syntax.Expr]:
		""" Just one expression, which must take up the whole input. """
		try:
			expr = self.expression()
			if not self.at_end():
				raise self.error(self.peek(), "Expect end of expression.")
			return expr
		except ParseError:
			return None
		except RecursionError:
			self.error(self.peek(), "Too much nesting.")
			return None

	# Token-stream bookkeeping:

	def peek(self) -> Token: return self.tokens[self.current]
	def previous(self) -> Token: return self.tokens[self.current - 1]
	def at_end(self) -> bool: return self.peek().kind is K.EOF

	def check(self, kind:K) -> bool:
		return not self.at_end() and self.peek().kind is kind

	def advance(self) -> Token:
		if not self.at_end(): self.current += 1
		return self.previous()

	def match(self, *kinds:K) -> bool:
		for kind in kinds:
			if self.check(kind):
				self.advance()
				return True
		return False

	def consume(self, kind:K, message:str) -> Token:
		if self.check(kind): return self.advance()
		raise self.error(self.peek(), message)

	def error(self, token:Token, message:str) -> ParseError:
		""" Report the problem. The caller decides whether to raise the result. """
		self.report.parse_error(token, message)
		return ParseError(message)

	def synchronize(self):
		self.advance()
		while not self.at_end():
			if self.previous().kind is K.SEMICOLON: return
			if self.peek().kind in _STATEMENT_STARTERS: return
			self.advance()

	# Declarations and statements:

	def declaration(self) -> Optional[syntax.Stmt]:
		try:
			if self.match(K.CLASS): return self.class_declaration()
			if self.match(K.FUN): return self.function("function")
			if self.match(K.VAR): return self.var_declaration()
			return self.statement()
		except ParseError:
			self.synchronize()
			return None

	def class_declaration(self) -> syntax.Class:
		name = self.consume(K.IDENTIFIER, "Expect class name.")
		superclass = None
		if self.match(K.LESS):
			self.consume(K.IDENTIFIER, "Expect superclass name.")
			superclass = syntax.Variable(self.previous())
		self.consume(K.LEFT_BRACE, "Expect '{' before class body.")
		methods = []
		while not self.check(K.RIGHT_BRACE) and not self.at_end():
			methods.append(self.function("method"))
		self.consume(K.RIGHT_BRACE, "Expect '}' after class body.")
		return syntax.Class(name, superclass, methods)

	def function(self, kind:str) -> syntax.Function:
		name = self.consume(K.IDENTIFIER, "Expect %s name." % kind)
		self.consume(K.LEFT_PAREN, "Expect '(' after %s name." % kind)
		params = []
		if not self.check(K.RIGHT_PAREN):
			while True:
				if len(params) >= MAX_ARGS:
					self.error(self.peek(), "Can't have more than %d parameters." % MAX_ARGS)
				params.append(self.consume(K.IDENTIFIER, "Expect parameter name."))
				if not self.match(K.COMMA): break
		self.consume(K.RIGHT_PAREN, "Expect ')' after parameters.")
		self.consume(K.LEFT_BRACE, "Expect '{' before %s body." % kind)
		return syntax.Function(name, params, self.block())

	def var_declaration(self) -> syntax.Var:
		name = self.consume(K.IDENTIFIER, "Expect variable name.")
		initializer = self.expression() if self.match(K.EQUAL) else None
		self.consume(K.SEMICOLON, "Expect ';' after variable declaration.")
		return syntax.Var(name, initializer)

	def statement(self) -> syntax.Stmt:
		if self.match(K.FOR): return self.for_statement()
		if self.match(K.IF): return self.if_statement()
		if self.match(K.PRINT): return self.print_statement()
		if self.match(K.RETURN): return self.return_statement()
		if self.match(K.WHILE): return self.while_statement()
		if self.match(K.LEFT_BRACE): return syntax.Block(self.block())
		return self.expression_statement()

	def for_statement(self) -> syntax.Stmt:
		"""
		There is no for-loop in the tree. Instead:
			for (init; cond; incr) body
		becomes
			{ init; while (cond) { body; incr; } }
		"""
		self.consume(K.LEFT_PAREN, "Expect '(' after 'for'.")
		if self.match(K.SEMICOLON): initializer = None
		elif self.match(K.VAR): initializer = self.var_declaration()
		else: initializer = self.expression_statement()

		condition = None if self.check(K.SEMICOLON) else self.expression()
		self.consume(K.SEMICOLON, "Expect ';' after loop condition.")

		increment = None if self.check(K.RIGHT_PAREN) else self.expression()
		self.consume(K.RIGHT_PAREN, "Expect ')' after for clauses.")

		body = self.statement()
		if increment is not None:
			body = syntax.Block([body, syntax.Expression(increment)])
		if condition is None:
			condition = syntax.Literal(True)
		body = syntax.While(condition, body)
		if initializer is not None:
			body = syntax.Block([initializer, body])
		return body

	def if_statement(self) -> syntax.If:
		self.consume(K.LEFT_PAREN, "Expect '(' after 'if'.")
		condition = self.expression()
		self.consume(K.RIGHT_PAREN, "Expect ')' after if condition.")
		then_branch = self.statement()
		else_branch = self.statement() if self.match(K.ELSE) else None
		return syntax.If(condition, then_branch, else_branch)

	def print_statement(self) -> syntax.Print:
		value = self.expression()
		self.consume(K.SEMICOLON, "Expect ';' after value.")
		return syntax.Print(value)

	def return_statement(self) -> syntax.Return:
		keyword = self.previous()
		value = None if self.check(K.SEMICOLON) else self.expression()
		self.consume(K.SEMICOLON, "Expect ';' after return value.")
		return syntax.Return(keyword, value)

	def while_statement(self) -> syntax.While:
		self.consume(K.LEFT_PAREN, "Expect '(' after 'while'.")
		condition = self.expression()
		self.consume(K.RIGHT_PAREN, "Expect ')' after condition.")
		return syntax.While(condition, self.statement())

	def block(self) -> list[syntax.Stmt]:
		statements = []
		while not self.check(K.RIGHT_BRACE) and not self.at_end():
			stmt = self.declaration()
			if stmt is not None:
				statements.append(stmt)
		self.consume(K.RIGHT_BRACE, "Expect '}' after block.")
		return statements

	def expression_statement(self) -> syntax.Expression:
		expr = self.expression()
		self.consume(K.SEMICOLON, "Expect ';' after expression.")
		return syntax.Expression(expr)

	# Expressions, from loosest binding to tightest:

	def expression(self) -> syntax.Expr:
		return self.assignment()

	def assignment(self) -> syntax.Expr:
		expr = self.logic_or()
		if self.match(K.EQUAL):
			equals = self.previous()
			value = self.assignment()
			if isinstance(expr, syntax.Variable):
				return syntax.Assign(expr.name, value)
			if isinstance(expr, syntax.Get):
				return syntax.Set(expr.obj, expr.name, value)
			# Not thrown: the parser knows where it is, so no need to synchronize.
			self.error(equals, "Invalid assignment target.")
		return expr

	def logic_or(self) -> syntax.Expr:
		expr = self.logic_and()
		while self.match(K.OR):
			op = self.previous()
			expr = syntax.Logical(expr, op, self.logic_and())
		return expr

	def logic_and(self) -> syntax.Expr:
		expr = self.equality()
		while self.match(K.AND):
			op = self.previous()
			expr = syntax.Logical(expr, op, self.equality())
		return expr

	def _binary(self, operand, *kinds:K) -> syntax.Expr:
		# All the left-associative binary levels share this shape.
		expr = operand()
		while self.match(*kinds):
			op = self.previous()
			expr = syntax.Binary(expr, op, operand())
		return expr

	def equality(self) -> syntax.Expr:
		return self._binary(self.comparison, K.BANG_EQUAL, K.EQUAL_EQUAL)

	def comparison(self) -> syntax.Expr:
		return self._binary(self.term, K.GREATER, K.GREATER_EQUAL, K.LESS, K.LESS_EQUAL)

	def term(self) -> syntax.Expr:
		return self._binary(self.factor, K.MINUS, K.PLUS)

	def factor(self) -> syntax.Expr:
		return self._binary(self.unary, K.SLASH, K.STAR)

	def unary(self) -> syntax.Expr:
		if self.match(K.BANG, K.MINUS):
			op = self.previous()
			return syntax.Unary(op, self.unary())
		return self.call()

	def call(self) -> syntax.Expr:
		expr = self.primary()
		while True:
			if self.match(K.LEFT_PAREN):
				expr = self.finish_call(expr)
			elif self.match(K.DOT):
				name = self.consume(K.IDENTIFIER, "Expect property name after '.'.")
				expr = syntax.Get(expr, name)
			else:
				return expr

	def finish_call(self, callee:syntax.Expr) -> syntax.Call:
		args = []
		if not self.check(K.RIGHT_PAREN):
			while True:
				if len(args) >= MAX_ARGS:
					self.error(self.peek(), "Can't have more than %d arguments." % MAX_ARGS)
				args.append(self.expression())
				if not self.match(K.COMMA): break
		paren = self.consume(K.RIGHT_PAREN, "Expect ')' after arguments.")
		return syntax.Call(callee, paren, args)

	def primary(self) -> syntax.Expr:
		if self.match(K.FALSE): return syntax.Literal(False)
		if self.match(K.TRUE): return syntax.Literal(True)
		if self.match(K.NIL): return syntax.Literal(None)
		if self.match(K.NUMBER, K.STRING): return syntax.Literal(self.previous().literal)
		if self.match(K.THIS): return syntax.This(self.previous())
		if self.match(K.IDENTIFIER): return syntax.Variable(self.previous())
		if self.match(K.SUPER):
			keyword = self.previous()
			self.consume(K.DOT, "Expect '.' after 'super'.")
			method = self.consume(K.IDENTIFIER, "Expect superclass method name.")
			return syntax.Super(keyword, method)
		if self.match(K.LEFT_PAREN):
			expr = self.expression()
			self.consume(K.RIGHT_PAREN, "Expect ')' after expression.")
			return syntax.Grouping(expr)
		raise self.error(self.peek(), "Expect expression.")

def parse_text(text:str, report:Report) -> list[syntax.Stmt]:
	""" Scan and parse a whole program. Check the report before trusting the result. """
	return Parser(scan(text, report), report).parse()

def parse_expression_text(text:str, report:Report) -> Optional[syntax.Expr]:
	return Parser(scan(text, report), report).parse_expression()
