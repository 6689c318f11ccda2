"""
Renders a syntax tree back into Moth source text.

The output is meant to be valid Moth, if somewhat over-parenthesized,
so that feeding it back through the parser gives a program that behaves
the same as the original. That makes it a handy check on the parser,
and it lets curious users see how precedence actually came out.
For-loops come out as the while-loops they were desugared into.
"""
from decimal import Decimal
from typing import Sequence
from boozetools.support.foundation import Visitor
from . import syntax

INDENT = "    "

def render_number(value:float) -> str:
	""" Positional notation, since the scanner knows nothing of exponents. """
	if value.is_integer():
		return "%d" % value
	return format(Decimal(repr(value)), "f")

class ExprPrinter(Visitor):
	def visit_Literal(self, expr:syntax.Literal):
		value = expr.value
		if value is None: return "nil"
		if value is True: return "true"
		if value is False: return "false"
		if isinstance(value, float): return render_number(value)
		return '"%s"' % value

	def visit_Grouping(self, expr:syntax.Grouping):
		# Everything compound is parenthesized anyway.
		return self.visit(expr.expression)

	def visit_Unary(self, expr:syntax.Unary):
		return "(%s%s)" % (expr.op.lexeme, self.visit(expr.right))

	def visit_Binary(self, expr:syntax.Binary):
		return "(%s %s %s)" % (self.visit(expr.left), expr.op.lexeme, self.visit(expr.right))

	def visit_Logical(self, expr:syntax.Logical):
		return "(%s %s %s)" % (self.visit(expr.left), expr.op.lexeme, self.visit(expr.right))

	def visit_Variable(self, expr:syntax.Variable):
		return expr.name.lexeme

	def visit_Assign(self, expr:syntax.Assign):
		return "(%s = %s)" % (expr.name.lexeme, self.visit(expr.value))

	def visit_Call(self, expr:syntax.Call):
		return "%s(%s)" % (self.visit(expr.callee), ", ".join(map(self.visit, expr.args)))

	def visit_Get(self, expr:syntax.Get):
		return "%s.%s" % (self.visit(expr.obj), expr.name.lexeme)

	def visit_Set(self, expr:syntax.Set):
		return "(%s.%s = %s)" % (self.visit(expr.obj), expr.name.lexeme, self.visit(expr.value))

	def visit_This(self, expr:syntax.This):
		return "this"

	def visit_Super(self, expr:syntax.Super):
		return "super.%s" % expr.method.lexeme

class StmtPrinter(ExprPrinter):
	""" Statements come out one per line, indented by block depth. """
	def __init__(self):
		self._depth = 0

	def _body(self, statements:Sequence[syntax.Stmt]) -> str:
		if not statements:
			return "{}"
		self._depth += 1
		lines = [INDENT*self._depth + self.visit(s) for s in statements]
		self._depth -= 1
		return "{\n%s\n%s}" % ("\n".join(lines), INDENT*self._depth)

	def visit_Expression(self, stmt:syntax.Expression):
		return "%s;" % self.visit(stmt.expression)

	def visit_Print(self, stmt:syntax.Print):
		return "print %s;" % self.visit(stmt.expression)

	def visit_Var(self, stmt:syntax.Var):
		if stmt.initializer is None:
			return "var %s;" % stmt.name.lexeme
		return "var %s = %s;" % (stmt.name.lexeme, self.visit(stmt.initializer))

	def visit_Block(self, stmt:syntax.Block):
		return self._body(stmt.statements)

	def visit_If(self, stmt:syntax.If):
		text = "if (%s) %s" % (self.visit(stmt.condition), self.visit(stmt.then_branch))
		if stmt.else_branch is not None:
			text += " else %s" % self.visit(stmt.else_branch)
		return text

	def visit_While(self, stmt:syntax.While):
		return "while (%s) %s" % (self.visit(stmt.condition), self.visit(stmt.body))

	def _function(self, stmt:syntax.Function):
		params = ", ".join(p.lexeme for p in stmt.params)
		return "%s(%s) %s" % (stmt.name.lexeme, params, self._body(stmt.body))

	def visit_Function(self, stmt:syntax.Function):
		return "fun " + self._function(stmt)

	def visit_Return(self, stmt:syntax.Return):
		if stmt.value is None:
			return "return;"
		return "return %s;" % self.visit(stmt.value)

	def visit_Class(self, stmt:syntax.Class):
		head = "class " + stmt.name.lexeme
		if stmt.superclass is not None:
			head += " < " + stmt.superclass.name.lexeme
		if not stmt.methods:
			return head + " {}"
		self._depth += 1
		lines = [INDENT*self._depth + self._function(m) for m in stmt.methods]
		self._depth -= 1
		return "%s {\n%s\n%s}" % (head, "\n".join(lines), INDENT*self._depth)

def render(statements:Sequence[syntax.Stmt]) -> str:
	printer = StmtPrinter()
	return "\n".join(printer.visit(s) for s in statements) + "\n"

def render_expression(expr:syntax.Expr) -> str:
	return ExprPrinter().visit(expr)
