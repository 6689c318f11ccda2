"""
All the variable-resolution stuff goes here.

This is a static pass between parsing and interpretation.
By the time it finishes, every local variable reference knows how many
scopes out from the point of use its declaration lives. References which
aren't found in any local scope are globals, and get no entry at all.

This is what makes closures capture their definition-site scope:
	var x = "global";
	{ fun f() { print x; } f(); var x = "block"; f(); }
prints "global" twice, because the binding of `x` within `f` gets decided
here, once, before the later `var x` can have any say in the matter.
"""
from enum import Enum
from typing import Sequence
from boozetools.support.foundation import Visitor
from . import syntax
from .diagnostics import Report
from .tokens import Token

ResolutionMap = dict[syntax.Expr, int]

class FunctionType(Enum):
	NONE = 0
	FUNCTION = 1
	METHOD = 2
	INITIALIZER = 3

class ClassType(Enum):
	NONE = 0
	CLASS = 1
	SUBCLASS = 2

class TopDown(Visitor):
	"""
	Convenience base-class to handle the dreary bits of a
	perfectly ordinary top-down walk through a syntax tree.
	"""

	def tour(self, items):
		for i in items:
			self.visit(i)

	def visit_Literal(self, expr:syntax.Literal): pass

	def visit_Grouping(self, expr:syntax.Grouping):
		self.visit(expr.expression)

	def visit_Unary(self, expr:syntax.Unary):
		self.visit(expr.right)

	def visit_Binary(self, expr:syntax.Binary):
		self.visit(expr.left)
		self.visit(expr.right)

	def visit_Logical(self, expr:syntax.Logical):
		self.visit(expr.left)
		self.visit(expr.right)

	def visit_Call(self, expr:syntax.Call):
		self.visit(expr.callee)
		self.tour(expr.args)

	def visit_Get(self, expr:syntax.Get):
		# Property names are looked up dynamically; only the object is resolved.
		self.visit(expr.obj)

	def visit_Set(self, expr:syntax.Set):
		self.visit(expr.value)
		self.visit(expr.obj)

	def visit_Expression(self, stmt:syntax.Expression):
		self.visit(stmt.expression)

	def visit_Print(self, stmt:syntax.Print):
		self.visit(stmt.expression)

	def visit_If(self, stmt:syntax.If):
		self.visit(stmt.condition)
		self.visit(stmt.then_branch)
		if stmt.else_branch is not None:
			self.visit(stmt.else_branch)

	def visit_While(self, stmt:syntax.While):
		self.visit(stmt.condition)
		self.visit(stmt.body)

class Resolver(TopDown):
	"""
	Maintains a stack of scopes, each mapping a name to whether
	its declaration is finished (True) or still in progress (False).
	The global scope is deliberately not on the stack.
	"""
	report: Report
	locals: ResolutionMap
	_scopes: list[dict[str, bool]]
	_current_function: FunctionType
	_current_class: ClassType

	def __init__(self, report:Report):
		self.report = report
		self.locals = {}
		self._scopes = []
		self._current_function = FunctionType.NONE
		self._current_class = ClassType.NONE

	def resolve(self, statements:Sequence[syntax.Stmt]) -> ResolutionMap:
		""" Resolve everything, reporting each problem along the way. """
		self.tour(statements)
		return self.locals

	# Scope bookkeeping:

	def _begin_scope(self) -> dict[str, bool]:
		scope = {}
		self._scopes.append(scope)
		return scope

	def _end_scope(self):
		self._scopes.pop()

	def _declare(self, name:Token):
		if not self._scopes: return
		scope = self._scopes[-1]
		if name.lexeme in scope:
			self.report.resolve_error(name, "Already a variable with this name in this scope.")
		scope[name.lexeme] = False

	def _define(self, name:Token):
		if not self._scopes: return
		self._scopes[-1][name.lexeme] = True

	def _resolve_local(self, expr:syntax.Expr, name:str):
		for hops, scope in enumerate(reversed(self._scopes)):
			if name in scope:
				self.locals[expr] = hops
				return
		# Not found: assume it's a global.

	def _resolve_function(self, function:syntax.Function, kind:FunctionType):
		enclosing_function = self._current_function
		self._current_function = kind
		self._begin_scope()
		for param in function.params:
			self._declare(param)
			self._define(param)
		self.tour(function.body)
		self._end_scope()
		self._current_function = enclosing_function

	# Statements:

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
		# Defined eagerly, so the function may refer to itself recursively.
		self._declare(stmt.name)
		self._define(stmt.name)
		self._resolve_function(stmt, FunctionType.FUNCTION)

	def visit_Return(self, stmt:syntax.Return):
		if self._current_function is FunctionType.NONE:
			self.report.resolve_error(stmt.keyword, "Can't return from top-level code.")
		if stmt.value is not None:
			if self._current_function is FunctionType.INITIALIZER:
				self.report.resolve_error(stmt.keyword, "Can't return a value from an initializer.")
			self.visit(stmt.value)

	def visit_Class(self, stmt:syntax.Class):
		enclosing_class = self._current_class
		self._current_class = ClassType.CLASS
		self._declare(stmt.name)
		self._define(stmt.name)

		superclass = stmt.superclass
		if superclass is not None:
			if superclass.name.lexeme == stmt.name.lexeme:
				self.report.resolve_error(superclass.name, "A class can't inherit from itself.")
			self._current_class = ClassType.SUBCLASS
			self.visit(superclass)
			self._begin_scope()["super"] = True

		self._begin_scope()["this"] = True
		for method in stmt.methods:
			kind = FunctionType.INITIALIZER if method.name.lexeme == "init" else FunctionType.METHOD
			self._resolve_function(method, kind)
		self._end_scope()

		if superclass is not None:
			self._end_scope()
		self._current_class = enclosing_class

	# Expressions:

	def visit_Variable(self, expr:syntax.Variable):
		if self._scopes and self._scopes[-1].get(expr.name.lexeme) is False:
			self.report.resolve_error(expr.name, "Can't read local variable in its own initializer.")
		self._resolve_local(expr, expr.name.lexeme)

	def visit_Assign(self, expr:syntax.Assign):
		self.visit(expr.value)
		self._resolve_local(expr, expr.name.lexeme)

	def visit_This(self, expr:syntax.This):
		if self._current_class is ClassType.NONE:
			self.report.resolve_error(expr.keyword, "Can't use 'this' outside of a class.")
			return
		self._resolve_local(expr, "this")

	def visit_Super(self, expr:syntax.Super):
		if self._current_class is ClassType.NONE:
			self.report.resolve_error(expr.keyword, "Can't use 'super' outside of a class.")
		elif self._current_class is not ClassType.SUBCLASS:
			self.report.resolve_error(expr.keyword, "Can't use 'super' in a class with no superclass.")
		self._resolve_local(expr, "super")

def resolve(statements:Sequence[syntax.Stmt], report:Report) -> ResolutionMap:
	return Resolver(report).resolve(statements)
