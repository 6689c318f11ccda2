"""
The tree-walking evaluator.

Expressions evaluate to values. Statements execute for effect, and report
how they finished: None for falling off the end in the ordinary way,
or a Returning outcome which every enclosing statement hands straight back
until the function call that started it all absorbs it.
Runtime errors, by contrast, travel as MothRuntimeError exceptions
and end the current top-level statement sequence.
"""
import math
import operator
import sys
from typing import Any, Optional, Sequence
from boozetools.support.foundation import Visitor
from . import syntax, primitive
from .diagnostics import Report
from .environment import Environment
from .ontology import MothRuntimeError, Returning
from .resolution import ResolutionMap
from .runtime import Callable, UserFunction, MothClass, Instance
from .tokens import Token, TokenKind as K

# Each Moth call costs a dozen or so Python frames.
sys.setrecursionlimit(max(sys.getrecursionlimit(), 10000))

def _divide(a:float, b:float) -> float:
	# IEEE-754 semantics, rather than Python's ZeroDivisionError.
	try: return a / b
	except ZeroDivisionError:
		if a == 0 or math.isnan(a): return math.nan
		return math.copysign(math.inf, a) * math.copysign(1.0, b)

NUMERIC_BINARY = {
	K.MINUS : operator.sub,
	K.STAR : operator.mul,
	K.SLASH : _divide,
	K.GREATER : operator.gt,
	K.GREATER_EQUAL : operator.ge,
	K.LESS : operator.lt,
	K.LESS_EQUAL : operator.le,
}

def is_number(value) -> bool:
	# Booleans are ints in Python, but never numbers in Moth.
	return isinstance(value, float)

def is_truthy(value) -> bool:
	""" Only false and nil are falsey. Zero and the empty string are truthy. """
	if value is None: return False
	if isinstance(value, bool): return value
	return True

def is_equal(a, b) -> bool:
	""" Never raises. Values of different types are never equal. """
	if a is None: return b is None
	if type(a) is not type(b): return False
	return a == b

def stringify(value) -> str:
	if value is None: return "nil"
	if isinstance(value, bool): return "true" if value else "false"
	if isinstance(value, float):
		if value.is_integer(): return "%d" % value
		return repr(value)
	return str(value)

class Interpreter(Visitor):
	"""
	Holds the global environment (with the natives in it),
	a pointer to the current environment, and the accumulated resolution map.
	One interpreter can run any number of input units in turn;
	globals from earlier units stay defined for later ones.
	"""
	globals: Environment
	environment: Environment
	locals: ResolutionMap

	def __init__(self, report:Report, out=None, stdin=None):
		self.report = report
		self.out = out      # None means sys.stdout at the moment of printing.
		self.stdin = stdin  # Likewise for sys.stdin, which the input() native reads.
		self.globals = Environment()
		primitive.install(self.globals)
		self.environment = self.globals
		self.locals = {}

	# Entry points:

	def resolve(self, locals:ResolutionMap):
		""" Take on the resolver's findings for the next thing to run. """
		self.locals.update(locals)

	def interpret(self, statements:Sequence[syntax.Stmt]) -> bool:
		""" Run a program for effect. Returns False if a runtime error stopped it. """
		try:
			for stmt in statements:
				self.execute(stmt)
		except MothRuntimeError as ex:
			self.environment = self.globals
			self.report.runtime_error(ex)
			return False
		return True

	def eval_single(self, expr:syntax.Expr) -> Any:
		""" Evaluate one expression, as in the REPL. A runtime error yields None, having been reported. """
		try:
			return self.evaluate(expr)
		except MothRuntimeError as ex:
			self.environment = self.globals
			self.report.runtime_error(ex)

	# Machinery:

	def evaluate(self, expr:syntax.Expr) -> Any:
		return self.visit(expr)

	def execute(self, stmt:syntax.Stmt) -> Optional[Returning]:
		return self.visit(stmt)

	def execute_block(self, statements:Sequence[syntax.Stmt], environment:Environment) -> Optional[Returning]:
		previous = self.environment
		try:
			self.environment = environment
			for stmt in statements:
				outcome = self.execute(stmt)
				if outcome is not None:
					return outcome
		finally:
			self.environment = previous

	def _look_up_variable(self, name:Token, expr:syntax.Expr) -> Any:
		depth = self.locals.get(expr)
		if depth is None:
			return self.globals.get(name)
		return self.environment.get_at(depth, name.lexeme)

	def _check_number_operands(self, op:Token, *operands):
		if not all(map(is_number, operands)):
			if len(operands) == 1:
				raise MothRuntimeError(op, "Operand must be a number.")
			raise MothRuntimeError(op, "Operands must be numbers.")

	# Statements:

	def visit_Expression(self, stmt:syntax.Expression):
		self.evaluate(stmt.expression)

	def visit_Print(self, stmt:syntax.Print):
		value = self.evaluate(stmt.expression)
		print(stringify(value), file=self.out)

	def visit_Var(self, stmt:syntax.Var):
		value = None if stmt.initializer is None else self.evaluate(stmt.initializer)
		self.environment.define(stmt.name.lexeme, value)

	def visit_Block(self, stmt:syntax.Block):
		return self.execute_block(stmt.statements, Environment(self.environment))

	def visit_If(self, stmt:syntax.If):
		if is_truthy(self.evaluate(stmt.condition)):
			return self.execute(stmt.then_branch)
		elif stmt.else_branch is not None:
			return self.execute(stmt.else_branch)

	def visit_While(self, stmt:syntax.While):
		while is_truthy(self.evaluate(stmt.condition)):
			outcome = self.execute(stmt.body)
			if outcome is not None:
				return outcome

	def visit_Function(self, stmt:syntax.Function):
		self.environment.define(stmt.name.lexeme, UserFunction(stmt, self.environment))

	def visit_Return(self, stmt:syntax.Return):
		value = None if stmt.value is None else self.evaluate(stmt.value)
		return Returning(value)

	def visit_Class(self, stmt:syntax.Class):
		superclass = None
		if stmt.superclass is not None:
			superclass = self.evaluate(stmt.superclass)
			if not isinstance(superclass, MothClass):
				raise MothRuntimeError(stmt.superclass.name, "Superclass must be a class.")

		self.environment.define(stmt.name.lexeme, None)
		if superclass is not None:
			self.environment = Environment(self.environment)
			self.environment.define("super", superclass)

		methods = {
			method.name.lexeme: UserFunction(method, self.environment, method.name.lexeme == "init")
			for method in stmt.methods
		}
		klass = MothClass(stmt.name.lexeme, superclass, methods)

		if superclass is not None:
			self.environment = self.environment.enclosing
		self.environment.assign(stmt.name, klass)

	# Expressions:

	def visit_Literal(self, expr:syntax.Literal):
		return expr.value

	def visit_Grouping(self, expr:syntax.Grouping):
		return self.evaluate(expr.expression)

	def visit_Unary(self, expr:syntax.Unary):
		right = self.evaluate(expr.right)
		if expr.op.kind is K.BANG:
			return not is_truthy(right)
		self._check_number_operands(expr.op, right)
		return -right

	def visit_Binary(self, expr:syntax.Binary):
		left = self.evaluate(expr.left)
		right = self.evaluate(expr.right)
		kind = expr.op.kind
		if kind is K.EQUAL_EQUAL: return is_equal(left, right)
		if kind is K.BANG_EQUAL: return not is_equal(left, right)
		if kind is K.PLUS:
			if is_number(left) and is_number(right): return left + right
			if isinstance(left, str) and isinstance(right, str): return left + right
			raise MothRuntimeError(expr.op, "Operands must be two numbers or two strings.")
		self._check_number_operands(expr.op, left, right)
		return NUMERIC_BINARY[kind](left, right)

	def visit_Logical(self, expr:syntax.Logical):
		left = self.evaluate(expr.left)
		if expr.op.kind is K.OR:
			if is_truthy(left): return left
		elif not is_truthy(left):
			return left
		return self.evaluate(expr.right)

	def visit_Variable(self, expr:syntax.Variable):
		return self._look_up_variable(expr.name, expr)

	def visit_Assign(self, expr:syntax.Assign):
		value = self.evaluate(expr.value)
		depth = self.locals.get(expr)
		if depth is None:
			self.globals.assign(expr.name, value)
		else:
			self.environment.assign_at(depth, expr.name.lexeme, value)
		return value

	def visit_Call(self, expr:syntax.Call):
		callee = self.evaluate(expr.callee)
		args = [self.evaluate(a) for a in expr.args]
		if not isinstance(callee, Callable):
			raise MothRuntimeError(expr.paren, "Can only call functions and classes.")
		if len(args) != callee.arity():
			raise MothRuntimeError(expr.paren, "Expected %d arguments but got %d." % (callee.arity(), len(args)))
		try:
			return callee.call(self, args, expr.paren)
		except RecursionError:
			raise MothRuntimeError(expr.paren, "Stack overflow.") from None

	def visit_Get(self, expr:syntax.Get):
		obj = self.evaluate(expr.obj)
		if isinstance(obj, Instance):
			return obj.get(expr.name)
		raise MothRuntimeError(expr.name, "Only instances have properties.")

	def visit_Set(self, expr:syntax.Set):
		obj = self.evaluate(expr.obj)
		if not isinstance(obj, Instance):
			raise MothRuntimeError(expr.name, "Only instances have fields.")
		value = self.evaluate(expr.value)
		obj.set(expr.name, value)
		return value

	def visit_This(self, expr:syntax.This):
		return self._look_up_variable(expr.keyword, expr)

	def visit_Super(self, expr:syntax.Super):
		depth = self.locals[expr]
		superclass = self.environment.get_at(depth, "super")
		# The instance is always bound one scope inside the one holding "super".
		instance = self.environment.get_at(depth - 1, "this")
		method = superclass.find_method(expr.method.lexeme)
		if method is None:
			raise MothRuntimeError(expr.method, "Undefined property '%s'." % expr.method.lexeme)
		return method.bind(instance)
