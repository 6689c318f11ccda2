"""
This module defines the specialized value-types that the tree-walker operates in terms of.
Basic primitive values play themselves: nil is None, booleans are bool,
every number is a float, and strings are str. Things that can be called,
and the instances classes make, need more help.
"""
from abc import ABC, abstractmethod
from typing import Any, Callable as PyCallable, Optional, TYPE_CHECKING
from . import syntax
from .environment import Environment
from .ontology import MothRuntimeError, Returning
from .tokens import Token

if TYPE_CHECKING:
	from .interpreter import Interpreter

class Callable(ABC):
	""" A run-time object that can be applied with arguments. """
	@abstractmethod
	def arity(self) -> int: pass

	@abstractmethod
	def call(self, interpreter:"Interpreter", args:list[Any], paren:Token) -> Any:
		"""
		The interpreter has already checked the argument count.
		The paren token is where to point if something goes wrong.
		"""

class NativeFunction(Callable):
	""" A function written in Python. It validates its own arguments. """
	def __init__(self, name:str, arity:int, fn:PyCallable[..., Any]):
		self.name = name
		self._arity = arity
		self._fn = fn

	def arity(self) -> int: return self._arity

	def call(self, interpreter, args, paren):
		return self._fn(interpreter, paren, *args)

	def __str__(self): return "<native fn %s>" % self.name

class UserFunction(Callable):
	""" The run-time manifestation of a function declaration: tied to its natal environment. """
	def __init__(self, declaration:syntax.Function, closure:Environment, is_initializer:bool=False):
		self.declaration = declaration
		self.closure = closure
		self.is_initializer = is_initializer

	def arity(self) -> int: return len(self.declaration.params)

	def bind(self, instance:"Instance") -> "UserFunction":
		""" Same code, but with `this` in scope. """
		environment = Environment(self.closure)
		environment.define("this", instance)
		return UserFunction(self.declaration, environment, self.is_initializer)

	def call(self, interpreter, args, paren):
		environment = Environment(self.closure)
		for param, arg in zip(self.declaration.params, args):
			environment.define(param.lexeme, arg)
		outcome = interpreter.execute_block(self.declaration.body, environment)
		if self.is_initializer:
			# However it got here, an initializer yields the instance.
			return self.closure.get_at(0, "this")
		if isinstance(outcome, Returning):
			return outcome.value

	def __str__(self): return "<fn %s>" % self.declaration.name.lexeme

class MothClass(Callable):
	""" Calling a class makes an instance, and runs the initializer if there is one. """
	def __init__(self, name:str, superclass:Optional["MothClass"], methods:dict[str, UserFunction]):
		self.name = name
		self.superclass = superclass
		self.methods = methods

	def find_method(self, name:str) -> Optional[UserFunction]:
		klass = self
		while klass is not None:
			if name in klass.methods:
				return klass.methods[name]
			klass = klass.superclass

	def arity(self) -> int:
		initializer = self.find_method("init")
		return 0 if initializer is None else initializer.arity()

	def call(self, interpreter, args, paren):
		instance = Instance(self)
		initializer = self.find_method("init")
		if initializer is not None:
			initializer.bind(instance).call(interpreter, args, paren)
		return instance

	def __str__(self): return self.name

class Instance:
	""" Fields belong to the instance itself. Methods come from the class chain. """
	def __init__(self, klass:MothClass):
		self.klass = klass
		self.fields: dict[str, Any] = {}

	def get(self, name:Token) -> Any:
		if name.lexeme in self.fields:
			return self.fields[name.lexeme]
		method = self.klass.find_method(name.lexeme)
		if method is not None:
			return method.bind(self)
		raise MothRuntimeError(name, "Undefined property '%s'." % name.lexeme)

	def set(self, name:Token, value:Any):
		self.fields[name.lexeme] = value

	def __str__(self): return "%s instance" % self.klass.name
