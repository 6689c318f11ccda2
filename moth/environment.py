"""
Scopes at run-time.

This is the canonical list-structured search: each environment has
its own bindings and a static link to the lexically-enclosing one.
Closures keep their natal environment alive simply by referring to it,
and see any later assignments made there.
"""
from typing import Any, Optional
from .ontology import MothRuntimeError
from .tokens import Token

class Environment:
	def __init__(self, enclosing:Optional["Environment"]=None):
		self.values: dict[str, Any] = {}
		self.enclosing = enclosing

	def define(self, name:str, value:Any):
		""" Binds in this very scope. A second definition simply replaces the first. """
		self.values[name] = value

	def get(self, name:Token) -> Any:
		env = self
		while env is not None:
			if name.lexeme in env.values:
				return env.values[name.lexeme]
			env = env.enclosing
		raise MothRuntimeError(name, "Undefined variable '%s'." % name.lexeme)

	def assign(self, name:Token, value:Any):
		env = self
		while env is not None:
			if name.lexeme in env.values:
				env.values[name.lexeme] = value
				return
			env = env.enclosing
		raise MothRuntimeError(name, "Undefined variable '%s'." % name.lexeme)

	def ancestor(self, depth:int) -> "Environment":
		env = self
		for _ in range(depth):
			env = env.enclosing
		return env

	# The resolver has already worked out where these live, so no searching:
	def get_at(self, depth:int, name:str) -> Any:
		return self.ancestor(depth).values[name]

	def assign_at(self, depth:int, name:str, value:Any):
		self.ancestor(depth).values[name] = value

	def __repr__(self):
		return "<env %s%s>" % (sorted(self.values), "" if self.enclosing is None else " ^")
