"""
These most-fundamental classes are separate from the rest
to avoid various circular-import scenarios: the environment,
the runtime model, and the interpreter all need them.
"""
from typing import Any, NamedTuple
from .tokens import Token

class MothRuntimeError(Exception):
	""" Something went wrong while a program was running. The token says where. """
	def __init__(self, token: Token, message: str):
		super().__init__(message)
		self.token = token
		self.message = message

class Returning(NamedTuple):
	"""
	The outcome of a statement that executed a `return`.
	Ordinary completion is just None.
	Statement executors pass this outward untouched until a function call absorbs it.
	"""
	value: Any
