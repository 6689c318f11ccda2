"""
The native functions, which the interpreter installs into the global scope.

Each takes the interpreter and the call-site's closing parenthesis
ahead of the actual arguments, so that it can do I/O through the
interpreter's streams and point at the call if an argument is unsuitable.
"""
import math, random, re, sys, time
from .ontology import MothRuntimeError
from .runtime import NativeFunction

_NUMERIC = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")

def _is_number(x) -> bool:
	return isinstance(x, float)

def clock(interpreter, paren):
	return time.time()

def read_line(interpreter, paren, prompt):
	if not isinstance(prompt, str):
		raise MothRuntimeError(paren, "Argument to 'input' must be a string.")
	print(prompt, end="", file=interpreter.out, flush=True)
	line = (interpreter.stdin or sys.stdin).readline()
	if not line:
		return None
	return line.rstrip("\r\n")

def string_to_num(interpreter, paren, text):
	if not isinstance(text, str):
		raise MothRuntimeError(paren, "Argument to 'stringToNum' must be a string.")
	text = text.strip()
	if _NUMERIC.fullmatch(text):
		return float(text)

def random_num(interpreter, paren, low, high):
	if not _is_number(low):
		raise MothRuntimeError(paren, "'from' must be a number.")
	if not _is_number(high):
		raise MothRuntimeError(paren, "'to' must be a number.")
	if not (math.isfinite(low) and math.isfinite(high)) or int(low) > int(high):
		raise MothRuntimeError(paren, "Invalid range for randomNum.")
	return float(random.randint(int(low), int(high)))

NATIVES = [
	NativeFunction("clock", 0, clock),
	NativeFunction("input", 1, read_line),
	NativeFunction("stringToNum", 1, string_to_num),
	NativeFunction("randomNum", 2, random_num),
]

def install(environment):
	for native in NATIVES:
		environment.define(native.name, native)
