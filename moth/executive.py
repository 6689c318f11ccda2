"""
This is the overall control for running Moth source text:
	scan -> parse -> resolve (unless the text was malformed) -> interpret (unless dry-run)
one input unit at a time, against one long-lived interpreter.
"""
import sys
from enum import Enum
from typing import Any
from . import printer, syntax
from .diagnostics import Report
from .front_end import Parser
from .interpreter import Interpreter
from .resolution import resolve
from .scanner import scan

class State(Enum):
	READY = "ready"
	RUNNING = "running"
	COMPLETED = "completed"
	HALTED_ON_STATIC_ERROR = "halted on static error"
	HALTED_ON_RUNTIME_ERROR = "halted on runtime error"

class Session:
	"""
	A session is Ready between input units.
	Each unit either completes, or halts on a static or runtime error;
	whichever way it goes, the session can take another unit afterward,
	with whatever globals the earlier units managed to define.
	"""
	state: State

	def __init__(self, report:Report, *, show_tokens=False, show_parse=False, dry_run=False, out=None, stdin=None):
		self.report = report
		self.show_tokens = show_tokens
		self.show_parse = show_parse
		self.dry_run = dry_run
		self.out = out
		self.interpreter = Interpreter(report, out=out, stdin=stdin)
		self.state = State.READY

	def _dump(self, text:str, end="\n"):
		print(text, end=end, file=self.out or sys.stdout)

	def _front_end(self, text:str, path=None):
		assert self.state is State.READY, self.state
		self.report.reset()
		self.report.set_source(text, path)
		self.state = State.RUNNING
		tokens = scan(text, self.report)
		self.report.info("Scanned %d tokens" % len(tokens))
		if self.show_tokens:
			for token in tokens: self._dump(str(token))
		return Parser(tokens, self.report)

	def run(self, text:str, path=None) -> State:
		""" Run one input unit: a whole file, or one line of the REPL. """
		try:
			return self._run(text, path)
		finally:
			self.state = State.READY

	def _run(self, text:str, path) -> State:
		statements = self._front_end(text, path).parse()
		if self.report.sick():
			return State.HALTED_ON_STATIC_ERROR
		self.report.info("Parsed %d top-level statements" % len(statements))
		if self.show_parse:
			self._dump(printer.render(statements), end="")

		locals = resolve(statements, self.report)
		if self.report.sick():
			return State.HALTED_ON_STATIC_ERROR
		self.report.info("Resolved %d local references" % len(locals))

		if self.dry_run:
			return State.COMPLETED
		self.interpreter.resolve(locals)
		if self.interpreter.interpret(statements):
			return State.COMPLETED
		return State.HALTED_ON_RUNTIME_ERROR

	def evaluate(self, text:str) -> tuple[State, Any]:
		""" Evaluate a single expression, giving back its value along with how things went. """
		try:
			return self._evaluate(text)
		finally:
			self.state = State.READY

	def _evaluate(self, text:str) -> tuple[State, Any]:
		expr = self._front_end(text).parse_expression()
		if expr is None or self.report.sick():
			return State.HALTED_ON_STATIC_ERROR, None
		if self.show_parse:
			self._dump(printer.render_expression(expr))

		locals = resolve([syntax.Expression(expr)], self.report)
		if self.report.sick():
			return State.HALTED_ON_STATIC_ERROR, None
		if self.dry_run:
			return State.COMPLETED, None
		self.interpreter.resolve(locals)
		value = self.interpreter.eval_single(expr)
		if self.report.had_runtime_error():
			return State.HALTED_ON_RUNTIME_ERROR, None
		return State.COMPLETED, value
