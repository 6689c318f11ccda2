"""
Everything that goes wrong gets written down here.

A Report is the explicit accumulator each pipeline stage writes issues into.
The executive consults it to decide whether to go on to the next stage,
and the command line consults it to pick an exit code.
"""
import sys, random
from typing import Optional
from boozetools.support.failureprone import SourceText, illustration

from .ontology import MothRuntimeError
from .tokens import Token, TokenKind

SCAN, PARSE, RESOLVE, RUNTIME = "scan", "parse", "resolve", "runtime"
STATIC_PHASES = frozenset([SCAN, PARSE, RESOLVE])

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]

	minced_oaths = [
		'Ack', 'ARGH', 'Blargh', 'Confound it', 'Crud', 'Curses', 'Drat',
		'Fiddlesticks', 'Good Grief', 'Great Scott', 'Heavens', 'Mercy', 'Nuts', 'Rats',
	]

	resignations = [
		'I am undone.',
		'I cannot continue.',
		'The lamp has gone out.',
		'I need to ask for help.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	""" Collects issues from every phase. One Report serves one input unit at a time. """
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0, source:Optional[str]=None, path=None):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._source = None
		self.unit = 0
		if source is not None:
			self.set_source(source, path)

	@property
	def issues(self) -> list["Pic"]: return self._issues

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)
	def had_static_error(self): return any(i.phase in STATIC_PHASES for i in self._issues)
	def had_runtime_error(self): return any(i.phase == RUNTIME for i in self._issues)

	def set_source(self, text:str, path=None):
		""" Remember the text of the current input unit, so issues can show the offending line. """
		self.unit += 1
		self._text = text
		self._source = SourceText(text, filename=None if path is None else str(path))

	def issue(self, it:"Pic"):
		self._issues.append(it)

	def reset(self):
		self._issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	# The basic entry point, which the token-aware variants all come down to:
	def report(self, line:int, where:str, message:str, phase:str, ann:Optional["Annotation"]=None):
		intro = "[line %d] Error%s: %s" % (line, where and " "+where, message)
		self.issue(Pic(phase, intro, message, line, [ann] if ann else []))

	def _at_token(self, token:Token, message:str, phase:str):
		if token.kind is TokenKind.EOF:
			where = "at end"
		else:
			where = "at '%s'" % token.lexeme
		self.report(token.line, where, message, phase, self._annotate_token(token))

	def _annotate_token(self, token:Token) -> Optional["Annotation"]:
		# A function defined in an earlier REPL line carries that line's offsets.
		if token.unit == self.unit:
			return self._annotate(token.offset, len(token.lexeme))

	def _annotate(self, offset:int, width:int) -> Optional["Annotation"]:
		if self._source is None: return
		# Trouble at end-of-file gets pinned to the last visible character.
		last = len(self._text.rstrip("\r\n")) - 1
		if last < 0: return
		if offset > last:
			offset, width = last, 1
		return Annotation(self._source, offset, max(width, 1))

	# Methods the scanner calls:
	def scan_error(self, line:int, offset:int, message:str):
		self.report(line, "", message, SCAN, self._annotate(offset, 1))

	# Methods the parser calls:
	def parse_error(self, token:Token, message:str):
		self._at_token(token, message, PARSE)

	# Methods the resolver calls:
	def resolve_error(self, token:Token, message:str):
		self._at_token(token, message, RESOLVE)

	# Methods the interpreter calls:
	def runtime_error(self, error:MothRuntimeError):
		token = error.token
		intro = "%s\n[line %d]" % (error.message, token.line)
		ann = self._annotate_token(token)
		self.issue(Pic(RUNTIME, intro, error.message, token.line, [ann] if ann else []))

class Annotation:
	""" Points at a span of the source text, for illustration purposes. """
	def __init__(self, source:SourceText, offset:int, width:int, caption:str=""):
		self.source = source
		self.offset = offset
		self.width = width
		self.caption = caption
	def illustrate(self):
		row, col = self.source.find_row_col(self.offset)
		single_line = self.source.line_of_text(row)
		return illustration(single_line, col, self.width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	""" One issue: which phase noticed it, the headline, and any illustrations. """
	def __init__(self, phase:str, intro:str, message:str, line:int, anns:list[Annotation], footer=()):
		self.phase = phase
		self.message = message
		self.line = line
		self._intro, self._anns, self._footer = intro, anns, footer
	def __repr__(self): return "<%s issue: %s>" % (self.phase, self._intro)
	def headline(self): return self._intro
	def as_text(self):
		lines = [self._intro]
		lines.extend(ann.illustrate() for ann in self._anns)
		lines.extend(self._footer)
		return '\n'.join(lines)

def _bemoan(issues):
	""" Emit all the issues to the console. """
	for i in issues:
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
