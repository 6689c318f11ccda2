"""
Bits and pieces the several test modules share.
"""
import io
from pathlib import Path
from unittest import mock

from moth.diagnostics import Report
from moth.executive import Session

base_folder = Path(__file__).parent.parent
example_folder = base_folder/"examples"
zoo_fail = base_folder/"zoo/fail"

class Silence(Report):
	def __init__(self):
		super().__init__(verbose=False)
		self.complain_to_console = mock.Mock()
	pass

def session(stdin:str=""):
	""" A session whose printing lands in a buffer, and whose input comes from a string. """
	return Session(Silence(), out=io.StringIO(), stdin=io.StringIO(stdin))

def run(source:str, stdin:str=""):
	""" Run one unit in a fresh session. Returns (state, printed output, report). """
	s = session(stdin)
	state = s.run(source)
	return state, s.out.getvalue(), s.report
