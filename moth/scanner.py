"""
Turns source text into a list of tokens.

One pass, left to right, no backtracking.
Trouble is reported and skipped over, so one stray character
does not hide the rest of the file from the parser.
"""
from .tokens import Token, TokenKind, KEYWORDS
from .diagnostics import Report

_SINGLE = {
	"(": TokenKind.LEFT_PAREN,
	")": TokenKind.RIGHT_PAREN,
	"{": TokenKind.LEFT_BRACE,
	"}": TokenKind.RIGHT_BRACE,
	",": TokenKind.COMMA,
	".": TokenKind.DOT,
	"-": TokenKind.MINUS,
	"+": TokenKind.PLUS,
	";": TokenKind.SEMICOLON,
	"*": TokenKind.STAR,
}

# Operators which mean something else when followed by "=".
_WITH_EQUAL = {
	"!": (TokenKind.BANG, TokenKind.BANG_EQUAL),
	"=": (TokenKind.EQUAL, TokenKind.EQUAL_EQUAL),
	"<": (TokenKind.LESS, TokenKind.LESS_EQUAL),
	">": (TokenKind.GREATER, TokenKind.GREATER_EQUAL),
}

_WHITESPACE = frozenset(" \r\t")

def _is_digit(c:str) -> bool:
	return "0" <= c <= "9"

def _is_ident_start(c:str) -> bool:
	return "a" <= c <= "z" or "A" <= c <= "Z" or c == "_"

def _is_ident(c:str) -> bool:
	return _is_ident_start(c) or _is_digit(c)

class Scanner:
	def __init__(self, source:str, report:Report):
		self.source = source
		self.report = report
		self.tokens = []
		self.start = 0    # First character of the lexeme being scanned
		self.current = 0  # Next character to consider
		self.line = 1
		self.unit = report.unit

	def at_end(self) -> bool:
		return self.current >= len(self.source)

	def advance(self) -> str:
		c = self.source[self.current]
		self.current += 1
		return c

	def peek(self) -> str:
		return "" if self.at_end() else self.source[self.current]

	def peek_next(self) -> str:
		nxt = self.current + 1
		return self.source[nxt] if nxt < len(self.source) else ""

	def match(self, expected:str) -> bool:
		if self.peek() == expected:
			self.current += 1
			return True
		return False

	def add_token(self, kind:TokenKind, literal=None):
		text = self.source[self.start:self.current]
		self.tokens.append(Token(kind, text, literal, self.line, self.start, self.unit))

	def scan_tokens(self) -> list[Token]:
		while not self.at_end():
			self.start = self.current
			self.scan_token()
		self.tokens.append(Token(TokenKind.EOF, "", None, self.line, len(self.source), self.unit))
		return self.tokens

	def scan_token(self):
		c = self.advance()
		if c in _SINGLE:
			self.add_token(_SINGLE[c])
		elif c in _WITH_EQUAL:
			plain, compound = _WITH_EQUAL[c]
			self.add_token(compound if self.match("=") else plain)
		elif c == "/":
			if self.match("/"):
				while self.peek() not in ("\n", ""): self.advance()
			else:
				self.add_token(TokenKind.SLASH)
		elif c == '"':
			self.string()
		elif c in _WHITESPACE:
			pass
		elif c == "\n":
			self.line += 1
		elif _is_digit(c):
			self.number()
		elif _is_ident_start(c):
			self.identifier()
		else:
			self.report.scan_error(self.line, self.start, "Unexpected character.")

	def string(self):
		# No escapes: there is no way to put a double-quote inside a string.
		while self.peek() not in ('"', ""):
			if self.peek() == "\n": self.line += 1
			self.advance()
		if self.at_end():
			self.report.scan_error(self.line, self.start, "Unterminated string.")
			return
		self.advance()  # The closing quote
		self.add_token(TokenKind.STRING, self.source[self.start+1:self.current-1])

	def number(self):
		while _is_digit(self.peek()): self.advance()
		if self.peek() == "." and _is_digit(self.peek_next()):
			self.advance()
			while _is_digit(self.peek()): self.advance()
		self.add_token(TokenKind.NUMBER, float(self.source[self.start:self.current]))

	def identifier(self):
		while _is_ident(self.peek()): self.advance()
		text = self.source[self.start:self.current]
		self.add_token(KEYWORDS.get(text, TokenKind.IDENTIFIER))

def scan(source:str, report:Report) -> list[Token]:
	""" The whole token list, always ending with EOF. """
	return Scanner(source, report).scan_tokens()
