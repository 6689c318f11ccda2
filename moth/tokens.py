"""
The lexical vocabulary of Moth.
Every later pass speaks in terms of these token kinds.
"""
from enum import Enum
from typing import NamedTuple, Optional, Union

class TokenKind(Enum):
	# Single-character tokens.
	LEFT_PAREN = "("
	RIGHT_PAREN = ")"
	LEFT_BRACE = "{"
	RIGHT_BRACE = "}"
	COMMA = ","
	DOT = "."
	MINUS = "-"
	PLUS = "+"
	SEMICOLON = ";"
	SLASH = "/"
	STAR = "*"

	# One or two character tokens.
	BANG = "!"
	BANG_EQUAL = "!="
	EQUAL = "="
	EQUAL_EQUAL = "=="
	GREATER = ">"
	GREATER_EQUAL = ">="
	LESS = "<"
	LESS_EQUAL = "<="

	# Literals.
	IDENTIFIER = "identifier"
	STRING = "string"
	NUMBER = "number"

	# Keywords.
	AND = "and"
	CLASS = "class"
	ELSE = "else"
	FALSE = "false"
	FOR = "for"
	FUN = "fun"
	IF = "if"
	NIL = "nil"
	OR = "or"
	PRINT = "print"
	RETURN = "return"
	SUPER = "super"
	THIS = "this"
	TRUE = "true"
	VAR = "var"
	WHILE = "while"

	EOF = "<end>"

KEYWORDS = {
	kind.value: kind
	for kind in TokenKind
	if kind.value.isalpha() and kind not in (TokenKind.IDENTIFIER, TokenKind.STRING, TokenKind.NUMBER)
}

class Token(NamedTuple):
	""" One lexeme, as the scanner found it. """
	kind: TokenKind
	lexeme: str
	literal: Optional[Union[float, str]]
	line: int
	offset: int = 0  # Where the lexeme starts in the source text
	unit: int = 0    # Which input unit that text was

	def __str__(self):
		literal = "null" if self.literal is None else self.literal
		return "%s '%s' %s @%d" % (self.kind.name, self.lexeme, literal, self.line)
