"""
The set of parse-nodes in simple form.
The parser calls these constructors with subordinate nodes and tokens.
Nodes hash by identity: the resolver's map relies on telling apart
two textually-identical references to the same variable.
Later passes walk these with a Visitor, which dispatches on the class name.
"""
from typing import Any, Optional, Sequence
from .tokens import Token

class Expr:
	""" Any expression. """

class Stmt:
	""" Any statement. """

###############################################################################
# Expressions

class Literal(Expr):
	def __init__(self, value:Any): self.value = value
	def __repr__(self): return "<lit:%r>" % (self.value,)

class Grouping(Expr):
	def __init__(self, expression:Expr): self.expression = expression

class Unary(Expr):
	def __init__(self, op:Token, right:Expr):
		self.op, self.right = op, right
	def __repr__(self): return "<%s %r>" % (self.op.lexeme, self.right)

class Binary(Expr):
	def __init__(self, left:Expr, op:Token, right:Expr):
		self.left, self.op, self.right = left, op, right
	def __repr__(self): return "<%r %s %r>" % (self.left, self.op.lexeme, self.right)

class Logical(Expr):
	def __init__(self, left:Expr, op:Token, right:Expr):
		self.left, self.op, self.right = left, op, right

class Variable(Expr):
	def __init__(self, name:Token): self.name = name
	def __repr__(self): return "<ref:%s>" % self.name.lexeme

class Assign(Expr):
	def __init__(self, name:Token, value:Expr):
		self.name, self.value = name, value
	def __repr__(self): return "<%s=%r>" % (self.name.lexeme, self.value)

class Call(Expr):
	paren: Token  # The closing parenthesis; runtime errors in the call point here.
	def __init__(self, callee:Expr, paren:Token, args:Sequence[Expr]):
		self.callee, self.paren, self.args = callee, paren, args

class Get(Expr):
	def __init__(self, obj:Expr, name:Token):
		self.obj, self.name = obj, name
	def __repr__(self): return "<%r.%s>" % (self.obj, self.name.lexeme)

class Set(Expr):
	def __init__(self, obj:Expr, name:Token, value:Expr):
		self.obj, self.name, self.value = obj, name, value

class This(Expr):
	def __init__(self, keyword:Token): self.keyword = keyword
	def __repr__(self): return "<this>"

class Super(Expr):
	def __init__(self, keyword:Token, method:Token):
		self.keyword, self.method = keyword, method
	def __repr__(self): return "<super.%s>" % self.method.lexeme

###############################################################################
# Statements

class Expression(Stmt):
	def __init__(self, expression:Expr): self.expression = expression

class Print(Stmt):
	def __init__(self, expression:Expr): self.expression = expression

class Var(Stmt):
	def __init__(self, name:Token, initializer:Optional[Expr]):
		self.name, self.initializer = name, initializer
	def __repr__(self): return "{var %s}" % self.name.lexeme

class Block(Stmt):
	def __init__(self, statements:Sequence[Stmt]): self.statements = statements

class If(Stmt):
	def __init__(self, condition:Expr, then_branch:Stmt, else_branch:Optional[Stmt]):
		self.condition = condition
		self.then_branch = then_branch
		self.else_branch = else_branch

class While(Stmt):
	def __init__(self, condition:Expr, body:Stmt):
		self.condition, self.body = condition, body

class Function(Stmt):
	def __init__(self, name:Token, params:Sequence[Token], body:Sequence[Stmt]):
		self.name, self.params, self.body = name, params, body
	def __repr__(self):
		return "{fn|%s(%s)}" % (self.name.lexeme, ", ".join(p.lexeme for p in self.params))

class Return(Stmt):
	def __init__(self, keyword:Token, value:Optional[Expr]):
		self.keyword, self.value = keyword, value

class Class(Stmt):
	def __init__(self, name:Token, superclass:Optional[Variable], methods:Sequence[Function]):
		self.name = name
		self.superclass = superclass
		self.methods = methods
	def __repr__(self): return "{class %s}" % self.name.lexeme
