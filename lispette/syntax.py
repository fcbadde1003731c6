"""
The set of parse-nodes.
The parser builds these top-down; each node owns its children outright.
Every node remembers the position of the token that introduced it,
so that run-time complaints can point at the offending source.
"""
from typing import Optional, Sequence
from .ontology import Phrase, Position
from .lexer import Token, TokenKind

class Expression(Phrase):
	pass

class Atom(Expression):
	""" A literal or an identifier, standing alone. """
	def __init__(self, token:Token):
		super().__init__(token.position)
		self.token = token
	def __repr__(self): return "<Atom %s>" % (self.token,)

class Unit(Expression):
	""" The empty expression () """
	def __repr__(self): return "<()>"

class FunctionCall(Expression):
	def __init__(self, op:Token, args:Sequence[Expression]):
		super().__init__(op.position)
		self.op = op
		self.args = tuple(args)
	def is_builtin(self): return self.op.kind is not TokenKind.IDENT
	def __repr__(self): return "<call %s/%d>" % (self.op, len(self.args))

class FunctionDef(Expression):
	""" Anonymous: evaluating one yields a function value. Names come from `let`. """
	def __init__(self, position:Position, params:Sequence[str], body:Expression):
		super().__init__(position)
		self.params = tuple(params)
		self.body = body
	def __repr__(self): return "<function %s>" % " ".join(self.params)

class If(Expression):
	def __init__(self, position:Position, cond:Expression, true_branch:Expression, false_branch:Optional[Expression]):
		super().__init__(position)
		self.cond = cond
		self.true_branch = true_branch
		self.false_branch = false_branch

class DeclareVar(Expression):
	def __init__(self, position:Position, name:str, value:Optional[Expression]):
		super().__init__(position)
		self.name = name
		self.value = value
	def __repr__(self): return "<let %s>" % self.name

class AssignVar(Expression):
	def __init__(self, position:Position, name:str, value:Expression):
		super().__init__(position)
		self.name = name
		self.value = value
	def __repr__(self): return "<= %s>" % self.name

class While(Expression):
	def __init__(self, position:Position, cond:Expression, body:Expression):
		super().__init__(position)
		self.cond = cond
		self.body = body

class For(Expression):
	def __init__(self, position:Position, init:Expression, cond:Expression, post:Expression, body:Expression):
		super().__init__(position)
		self.init = init
		self.cond = cond
		self.post = post
		self.body = body

class Program(Phrase):
	""" Top-level expressions, in order. """
	def __init__(self, position:Position, exprs:Sequence[Expression]):
		super().__init__(position)
		self.exprs = tuple(exprs)
