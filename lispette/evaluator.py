"""
Tree-walking evaluator.

Every sub-expression is evaluated in a fresh, disposable frame whose parent
is the frame of the enclosing expression. The forms which bind names
(let, =) therefore reach one level up, into the frame the enclosing
construct actually owns, rather than the disposable one.

Functions are not closures: a function body sees the frames of whoever
calls it, not those of wherever it was written.
"""
from typing import NamedTuple, Optional, Sequence

from boozetools.support.foundation import Visitor
from . import syntax
from .ontology import EvaluationError, TypeMismatch, ArityMismatch, UnboundName
from .lexer import TokenKind, SPELLING
from .environment import Frame
from .values import (
	Value, UNIT, Integer, String, Array, Function, NativeFunction,
	boolean, CALLABLE_KINDS,
)
from . import coercion
from .natives import Console, global_frame

class Invocation(NamedTuple):
	""" What a native function gets to know about the call site. """
	evaluator: "Evaluator"
	frame: Frame

	@property
	def console(self) -> Console: return self.evaluator.console

	def apply(self, callee:Value, args:Sequence[Value]) -> Value:
		return self.evaluator.apply(callee, args, self.frame)

def _enclosing(frame:Frame) -> Frame:
	return frame if frame.parent is None else frame.parent

class Evaluator(Visitor):
	def __init__(self, console:Optional[Console]=None):
		self.console = console or Console()

	def evaluate(self, node:syntax.Expression, frame:Frame) -> Value:
		""" Evaluate within a transient child frame, which is discarded afterward. """
		try:
			return self.visit(node, frame.child())
		except EvaluationError as ex:
			if ex.position is None: ex.position = node.position
			raise

	def evaluate_in_frame(self, node:syntax.Expression, frame:Frame) -> Value:
		return self.visit(node, frame)

	def visit_Program(self, program:syntax.Program, frame:Frame) -> Value:
		result = UNIT
		for expr in program.exprs:
			result = self.evaluate(expr, frame)
		return result

	def visit_Atom(self, atom:syntax.Atom, frame:Frame) -> Value:
		token = atom.token
		if token.kind is TokenKind.INT: return Integer(token.value)
		if token.kind is TokenKind.STRING: return String(token.value)
		if token.kind is TokenKind.TRUE: return boolean(True)
		if token.kind is TokenKind.FALSE: return boolean(False)
		assert token.kind is TokenKind.IDENT, token
		return frame.lookup(token.value)

	def visit_Unit(self, unit:syntax.Unit, frame:Frame) -> Value:
		return UNIT

	def visit_FunctionCall(self, call:syntax.FunctionCall, frame:Frame) -> Value:
		if call.is_builtin():
			return BUILTIN[call.op.kind](self, call, frame)
		name = call.op.value
		callee = frame.find(name)
		if callee is None:
			raise UnboundName("Unknown function '%s'" % name)
		callee = callee.value
		if callee.kind not in CALLABLE_KINDS:
			raise TypeMismatch("Variable '%s' is not a function." % name)
		_check_arity(callee, len(call.args), name)
		args = [self.evaluate(a, frame) for a in call.args]
		return self.apply(callee, args, frame)

	def apply(self, callee:Value, args:Sequence[Value], frame:Frame) -> Value:
		"""
		Call a function value. A user function runs in a new frame
		atop the caller's frame, with parameters bound positionally.
		"""
		_check_arity(callee, len(args), render_name(callee))
		if isinstance(callee, NativeFunction):
			return callee.fn(Invocation(self, frame), args)
		assert isinstance(callee, Function), callee
		inner = frame.child()
		for param, arg in zip(callee.params, args):
			inner.declare(param, arg)
		return self.evaluate_in_frame(callee.body, inner)

	def visit_FunctionDef(self, fn:syntax.FunctionDef, frame:Frame) -> Value:
		return Function(fn.params, fn.body)

	def visit_If(self, expr:syntax.If, frame:Frame) -> Value:
		if coercion.value_to_bool(self.evaluate(expr.cond, frame)):
			return self.evaluate(expr.true_branch, frame)
		if expr.false_branch is not None:
			return self.evaluate(expr.false_branch, frame)
		return UNIT

	def visit_While(self, expr:syntax.While, frame:Frame) -> Value:
		while coercion.value_to_bool(self.evaluate(expr.cond, frame)):
			self.evaluate(expr.body, frame)
		return UNIT

	def visit_For(self, expr:syntax.For, frame:Frame) -> Value:
		self.evaluate(expr.init, frame)
		while True:
			# An empty condition () means forever, as in C.
			if not isinstance(expr.cond, syntax.Unit):
				if not coercion.value_to_bool(self.evaluate(expr.cond, frame)): break
			self.evaluate(expr.body, frame)
			self.evaluate(expr.post, frame)
		return UNIT

	def visit_DeclareVar(self, expr:syntax.DeclareVar, frame:Frame) -> Value:
		slot = _enclosing(frame).declare(expr.name)
		if expr.value is not None:
			slot.value = self.evaluate(expr.value, frame)
		return UNIT

	def visit_AssignVar(self, expr:syntax.AssignVar, frame:Frame) -> Value:
		slot = _enclosing(frame).binding_for_update(expr.name)
		slot.value = self.evaluate(expr.value, frame)
		return UNIT

def render_name(callee:Value) -> str:
	return callee.name if isinstance(callee, NativeFunction) else "function"

def _check_arity(callee:Value, count:int, name:str):
	if isinstance(callee, NativeFunction):
		if not callee.accepts(count):
			pattern = "Function '%s' expected %s params, received %d."
			raise ArityMismatch(pattern % (name, callee.describe_arity(), count))
	elif count != len(callee.params):
		pattern = "Function '%s' expected %d params, received %d."
		raise ArityMismatch(pattern % (name, len(callee.params), count))

###############################################################################
#
#  Built-in operator forms. These are syntax, not bindings, so no program can
#  redefine them.
#

def _args(call:syntax.FunctionCall, low:int, high:Optional[int]=None) -> Sequence[syntax.Expression]:
	count = len(call.args)
	glyph = SPELLING[call.op.kind]
	if count < low:
		raise ArityMismatch("'%s' needs at least %d argument(s), got %d." % (glyph, low, count))
	if high is not None and count > high:
		raise ArityMismatch("'%s' takes at most %d argument(s), got %d." % (glyph, high, count))
	return call.args

def _fold(step, initial:Optional[Value], low:int):
	def fold(ev:Evaluator, call:syntax.FunctionCall, frame:Frame) -> Value:
		args = iter(_args(call, low))
		acc = initial if initial is not None else ev.evaluate(next(args), frame)
		for arg in args:
			acc = step(acc, ev.evaluate(arg, frame))
		return acc
	return fold

def _relation(glyph:str):
	def relation(ev:Evaluator, call:syntax.FunctionCall, frame:Frame) -> Value:
		lhs, rhs = (ev.evaluate(a, frame) for a in _args(call, 2, 2))
		return coercion.relate(glyph, lhs, rhs)
	return relation

def _not(ev:Evaluator, call:syntax.FunctionCall, frame:Frame) -> Value:
	arg, = _args(call, 1, 1)
	return coercion.negate(ev.evaluate(arg, frame))

def _index(ev:Evaluator, call:syntax.FunctionCall, frame:Frame) -> Value:
	subject, position = (ev.evaluate(a, frame) for a in _args(call, 2, 2))
	return coercion.index(subject, position)

def _array(ev:Evaluator, call:syntax.FunctionCall, frame:Frame) -> Value:
	return Array([ev.evaluate(a, frame) for a in call.args])

def _eval(ev:Evaluator, call:syntax.FunctionCall, frame:Frame) -> Value:
	result = UNIT
	for arg in _args(call, 1):
		result = ev.evaluate(arg, frame)
	return result

BUILTIN = {
	TokenKind.PLUS: _fold(coercion.add, UNIT, 1),
	TokenKind.MINUS: _fold(coercion.subtract, None, 2),
	TokenKind.STAR: _fold(coercion.multiply, Integer(1), 0),
	TokenKind.SLASH: _fold(coercion.divide, None, 2),
	TokenKind.BANG: _not,
	TokenKind.DOT: _index,
	TokenKind.AT: _array,
	TokenKind.EVAL: _eval,
}
for _kind in (TokenKind.EQ, TokenKind.NE, TokenKind.LT, TokenKind.LE, TokenKind.GT, TokenKind.GE):
	BUILTIN[_kind] = _relation(SPELLING[_kind])

###############################################################################

def run_program(program:syntax.Program, console:Optional[Console]=None, frame:Optional[Frame]=None) -> Value:
	""" Top-level declarations land in the global frame, so later expressions can see them. """
	if frame is None: frame = global_frame()
	return Evaluator(console).visit(program, frame)
