"""
The native-function library, and the console those functions talk to.

Each native gets the call site (an Invocation: the evaluator plus the
caller's frame) and a list of already-evaluated arguments.
Everything here is bound immutably into the root frame.
"""
import re
import sys
from typing import Sequence, TextIO

from .ontology import TypeMismatch, EndOfInput
from .environment import Frame
from .values import (
	Kind, Value, UNIT, Integer, String, Array, NativeFunction,
	CALLABLE_KINDS, render,
)
from .coercion import require

class Console:
	""" Where print writes and readline reads. Tests hand in StringIO. """
	def __init__(self, stdin:TextIO=None, stdout:TextIO=None):
		self._stdin = stdin
		self._stdout = stdout

	@property
	def stdin(self) -> TextIO: return self._stdin or sys.stdin

	@property
	def stdout(self) -> TextIO: return self._stdout or sys.stdout

	def echo(self, text:str):
		self.stdout.write(text)
		self.stdout.flush()

	def read_line(self) -> str:
		line = self.stdin.readline()
		if not line:
			raise EndOfInput("readline reached the end of input")
		if line.endswith("\n"): line = line[:-1]
		if line.endswith("\r"): line = line[:-1]
		return line

LIBRARY = []

def native(name:str, min_args:int=0, max_args=None):
	def decorate(fn):
		LIBRARY.append((name, fn, min_args, max_args))
		return fn
	return decorate

def _expect(value:Value, kind:Kind, name:str) -> Value:
	if value.kind is not kind:
		raise TypeMismatch("%s accepts %s, found %s." % (name, kind.value, value.kind.value))
	return value

###############################################################################

@native("print")
def _print(call, args:Sequence[Value]) -> Value:
	call.console.echo(" ".join(render(a) for a in args))
	return UNIT

@native("println")
def _println(call, args:Sequence[Value]) -> Value:
	call.console.echo(" ".join(render(a) for a in args) + "\n")
	return UNIT

@native("readline", 0, 0)
def _readline(call, args:Sequence[Value]) -> Value:
	return String(call.console.read_line())

_LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)")

@native("parseint", 1, 1)
def _parseint(call, args:Sequence[Value]) -> Value:
	""" Like C atoi: the leading digits, or zero if there are none. """
	text = _expect(args[0], Kind.STRING, "parseint").text
	match = _LEADING_INTEGER.match(text)
	return Integer(int(match.group(1)) if match else 0)

@native("append", 2)
def _append(call, args:Sequence[Value]) -> Value:
	array = _expect(args[0], Kind.ARRAY, "append")
	return Array(array.items + tuple(args[1:]))

@native("length", 1, 1)
def _length(call, args:Sequence[Value]) -> Value:
	subject = args[0]
	if subject.kind is Kind.STRING: return Integer(len(subject.text))
	if subject.kind is Kind.ARRAY: return Integer(len(subject.items))
	raise TypeMismatch("length accepts STRING or ARRAY, found %s." % subject.kind.value)

@native("map", 2, 2)
def _map(call, args:Sequence[Value]) -> Value:
	array = _expect(args[0], Kind.ARRAY, "map")
	fn = args[1]
	if fn.kind not in CALLABLE_KINDS:
		raise TypeMismatch("map needs a function, found %s." % fn.kind.value)
	return Array([call.apply(fn, [item]) for item in array.items])

def _cast(kind:Kind):
	def cast(call, args:Sequence[Value]) -> Value:
		return require(args[0], kind, "convert")
	return cast

for _name, _kind in [("int", Kind.INTEGER), ("char", Kind.CHARACTER), ("string", Kind.STRING), ("bool", Kind.BOOLEAN)]:
	native(_name, 1, 1)(_cast(_kind))

###############################################################################

def global_frame() -> Frame:
	""" A fresh root frame holding the whole library, immutably. """
	frame = Frame()
	for name, fn, min_args, max_args in LIBRARY:
		value = NativeFunction(name, fn, min_args, max_args)
		value.immutable = True
		frame.declare(name, value)
	return frame
