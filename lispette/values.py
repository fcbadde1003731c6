"""
This module defines the run-time values the evaluator operates in terms of.
There is one class per kind of value; each knows its Kind and how it looks
when printed. Conversions and operator semantics live in `coercion`.
"""
from enum import Enum
from typing import Callable, Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
	from .syntax import Expression

class Kind(Enum):
	UNIT = "UNIT"
	INTEGER = "INT"
	CHARACTER = "CHAR"
	BOOLEAN = "BOOL"
	STRING = "STRING"
	ARRAY = "ARRAY"
	FUNCTION = "FUNCTION"
	NATIVE_FUNCTION = "NATIVE_FUNCTION"

class Value:
	""" Root for all run-time data. Constants from the built-in library are immutable. """
	kind: Kind
	immutable: bool = False

	def _key(self):
		""" What equality means for this kind; identity unless overridden. """
		return id(self)

	def __eq__(self, other):
		return isinstance(other, Value) and self.kind is other.kind and self._key() == other._key()

	def __hash__(self): return hash((self.kind, self._key()))

	def __repr__(self): return "<%s %s>" % (self.kind.value, render(self))

class Unit(Value):
	kind = Kind.UNIT
	def _key(self): return ()

UNIT = Unit()

class Integer(Value):
	kind = Kind.INTEGER
	def __init__(self, number:int):
		assert isinstance(number, int) and not isinstance(number, bool), number
		self.number = number
	def _key(self): return self.number

class Character(Value):
	""" A single Unicode code point """
	kind = Kind.CHARACTER
	def __init__(self, code:int):
		self.code = code
	def _key(self): return self.code

class Boolean(Value):
	kind = Kind.BOOLEAN
	def __init__(self, flag:bool):
		self.flag = bool(flag)
	def _key(self): return self.flag

TRUE = Boolean(True)
FALSE = Boolean(False)

def boolean(flag) -> Boolean:
	return TRUE if flag else FALSE

class String(Value):
	kind = Kind.STRING
	def __init__(self, text:str):
		self.text = text
	def _key(self): return self.text

class Array(Value):
	kind = Kind.ARRAY
	def __init__(self, items:Sequence[Value]):
		self.items = tuple(items)
	def _key(self): return self.items

class Function(Value):
	"""
	A user-defined function: just parameters and a body.
	It captures nothing. Free names in the body are looked up from
	wherever the function happens to be called.
	"""
	kind = Kind.FUNCTION
	def __init__(self, params:Sequence[str], body:"Expression"):
		self.params = tuple(params)
		self.body = body

# Arguments to a native function's implementation: the call context, then the evaluated arguments.
NATIVE_IMPL = Callable[..., Value]

class NativeFunction(Value):
	""" Implemented by the host. max_args of None means no upper bound. """
	kind = Kind.NATIVE_FUNCTION
	def __init__(self, name:str, fn:NATIVE_IMPL, min_args:int=0, max_args:Optional[int]=None):
		self.name = name
		self.fn = fn
		self.min_args = min_args
		self.max_args = max_args

	def accepts(self, count:int) -> bool:
		if count < self.min_args: return False
		return self.max_args is None or count <= self.max_args

	def describe_arity(self) -> str:
		if self.max_args is None: return "at least %d" % self.min_args
		if self.max_args == self.min_args: return "%d" % self.min_args
		return "%d to %d" % (self.min_args, self.max_args)

CALLABLE_KINDS = (Kind.FUNCTION, Kind.NATIVE_FUNCTION)

###############################################################################

def render(value:Value) -> str:
	""" The textual form of a value, as print shows it and as string-coercion produces it. """
	kind = value.kind
	if kind is Kind.UNIT: return "()"
	if kind is Kind.INTEGER: return str(value.number)
	if kind is Kind.CHARACTER: return chr(value.code)
	if kind is Kind.BOOLEAN: return "true" if value.flag else "false"
	if kind is Kind.STRING: return value.text
	if kind is Kind.ARRAY: return "(@" + "".join(" " + render(v) for v in value.items) + ")"
	if kind is Kind.FUNCTION: return "<function>"
	if kind is Kind.NATIVE_FUNCTION: return "<native function '%s'>" % value.name
	raise AssertionError(kind)
