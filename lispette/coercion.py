"""
Implicit conversions, truthiness, ordering, and the arithmetic operators.

Conversions never mutate the value handed in. `coerce` answers a fresh value
of the wanted kind, or None when that conversion is not defined; callers
decide whether that is a type error.
"""
from enum import Enum
from typing import Optional

from .ontology import TypeMismatch, DivisionByZero, IndexOutOfRange
from .values import (
	Kind, Value, Integer, Character, Boolean, String,
	boolean, render,
)

MAX_CODE_POINT = 0x10FFFF

def value_to_bool(value:Value) -> bool:
	kind = value.kind
	if kind is Kind.UNIT: return False
	if kind is Kind.INTEGER: return value.number != 0
	if kind is Kind.CHARACTER: return value.code != 0
	if kind is Kind.BOOLEAN: return value.flag
	if kind is Kind.STRING: return value.text != ""
	raise TypeMismatch("Cannot convert %s to BOOL" % kind.value)

def coerce(value:Value, kind:Kind) -> Optional[Value]:
	if value.kind is kind: return value
	if kind is Kind.STRING: return String(render(value))
	if kind is Kind.BOOLEAN: return boolean(value_to_bool(value))
	if kind is Kind.INTEGER:
		if value.kind is Kind.BOOLEAN: return Integer(int(value.flag))
		if value.kind is Kind.CHARACTER: return Integer(value.code)
	if kind is Kind.CHARACTER and value.kind is Kind.INTEGER:
		if 0 <= value.number <= MAX_CODE_POINT: return Character(value.number)
	return None

def require(value:Value, kind:Kind, operation:str) -> Value:
	converted = coerce(value, kind)
	if converted is None:
		raise TypeMismatch("Cannot %s %s as %s" % (operation, value.kind.value, kind.value))
	return converted

###############################################################################

class Ordering(Enum):
	LESS = "LESS"
	EQUAL = "EQUAL"
	GREATER = "GREATER"
	NONE = "NONE"  # Incomparable, or unequal without any order.

def _order(a, b) -> Ordering:
	if a < b: return Ordering.LESS
	if a == b: return Ordering.EQUAL
	return Ordering.GREATER

def compare(a:Value, b:Value) -> Ordering:
	"""
	Strings and arrays compare by length first, and only look at content
	when lengths agree. So "ab" is greater than "b". Strings are measured
	and compared as UTF-8 bytes.
	"""
	if a.kind is not b.kind: return Ordering.NONE
	kind = a.kind
	if kind is Kind.UNIT: return Ordering.EQUAL
	if kind is Kind.INTEGER: return _order(a.number, b.number)
	if kind is Kind.CHARACTER: return _order(a.code, b.code)
	if kind is Kind.BOOLEAN: return Ordering.EQUAL if a.flag == b.flag else Ordering.NONE
	if kind is Kind.STRING:
		x, y = a.text.encode("utf-8"), b.text.encode("utf-8")
		if len(x) != len(y): return _order(len(x), len(y))
		return _order(x, y)
	if kind is Kind.ARRAY:
		if len(a.items) != len(b.items): return _order(len(a.items), len(b.items))
		for x, y in zip(a.items, b.items):
			order = compare(x, y)
			if order is not Ordering.EQUAL: return order
		return Ordering.EQUAL
	return Ordering.NONE

RELATIONS = {
	"==": (Ordering.EQUAL,),
	"!=": (Ordering.LESS, Ordering.GREATER, Ordering.NONE),
	"<": (Ordering.LESS,),
	"<=": (Ordering.LESS, Ordering.EQUAL),
	">": (Ordering.GREATER,),
	">=": (Ordering.GREATER, Ordering.EQUAL),
}

def relate(glyph:str, a:Value, b:Value) -> Boolean:
	""" The right operand must coerce to the left operand's kind first. """
	b = require(b, a.kind, "compare")
	return boolean(compare(a, b) in RELATIONS[glyph])

###############################################################################

def _integer(value:Value, operation:str) -> int:
	if value.kind is Kind.INTEGER: return value.number
	if value.kind is Kind.BOOLEAN: return int(value.flag)
	raise TypeMismatch("Cannot %s %s" % (operation, value.kind.value))

def add(acc:Value, operand:Value) -> Value:
	if acc.kind is Kind.UNIT: return operand
	if acc.kind is Kind.STRING: return String(acc.text + render(operand))
	if acc.kind in (Kind.INTEGER, Kind.BOOLEAN):
		converted = coerce(operand, Kind.INTEGER)
		if converted is not None:
			return Integer(_integer(acc, "add to") + converted.number)
	raise TypeMismatch("Cannot add %s to %s" % (operand.kind.value, acc.kind.value))

def subtract(acc:Value, operand:Value) -> Value:
	return Integer(_integer(acc, "subtract from") - _integer(operand, "subtract"))

def multiply(acc:Value, operand:Value) -> Value:
	return Integer(_integer(acc, "multiply") * _integer(operand, "multiply by"))

def divide(acc:Value, operand:Value) -> Value:
	""" Truncates toward zero. """
	dividend = _integer(acc, "divide")
	divisor = _integer(operand, "divide by")
	if divisor == 0: raise DivisionByZero("Division by zero")
	quotient = abs(dividend) // abs(divisor)
	return Integer(quotient if (dividend < 0) == (divisor < 0) else -quotient)

def negate(value:Value) -> Boolean:
	return boolean(not value_to_bool(value))

def index(subject:Value, position:Value) -> Value:
	if subject.kind is Kind.STRING: items = subject.text
	elif subject.kind is Kind.ARRAY: items = subject.items
	else: raise TypeMismatch("Cannot index into %s" % subject.kind.value)
	i = _integer(position, "index with")
	if not 0 <= i < len(items):
		raise IndexOutOfRange("Index %d out of range for length %d" % (i, len(items)))
	if subject.kind is Kind.STRING: return Character(ord(items[i]))
	return items[i]
