"""
Chained frames of name-to-value bindings.

Lookup walks outward from the innermost frame to the root.
A frame refuses a second binding for the same name, but an inner frame
may shadow whatever an outer frame holds.
"""
from typing import Iterable, Optional

from .ontology import Redeclared, UnboundName, ImmutableBinding
from .values import Value, UNIT

class Binding:
	""" One slot in a frame """
	__slots__ = ("name", "value")
	def __init__(self, name:str, value:Value):
		self.name = name
		self.value = value
	def __repr__(self): return "<%s=%r>" % (self.name, self.value)

class Frame:
	_bindings : dict[str, Binding]   # Insertion-order is assured.
	parent : Optional["Frame"]

	def __init__(self, parent:Optional["Frame"]=None):
		self._bindings = {}
		self.parent = parent

	def child(self) -> "Frame":
		return Frame(self)

	def holds(self, name:str) -> bool: return name in self._bindings

	def names(self) -> Iterable[str]: return self._bindings.keys()

	def declare(self, name:str, value:Value=UNIT) -> Binding:
		if name in self._bindings:
			raise Redeclared("Variable '%s' already declared." % name)
		slot = self._bindings[name] = Binding(name, value)
		return slot

	def find(self, name:str) -> Optional[Binding]:
		frame = self
		while frame is not None:
			try: return frame._bindings[name]
			except KeyError: frame = frame.parent
		return None

	def lookup(self, name:str) -> Value:
		slot = self.find(name)
		if slot is None:
			raise UnboundName("Variable '%s' does not exist in current scope." % name)
		return slot.value

	def binding_for_update(self, name:str) -> Binding:
		slot = self.find(name)
		if slot is None:
			raise UnboundName("Variable '%s' does not exist in scope." % name)
		if slot.value.immutable:
			raise ImmutableBinding("Variable '%s' is immutable." % name)
		return slot

	def assign(self, name:str, value:Value):
		self.binding_for_update(name).value = value

	def depth(self) -> int:
		return 0 if self.parent is None else 1 + self.parent.depth()
