"""
These most-fundamental classes are separate from the rest to avoid
circular imports: every pass from the scanner to the evaluator needs
to talk about source positions and to raise the same family of errors.
"""
from typing import NamedTuple, Optional

class Position(NamedTuple):
	""" Where something starts in the source text. Line and column are 1-based. """
	line: int
	column: int
	offset: int
	def __str__(self): return "%d:%d" % (self.line, self.column)

class Phrase:
	""" Anything with a place in the source text. """
	position: Position
	def __init__(self, position:Position):
		self.position = position

#######################################################################

class LispetteError(Exception):
	""" Root of everything that aborts a run. """
	def __init__(self, message:str, position:Optional[Position]=None):
		Exception.__init__(self, message, position)  # Not cooperative: ParseError wants parse-engine internals.
		self.message = message
		self.position = position
	def __str__(self):
		if self.position is None: return self.message
		return "%s: %s" % (self.position, self.message)

class LexicalError(LispetteError):
	pass

class EvaluationError(LispetteError):
	pass

class TypeMismatch(EvaluationError): pass
class ArityMismatch(EvaluationError): pass
class UnboundName(EvaluationError): pass
class Redeclared(EvaluationError): pass
class ImmutableBinding(EvaluationError): pass
class IndexOutOfRange(EvaluationError): pass
class DivisionByZero(EvaluationError): pass
class EndOfInput(EvaluationError): pass
