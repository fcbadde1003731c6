"""
Collecting complaints and showing them to a human.

Every error that aborts a run is a LispetteError carrying a Position.
The Report turns those into pictures of the source line with a caret
under the offending spot.
"""
import sys
from typing import Optional
from boozetools.support.failureprone import SourceText, illustration

from .ontology import Position, LispetteError, LexicalError, EvaluationError

class Report:
	""" Issues found during one run, plus whatever the user asked to hear about. """
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0, source:Optional[SourceText]=None):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._source = source

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	@property
	def issues(self): return tuple(self._issues)

	def set_source(self, text:str, filename:str):
		self._source = SourceText(text, filename=filename)

	def issue(self, it:"Pic"):
		self._issues.append(it)

	def reset(self):
		self._issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		if self._issues:
			self.complain_to_console()
			raise AssertionError(message)

	# Methods the front-end is likely to call:
	def lexical_error(self, ex:LexicalError):
		self._aborted("Could not make sense of the program text.", ex)

	def syntax_error(self, ex:LispetteError, hint:str):
		intro = "Got confused by %s." % ex.message
		self.issue(Pic(intro, self._annotate(ex.position, "confused here"), [hint]))

	# Methods the evaluator's caller is likely to call:
	def evaluation_error(self, ex:EvaluationError):
		self._aborted("Evaluation failed: %s." % type(ex).__name__, ex)

	def stack_overflow(self):
		self.issue(Pic("The program recursed too deeply.", [], ["Is there a loop without an exit?"]))

	def _aborted(self, intro:str, ex:LispetteError):
		self.issue(Pic(intro, self._annotate(ex.position, ex.message)))

	def _annotate(self, position:Optional[Position], caption:str) -> list["Annotation"]:
		if position is None or self._source is None:
			return [Annotation(None, None, caption)]
		return [Annotation(self._source, position, caption)]

class Annotation:
	def __init__(self, source:Optional[SourceText], position:Optional[Position], caption:str=""):
		self.source = source
		self.position = position
		self.caption = caption
	def illustrate(self):
		if self.source is None:
			return "  " + self.caption
		row, col = self.source.find_row_col(self.position.offset)
		single_line = self.source.line_of_text(row)
		return illustration(single_line, col, 1, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=()):
		self._intro, self._anns, self._footer = intro, anns, footer
	@property
	def intro(self): return self._intro
	def as_text(self):
		lines = [self._intro, ""]
		for ann in self._anns:
			lines.append(ann.illustrate())
		lines.extend(self._footer)
		return '\n'.join(lines)

def _bemoan(issues):
	if issues:
		print("*"*60, file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
