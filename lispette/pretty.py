"""
A debugging aid: show the shape of a parsed program, one node per line,
indented four spaces per level.
"""
from boozetools.support.foundation import Visitor
from . import syntax

class Dumper(Visitor):
	def __init__(self):
		self.lines = []

	def _emit(self, depth:int, text:str):
		self.lines.append(" " * (4 * depth) + text)

	def _field(self, depth:int, label:str, node):
		self._emit(depth + 1, label + ":")
		self.visit(node, depth + 2)

	def visit_Program(self, program:syntax.Program, depth:int):
		for expr in program.exprs: self.visit(expr, depth)

	def visit_Atom(self, atom:syntax.Atom, depth:int):
		self._emit(depth, "Atom -> %s" % (atom.token,))

	def visit_Unit(self, unit:syntax.Unit, depth:int):
		self._emit(depth, "UNIT")

	def visit_FunctionCall(self, call:syntax.FunctionCall, depth:int):
		self._emit(depth, "FunctionCall {")
		self._emit(depth + 1, "op: %s" % (call.op,))
		self._emit(depth + 1, "args: [")
		for arg in call.args: self.visit(arg, depth + 2)
		self._emit(depth + 1, "]")
		self._emit(depth, "}")

	def visit_FunctionDef(self, fn:syntax.FunctionDef, depth:int):
		self._emit(depth, "FunctionDef {")
		self._emit(depth + 1, "params: " + " ".join(fn.params))
		self._field(depth, "body", fn.body)
		self._emit(depth, "}")

	def visit_If(self, expr:syntax.If, depth:int):
		self._emit(depth, "if {")
		self._field(depth, "condition", expr.cond)
		self._field(depth, "true_branch", expr.true_branch)
		if expr.false_branch is not None:
			self._field(depth, "false_branch", expr.false_branch)
		self._emit(depth, "}")

	def visit_DeclareVar(self, expr:syntax.DeclareVar, depth:int):
		self._emit(depth, "DeclareVar {")
		self._emit(depth + 1, "name: " + expr.name)
		if expr.value is not None:
			self._field(depth, "value", expr.value)
		self._emit(depth, "}")

	def visit_AssignVar(self, expr:syntax.AssignVar, depth:int):
		self._emit(depth, "AssignVar {")
		self._emit(depth + 1, "name: " + expr.name)
		self._field(depth, "value", expr.value)
		self._emit(depth, "}")

	def visit_While(self, expr:syntax.While, depth:int):
		self._emit(depth, "while {")
		self._field(depth, "condition", expr.cond)
		self._field(depth, "body", expr.body)
		self._emit(depth, "}")

	def visit_For(self, expr:syntax.For, depth:int):
		self._emit(depth, "for {")
		self._field(depth, "init", expr.init)
		self._field(depth, "condition", expr.cond)
		self._field(depth, "post", expr.post)
		self._field(depth, "body", expr.body)
		self._emit(depth, "}")

def dump(node) -> str:
	dumper = Dumper()
	dumper.visit(node, 0)
	return "\n".join(dumper.lines)
