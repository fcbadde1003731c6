import unittest
from unittest import mock

from lispette import syntax
from lispette.diagnostics import Report
from lispette.front_end import parse, parse_text, LispetteSyntaxError
from lispette.pretty import dump
from lispette.lexer import TokenKind
from lispette.ontology import LexicalError

def only(text) -> syntax.Expression:
	program = parse(text)
	assert len(program.exprs) == 1, program.exprs
	return program.exprs[0]

class GoodParses(unittest.TestCase):

	def test_atoms(self):
		for text, kind in [("42", TokenKind.INT), ("'s'", TokenKind.STRING), ("x", TokenKind.IDENT), ("true", TokenKind.TRUE), ("false", TokenKind.FALSE)]:
			with self.subTest(text):
				node = only(text)
				self.assertIsInstance(node, syntax.Atom)
				self.assertIs(kind, node.token.kind)

	def test_unit(self):
		self.assertIsInstance(only("()"), syntax.Unit)
		self.assertIsInstance(only("( )"), syntax.Unit)

	def test_function_call(self):
		node = only("(+ 1 (* 2 3) x)")
		self.assertIsInstance(node, syntax.FunctionCall)
		self.assertIs(TokenKind.PLUS, node.op.kind)
		self.assertEqual(3, len(node.args))
		self.assertIsInstance(node.args[1], syntax.FunctionCall)
		self.assertTrue(node.is_builtin())

	def test_call_by_name(self):
		node = only("(println)")
		self.assertIsInstance(node, syntax.FunctionCall)
		self.assertEqual("println", node.op.value)
		self.assertEqual((), node.args)
		self.assertFalse(node.is_builtin())

	def test_every_operator_can_be_called(self):
		for op in ["+", "-", "*", "/", "==", "!=", "<", "<=", ">", ">=", "!", ".", "@", "eval", "f"]:
			with self.subTest(op):
				self.assertIsInstance(only("(%s 1 2)" % op), syntax.FunctionCall)

	def test_if_with_and_without_else(self):
		both = only("(if c 1 2)")
		self.assertIsInstance(both, syntax.If)
		self.assertIsInstance(both.false_branch, syntax.Atom)
		one = only("(if c 1)")
		self.assertIsNone(one.false_branch)

	def test_function_def(self):
		node = only("(function a b (+ a b))")
		self.assertIsInstance(node, syntax.FunctionDef)
		self.assertEqual(("a", "b"), node.params)
		self.assertIsInstance(node.body, syntax.FunctionCall)

	def test_function_whose_body_is_a_name(self):
		node = only("(function a b a)")
		self.assertEqual(("a", "b"), node.params)
		self.assertIsInstance(node.body, syntax.Atom)
		self.assertEqual("a", node.body.token.value)

	def test_function_without_params(self):
		node = only("(function 5)")
		self.assertEqual((), node.params)
		node = only("(function x)")
		self.assertEqual((), node.params)
		self.assertEqual("x", node.body.token.value)

	def test_declare(self):
		node = only("(let x)")
		self.assertIsInstance(node, syntax.DeclareVar)
		self.assertEqual("x", node.name)
		self.assertIsNone(node.value)
		self.assertIsInstance(only("(let x 5)").value, syntax.Atom)

	def test_assign(self):
		node = only("(= x (+ x 1))")
		self.assertIsInstance(node, syntax.AssignVar)
		self.assertEqual("x", node.name)

	def test_loops(self):
		w = only("(while (< i 3) (= i (+ i 1)))")
		self.assertIsInstance(w, syntax.While)
		f = only("(for (let i 0) () (= i (+ i 1)) (println i))")
		self.assertIsInstance(f, syntax.For)
		self.assertIsInstance(f.cond, syntax.Unit)

	def test_program_of_several_expressions(self):
		program = parse("(let x 5) (= x 10) x")
		self.assertEqual(3, len(program.exprs))
		self.assertEqual(0, len(parse("; nothing but a comment").exprs))

	def test_positions(self):
		node = only("\n  (foo 1)")
		self.assertEqual((2, 4), (node.position.line, node.position.column))

class BadParses(unittest.TestCase):

	def assert_confused(self, text, found:TokenKind):
		with self.assertRaises(LispetteSyntaxError) as cm:
			parse(text)
		self.assertIs(found, cm.exception.found.kind)
		return cm.exception

	def test_if_takes_at_most_three(self):
		ex = self.assert_confused("(if true 1 2 3)", TokenKind.INT)
		self.assertIn("IF may only contain", ex.message)

	def test_if_needs_a_true_branch(self):
		self.assert_confused("(if true)", TokenKind.RPAREN)

	def test_unclosed(self):
		self.assert_confused("(println (+ 1 2)", TokenKind.EOF)
		self.assert_confused("(if a b", TokenKind.EOF)
		self.assert_confused("(let x 1", TokenKind.EOF)

	def test_bad_call_heads(self):
		for text, kind in [("(1 2)", TokenKind.INT), ("('s')", TokenKind.STRING), ("((f) 1)", TokenKind.LPAREN), ("(true)", TokenKind.TRUE)]:
			with self.subTest(text):
				ex = self.assert_confused(text, kind)
				self.assertEqual("function name", ex.expected)

	def test_negative_literal_is_not_subtraction(self):
		self.assert_confused("(-1 2)", TokenKind.INT)

	def test_declaration_needs_a_name(self):
		self.assert_confused("(let 5)", TokenKind.INT)
		self.assert_confused("(= (x) 5)", TokenKind.LPAREN)

	def test_assignment_needs_a_value(self):
		self.assert_confused("(= x)", TokenKind.RPAREN)

	def test_confusion_at_an_operator(self):
		ex = self.assert_confused("(let - 1)", TokenKind.MINUS)
		self.assertIn("MINUS '-'", ex.message)

	def test_stray_close(self):
		self.assert_confused(")", TokenKind.RPAREN)

	def test_keyword_where_expression_expected(self):
		self.assert_confused("(println let)", TokenKind.LET)

	def test_function_needs_a_body(self):
		self.assert_confused("(function)", TokenKind.RPAREN)

	def test_while_shape(self):
		self.assert_confused("(while c b extra)", TokenKind.IDENT)

	def test_for_shape(self):
		self.assert_confused("(for () () ())", TokenKind.RPAREN)

	def test_lexical_errors_come_through(self):
		with self.assertRaises(LexicalError):
			parse("(+ 1 2abc)")

class ReportTests(unittest.TestCase):

	def setUp(self):
		self.report = Report()
		self.report.complain_to_console = mock.Mock()

	def test_good_text(self):
		program = parse_text("(println 1)", "<test>", self.report)
		self.assertIsInstance(program, syntax.Program)
		self.assertTrue(self.report.ok())

	def test_syntax_error_is_reported_not_raised(self):
		self.assertIsNone(parse_text("(println 1", "<test>", self.report))
		self.assertTrue(self.report.sick())
		self.assertIn("')' or value", self.report.issues[0].intro)
		self.assertEqual(0, self.report.complain_to_console.call_count)

	def test_lexical_error_is_reported_not_raised(self):
		self.assertIsNone(parse_text("'open", "<test>", self.report))
		self.assertEqual(1, len(self.report.issues))

class DumpTests(unittest.TestCase):

	def test_call(self):
		self.assertEqual([
			"FunctionCall {",
			"    op: MINUS '-'",
			"    args: [",
			"        Atom -> INT 5",
			"        Atom -> IDENT 'x'",
			"    ]",
			"}",
		], dump(parse("(- 5 x)")).splitlines())

	def test_declaration(self):
		self.assertEqual([
			"DeclareVar {",
			"    name: x",
			"    value:",
			"        UNIT",
			"}",
		], dump(parse("(let x ())")).splitlines())

	def test_every_form_dumps(self):
		program = parse("(if c (while c ()) (for (let i) i (= i 1) (function a a))) 's' true")
		self.assertIn("for {", dump(program))

	def test_atom_repr(self):
		self.assertEqual("<Atom IDENT 'x'>", repr(only("x")))

if __name__ == '__main__':
	unittest.main()
