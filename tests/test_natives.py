import io
import unittest

from lispette.front_end import parse
from lispette.evaluator import run_program
from lispette.natives import Console, global_frame, LIBRARY
from lispette.ontology import TypeMismatch, ArityMismatch, EndOfInput, ImmutableBinding
from lispette.values import Kind, UNIT, Integer, Character, String, Array, NativeFunction, TRUE, FALSE

def run(text, stdin=""):
	stdout = io.StringIO()
	value = run_program(parse(text), Console(io.StringIO(stdin), stdout))
	return value, stdout.getvalue()

def value_of(text, stdin=""):
	return run(text, stdin)[0]

class LibraryTests(unittest.TestCase):

	def test_everything_is_bound(self):
		frame = global_frame()
		for name in ["print", "println", "readline", "parseint", "append", "length", "map", "int", "char", "string", "bool"]:
			with self.subTest(name):
				value = frame.lookup(name)
				self.assertIsInstance(value, NativeFunction)
				self.assertTrue(value.immutable)
		self.assertEqual(len(LIBRARY), len(list(frame.names())))

	def test_each_frame_is_fresh(self):
		a, b = global_frame(), global_frame()
		a.declare("extra")
		self.assertFalse(b.holds("extra"))

	def test_every_native_is_immutable(self):
		for name, *_ in LIBRARY:
			with self.subTest(name):
				with self.assertRaises(ImmutableBinding):
					run("(= %s 1)" % name)

class ConsoleTests(unittest.TestCase):

	def test_print_separates_with_spaces(self):
		value, out = run('(print 1 "two" true) (print)')
		self.assertIs(UNIT, value)
		self.assertEqual("1 two true", out)

	def test_println_adds_a_newline(self):
		_, out = run("(println 'a' (@ 1 2)) (println)")
		self.assertEqual("a (@ 1 2)\n\n", out)

	def test_print_renders_characters_and_unit(self):
		_, out = run("(print (. 'xyz' 2) ())")
		self.assertEqual("z ()", out)

	def test_readline(self):
		self.assertEqual(String("first"), value_of("(readline)", "first\nsecond\n"))
		self.assertEqual(String("second"), value_of("(readline) (readline)", "first\nsecond\n"))

	def test_readline_without_trailing_newline(self):
		self.assertEqual(String("last"), value_of("(readline)", "last"))

	def test_readline_strips_a_crlf_line_ending(self):
		self.assertEqual(String("dos"), value_of("(readline)", "dos\r\nnext\r\n"))
		self.assertEqual(String("next"), value_of("(readline) (readline)", "dos\r\nnext\r\n"))

	def test_readline_at_end_of_input(self):
		with self.assertRaises(EndOfInput):
			run("(readline)", "")

	def test_readline_takes_no_arguments(self):
		with self.assertRaises(ArityMismatch):
			run("(readline 1)", "x\n")

	def test_console_defaults_to_the_process_streams(self):
		import sys
		console = Console()
		self.assertIs(sys.stdout, console.stdout)
		self.assertIs(sys.stdin, console.stdin)

class ParseIntTests(unittest.TestCase):

	def test_leading_digits(self):
		for text, number in [("42", 42), ("42abc", 42), ("  -7", -7), ("+3", 3), ("abc", 0), ("", 0)]:
			with self.subTest(text):
				self.assertEqual(Integer(number), value_of('(parseint "%s")' % text))

	def test_needs_a_string(self):
		with self.assertRaises(TypeMismatch):
			run("(parseint 42)")

	def test_arity(self):
		with self.assertRaises(ArityMismatch):
			run('(parseint "1" "2")')

class ArrayNativeTests(unittest.TestCase):

	def test_append_makes_a_new_array(self):
		value, out = run("(let a (@ 1)) (let b (append a 2 3)) (println a) b")
		self.assertEqual(Array([Integer(1), Integer(2), Integer(3)]), value)
		self.assertEqual("(@ 1)\n", out)

	def test_append_needs_an_array_and_something(self):
		with self.assertRaises(TypeMismatch):
			run("(append 1 2)")
		with self.assertRaises(ArityMismatch):
			run("(append (@))")

	def test_length(self):
		self.assertEqual(Integer(0), value_of("(length (@))"))
		self.assertEqual(Integer(5), value_of("(length 'hello')"))
		with self.assertRaises(TypeMismatch):
			run("(length 5)")

	def test_map_with_a_user_function(self):
		program = "(let double (function x (* x 2))) (map (@ 1 2 3) double)"
		self.assertEqual(Array([Integer(2), Integer(4), Integer(6)]), value_of(program))

	def test_map_with_a_native(self):
		self.assertEqual(Array([String("1"), String("true")]), value_of("(map (@ 1 true) string)"))

	def test_map_sees_the_callers_names(self):
		program = "(let offset 10) (let shift (function x (+ x offset))) (map (@ 1 2) shift)"
		self.assertEqual(Array([Integer(11), Integer(12)]), value_of(program))

	def test_map_checks_the_callee(self):
		with self.assertRaises(TypeMismatch):
			run("(map (@ 1) 5)")
		with self.assertRaises(ArityMismatch):
			run("(map (@ 1) (function a b a))")

class CastTests(unittest.TestCase):

	def test_int(self):
		self.assertEqual(Integer(97), value_of("(int (. 'a' 0))"))
		self.assertEqual(Integer(1), value_of("(int true)"))
		with self.assertRaises(TypeMismatch):
			run('(int "12")')

	def test_char(self):
		self.assertEqual(Character(90), value_of("(char 90)"))
		with self.assertRaises(TypeMismatch):
			run("(char -1)")

	def test_string(self):
		self.assertEqual(String("(@ 1 2)"), value_of("(string (@ 1 2))"))
		self.assertEqual(String("Z"), value_of("(string (char 90))"))

	def test_bool(self):
		self.assertEqual(FALSE, value_of("(bool 0)"))
		self.assertEqual(TRUE, value_of("(bool 'x')"))
		with self.assertRaises(TypeMismatch):
			run("(bool (@))")

	def test_casts_take_one_argument(self):
		for name in ["int", "char", "string", "bool"]:
			with self.subTest(name):
				with self.assertRaises(ArityMismatch):
					run("(%s 1 2)" % name)

class NativeFunctionTests(unittest.TestCase):

	def test_accepts(self):
		exact = NativeFunction("f", None, 1, 1)
		self.assertTrue(exact.accepts(1))
		self.assertFalse(exact.accepts(2))
		open_ended = NativeFunction("g", None, 2)
		self.assertFalse(open_ended.accepts(1))
		self.assertTrue(open_ended.accepts(20))
		self.assertIs(Kind.NATIVE_FUNCTION, exact.kind)

if __name__ == '__main__':
	unittest.main()
