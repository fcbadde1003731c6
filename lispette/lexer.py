"""
Hand-written scanner for the S-expression surface syntax.

The scanner is a cursor over the whole program text: each call to
`next_token` skips blanks and comments, then produces exactly one token
stamped with the position where it started.
"""
import sys
from enum import Enum
from typing import Iterator, NamedTuple, Union

from .ontology import Position, LexicalError

MAX_IDENT_LEN = 255

class TokenKind(Enum):
	EOF = "EOF"

	LPAREN = "LPAREN"
	RPAREN = "RPAREN"
	PLUS = "PLUS"
	MINUS = "MINUS"
	STAR = "STAR"
	SLASH = "SLASH"
	EQUALS = "EQUALS"
	AT = "AT"
	DOT = "DOT"
	EQ = "EQ"
	NE = "NE"
	LT = "LT"
	LE = "LE"
	GT = "GT"
	GE = "GE"
	BANG = "BANG"

	LET = "LET"
	IF = "IF"
	TRUE = "TRUE"
	FALSE = "FALSE"
	EVAL = "EVAL"
	FUNCTION = "FUNCTION"
	WHILE = "WHILE"
	FOR = "FOR"

	INT = "INT"
	IDENT = "IDENT"
	STRING = "STRING"

PUNCTUATION = {
	"(": TokenKind.LPAREN,
	")": TokenKind.RPAREN,
	"+": TokenKind.PLUS,
	"*": TokenKind.STAR,
	"/": TokenKind.SLASH,
	"@": TokenKind.AT,
	".": TokenKind.DOT,
}

# A character which may be followed by '=' to form a two-character operator.
RELATIONAL = {
	"=": (TokenKind.EQUALS, TokenKind.EQ),
	"!": (TokenKind.BANG, TokenKind.NE),
	"<": (TokenKind.LT, TokenKind.LE),
	">": (TokenKind.GT, TokenKind.GE),
}

KEYWORDS = {
	"let": TokenKind.LET,
	"if": TokenKind.IF,
	"true": TokenKind.TRUE,
	"false": TokenKind.FALSE,
	"eval": TokenKind.EVAL,
	"function": TokenKind.FUNCTION,
	"while": TokenKind.WHILE,
	"for": TokenKind.FOR,
}

SPELLING = {kind: text for text, kind in PUNCTUATION.items()}
SPELLING.update((kind, text) for text, kind in KEYWORDS.items())
for _text, (_bare, _double) in RELATIONAL.items():
	SPELLING[_bare] = _text
	SPELLING[_double] = _text+"="
SPELLING[TokenKind.MINUS] = "-"  # Scanned apart from the other punctuation, for negative literals.

ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0"}

DIGITS = {
	"x": "0123456789abcdefABCDEF",
	"b": "01",
}
BASES = {"x": 16, "b": 2}

class Token(NamedTuple):
	kind: TokenKind
	value: Union[int, str, None]
	position: Position

	def __str__(self):
		""" The way diagnostics mention a token, e.g. IDENT 'foo' """
		kind = self.kind.value
		if self.kind is TokenKind.EOF: return kind
		if self.kind is TokenKind.INT: return "%s %d" % (kind, self.value)
		if self.kind in (TokenKind.IDENT, TokenKind.STRING): return "%s '%s'" % (kind, self.value)
		return "%s '%s'" % (kind, SPELLING[self.kind])

class Scanner:
	""" Cursor over program text. Owns line and column tracking. """
	def __init__(self, text:str):
		self._text = text
		self._offset = 0
		self._line = 1
		self._column = 1

	def position(self) -> Position:
		return Position(self._line, self._column, self._offset)

	def _peek(self) -> str:
		""" Empty string at end of input """
		return self._text[self._offset:self._offset+1]

	def _take(self) -> str:
		c = self._peek()
		if c:
			self._offset += 1
			if c == "\n":
				self._line += 1
				self._column = 1
			else:
				self._column += 1
		return c

	def _fail(self, message:str):
		raise LexicalError(message, self.position())

	def next_token(self) -> Token:
		while True:
			start = self.position()
			c = self._take()
			if not c:
				return Token(TokenKind.EOF, None, start)
			if c.isspace():
				continue
			if c == ";":
				while self._peek() not in ("", "\n"): self._take()
				continue
			if c in PUNCTUATION:
				return Token(PUNCTUATION[c], None, start)
			if c in RELATIONAL:
				bare, double = RELATIONAL[c]
				if self._peek() == "=":
					self._take()
					return Token(double, None, start)
				return Token(bare, None, start)
			if c == "-":
				if _is_digit(self._peek()):
					return Token(TokenKind.INT, -self._integer(self._take()), start)
				return Token(TokenKind.MINUS, None, start)
			if c in "'\"":
				return Token(TokenKind.STRING, self._string(c), start)
			if _is_digit(c):
				return Token(TokenKind.INT, self._integer(c), start)
			if c.isascii() and (c.isalpha() or c == "_"):
				word = self._word(c)
				return Token(KEYWORDS.get(word, TokenKind.IDENT), word, start)
			raise LexicalError("Unexpected character %r" % c, start)

	def _integer(self, leading:str) -> int:
		if leading == "0" and self._peek() in BASES:
			radix = self._take()
			digits = self._digits(DIGITS[radix])
			if not digits: self._fail("Expected digits after '0%s'" % radix)
			return int(digits, BASES[radix])
		return int(leading + self._digits("0123456789"))

	def _digits(self, allowed:str) -> str:
		digits = []
		while self._peek() and self._peek() in allowed:
			digits.append(self._take())
		if self._peek().isalnum():
			self._fail("Unexpected character %r" % self._peek())
		return "".join(digits)

	def _string(self, quote:str) -> str:
		chars = []
		while True:
			c = self._take()
			if not c: break
			if c == quote: return "".join(chars)
			if c == "\\":
				c = self._take()
				if not c: break
				c = ESCAPES.get(c, c)
			chars.append(c)
		self._fail("Expected string terminator, found EOF.")

	def _word(self, leading:str) -> str:
		chars = [leading]
		while _is_word_char(self._peek()):
			if len(chars) >= MAX_IDENT_LEN:
				self._fail("Ident must be at most %d characters." % MAX_IDENT_LEN)
			chars.append(self._take())
		return sys.intern("".join(chars))

def _is_digit(c:str) -> bool:
	return c != "" and c in "0123456789"

def _is_word_char(c:str) -> bool:
	return c != "" and c.isascii() and (c.isalnum() or c == "_")

def tokenize(text:str) -> Iterator[Token]:
	""" Every token in the text, ending with (and including) the EOF token. """
	scanner = Scanner(text)
	while True:
		token = scanner.next_token()
		yield token
		if token.kind is TokenKind.EOF: return
