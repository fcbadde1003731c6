"""
Recursive-descent parser with exactly one token of lookahead.

Every compound form is parenthesized. Once the keyword of a form has been
consumed, the rest of that form must match its own little grammar or the
parse fails on the spot: there is no backtracking.
"""
from pathlib import Path
from typing import Optional, Union

from boozetools.parsing.interface import ParseError
from .ontology import LispetteError, LexicalError
from .lexer import Scanner, Token, TokenKind
from . import syntax
from .diagnostics import Report

class LispetteSyntaxError(LispetteError, ParseError):
	def __init__(self, expected:str, found:Token, message:Optional[str]=None):
		super().__init__(message or "expected %s, got %s" % (expected, found), found.position)
		self.expected = expected
		self.found = found

EXPRESSION_START = frozenset([
	TokenKind.LPAREN, TokenKind.INT, TokenKind.IDENT,
	TokenKind.STRING, TokenKind.TRUE, TokenKind.FALSE,
])

# Tokens which may appear in operator position of a function call.
CALLABLE = frozenset([
	TokenKind.PLUS, TokenKind.MINUS, TokenKind.STAR, TokenKind.SLASH,
	TokenKind.EQ, TokenKind.NE, TokenKind.LT, TokenKind.LE, TokenKind.GT, TokenKind.GE,
	TokenKind.BANG, TokenKind.DOT, TokenKind.AT, TokenKind.EVAL, TokenKind.IDENT,
])

class Parser:
	def __init__(self, scanner:Scanner):
		self._scanner = scanner
		self._peeked:Optional[Token] = None

	# Token-level helpers

	def peek(self) -> Token:
		if self._peeked is None:
			self._peeked = self._scanner.next_token()
		return self._peeked

	def take(self) -> Token:
		token = self.peek()
		self._peeked = None
		return token

	def take_if(self, kind:TokenKind) -> Optional[Token]:
		if self.peek().kind is kind:
			return self.take()

	def expect(self, kind:TokenKind, expected:str) -> Token:
		token = self.take()
		if token.kind is not kind:
			raise LispetteSyntaxError(expected, token)
		return token

	# Grammar

	def program(self) -> syntax.Program:
		start = self.peek().position
		exprs = []
		while self.peek().kind is not TokenKind.EOF:
			exprs.append(self.expression("expression"))
		return syntax.Program(start, exprs)

	def expression(self, expected:str) -> syntax.Expression:
		token = self.peek()
		if token.kind not in EXPRESSION_START:
			raise LispetteSyntaxError(expected, token)
		if token.kind is TokenKind.LPAREN:
			return self._compound()
		return syntax.Atom(self.take())

	def _compound(self) -> syntax.Expression:
		lparen = self.take()
		if self.take_if(TokenKind.RPAREN):
			return syntax.Unit(lparen.position)
		head = self.take()
		try: method = KEYWORD_FORMS[head.kind]
		except KeyError: pass
		else: return method(self, head)
		if head.kind not in CALLABLE:
			raise LispetteSyntaxError("function name", head)
		args = []
		while not self.take_if(TokenKind.RPAREN):
			if self.peek().kind is TokenKind.EOF:
				raise LispetteSyntaxError("')' or value", self.peek())
			args.append(self.expression("function argument"))
		return syntax.FunctionCall(head, args)

	def _if(self, head:Token) -> syntax.If:
		cond = self.expression("condition")
		true_branch = self.expression("IF true branch")
		if self.peek().kind is TokenKind.EOF:
			raise LispetteSyntaxError("expression or ')'", self.peek())
		false_branch = None
		if not self.take_if(TokenKind.RPAREN):
			false_branch = self.expression("IF false branch")
			token = self.take()
			if token.kind is not TokenKind.RPAREN:
				raise LispetteSyntaxError("')'", token, "IF may only contain a condition, true branch, and optional false branch")
		return syntax.If(head.position, cond, true_branch, false_branch)

	def _function(self, head:Token) -> syntax.FunctionDef:
		names = []
		while self.peek().kind is TokenKind.IDENT:
			names.append(self.take())
		if names and self.peek().kind is TokenKind.RPAREN:
			# The identifiers ran right up to the end, so the last is the body.
			body = syntax.Atom(names.pop())
		else:
			body = self.expression("function body")
		self.expect(TokenKind.RPAREN, "')' after function body")
		return syntax.FunctionDef(head.position, [n.value for n in names], body)

	def _declare(self, head:Token) -> syntax.DeclareVar:
		name = self.expect(TokenKind.IDENT, "name for variable declaration")
		value = None
		if not self.take_if(TokenKind.RPAREN):
			value = self.expression("variable value")
			self.expect(TokenKind.RPAREN, "')' after variable value")
		return syntax.DeclareVar(head.position, name.value, value)

	def _assign(self, head:Token) -> syntax.AssignVar:
		name = self.expect(TokenKind.IDENT, "name for variable assignment")
		value = self.expression("variable value")
		self.expect(TokenKind.RPAREN, "')' after variable value")
		return syntax.AssignVar(head.position, name.value, value)

	def _while(self, head:Token) -> syntax.While:
		cond = self.expression("while condition")
		body = self.expression("while body")
		self.expect(TokenKind.RPAREN, "')' after while body")
		return syntax.While(head.position, cond, body)

	def _for(self, head:Token) -> syntax.For:
		init = self.expression("FOR init")
		cond = self.expression("FOR condition")
		post = self.expression("FOR post")
		body = self.expression("FOR body")
		self.expect(TokenKind.RPAREN, "')' after FOR body")
		return syntax.For(head.position, init, cond, post, body)

KEYWORD_FORMS = {
	TokenKind.IF: Parser._if,
	TokenKind.FUNCTION: Parser._function,
	TokenKind.LET: Parser._declare,
	TokenKind.EQUALS: Parser._assign,
	TokenKind.WHILE: Parser._while,
	TokenKind.FOR: Parser._for,
}

def parse(text:str) -> syntax.Program:
	""" Raises LexicalError or LispetteSyntaxError on bad input """
	return Parser(Scanner(text)).program()

def parse_text(text:str, path:Union[Path, str], report:Report) -> Optional[syntax.Program]:
	""" Submit text to parser; on failure, tell the report and return None. """
	report.set_source(text, str(path))
	try:
		return parse(text)
	except LexicalError as ex:
		report.lexical_error(ex)
	except LispetteSyntaxError as ex:
		report.syntax_error(ex, _best_hint(ex))

##########################
#
#  Parse errors read better with a little advice attached.
#

_advice = {}

def _hint(expected:str, found:TokenKind, text:str):
	_advice[expected, found] = text

def _best_hint(ex:LispetteSyntaxError) -> str:
	try: return "Here's my best guess:\n\t" + _advice[ex.expected, ex.found.kind]
	except KeyError: return "Expected %s here." % ex.expected

_hint("')' or value", TokenKind.EOF, "I suspect a missing ')' closing parentheses.")
_hint("expression or ')'", TokenKind.EOF, "I suspect a missing ')' closing parentheses.")
_hint("expression", TokenKind.RPAREN, "Seems to be an extra ')' somewhere before here.")
_hint("function name", TokenKind.INT, "A negative number needs a space after the minus sign to mean subtraction.")
_hint("function name", TokenKind.LPAREN, "Only a name or an operator can be called. To run several things in order, use eval.")
_hint("name for variable declaration", TokenKind.FUNCTION, "Functions are anonymous: write (let name (function ...)).")
_hint("')'", TokenKind.LPAREN, "Probably a missing ')' just before here.")
