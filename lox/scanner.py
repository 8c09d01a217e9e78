"""
Source text in, tokens out.

The lexical rules are a booze-tools miniscan definition: longest match wins,
and among equally-long matches the rule declared first wins.
Bad characters and runaway strings get reported, and then scanning carries on,
so one pass can find every lexical problem in the text.
"""
import sys
from boozetools.scanning import miniscan
from boozetools.scanning.engine import Scanner as _Engine
from boozetools.support.failureprone import SourceText
from .tokens import Token, KEYWORDS, NAME, NUMBER, STRING, END
from .diagnostics import Report

class _Rules(miniscan.Definition):
	def on_stuck(self, yy:"Scanner"):
		# Only vertical-space oddities like form-feed get here; the engine has already stepped past.
		yy.lexical_error("Unexpected character.")

LEX = _Rules("Lox")

LEX.ignore(r'[\x20\t\r]+')

@LEX.on(r'\n')
def _newline(yy:"Scanner"): yy.line += 1

LEX.ignore(r'\/\/[^\n]*')

@LEX.on(r'[()\{\},.\-+;*\/]|[!=<>]=?')
def _punctuation(yy:"Scanner"): yy.token(yy.match())

LEX.token_map(NUMBER, r'\d+(\.\d+)?', float)

@LEX.on(r'"[^"]*"')
def _string(yy:"Scanner"):
	text = yy.match()
	yy.line += text.count("\n")
	yy.token(STRING, text[1:-1])

@LEX.on(r'"[^"]*')
def _unterminated_string(yy:"Scanner"):
	yy.line += yy.match().count("\n")
	yy.lexical_error("Unterminated string.")

@LEX.on(r'[A-Za-z_][A-Za-z_0-9]*')
def _word(yy:"Scanner"): yy.token(KEYWORDS.get(yy.match(), NAME))

@LEX.on(r'.')
def _stray(yy:"Scanner"): yy.lexical_error("Unexpected character.")


class Scanner(_Engine):
	"""
	The rules' actions call back into this object, which turns each match into a `Token`
	stamped with the current line and the source it came from.
	"""
	_tokens: list[Token]

	def __init__(self, source:SourceText, report:Report):
		super().__init__(source.content, LEX.get_dfa(), LEX, start=None)
		self._source = source
		self._report = report
		self._tokens = []
		self.line = 1

	def scan_tokens(self) -> list[Token]:
		self.scan_repeatedly()
		self._tokens.append(Token(END, "", None, self.line, len(self._source.content), self._source))
		return self._tokens

	def token(self, kind:str, literal=None):
		self._tokens.append(Token(sys.intern(kind), self.match(), literal, self.line, self.left, self._source))

	def lexical_error(self, message:str):
		self._report.lexical_error(self.line, message)
