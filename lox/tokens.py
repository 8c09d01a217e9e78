"""
The token model.

Token kinds are plain interned strings, which keeps the parser readable:
Punctuation stands for itself, reserved words are upper-cased,
and the three kinds of token that carry a literal get lower-case names.
"""
import sys
from typing import Any, NamedTuple

NAME = "name"
NUMBER = "number"
STRING = "string"
END = "<END>"

KEYWORDS = {
	word: sys.intern(word.upper())
	for word in """
		and class else false for fun if nil or
		print return super this true var while
	""".split()
}

# Error recovery in the parser resumes at any of these.
STATEMENT_STARTERS = frozenset(["CLASS", "FUN", "VAR", "FOR", "IF", "WHILE", "PRINT", "RETURN"])

class Token(NamedTuple):
	kind: str
	lexeme: str
	literal: Any
	line: int
	offset: int = 0  # Where the lexeme starts in the source text; diagnostics want this.
	source: Any = None  # The SourceText it was scanned from, for illustrating complaints.

	def __str__(self):
		if self.literal is None:
			return "%4d  %-10s %r" % (self.line, self.kind, self.lexeme)
		return "%4d  %-10s %r  %r" % (self.line, self.kind, self.lexeme, self.literal)
