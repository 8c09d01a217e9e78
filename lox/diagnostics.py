"""
Complaints, collected on three separate channels.

Scanning and parsing complain on the syntax channel, the resolver on the resolution channel,
and the tree-walker on the run-time channel. The caller decides what each means for an exit code.
"""
import sys
from typing import NamedTuple, Optional
from boozetools.support.failureprone import illustration

from .tokens import Token, END

SYNTAX = "syntax"
RESOLUTION = "resolution"
RUNTIME = "runtime"

class LoxRuntimeError(Exception):
	""" Raised by the tree-walker; carries the guilty token so we know which line to blame. """
	def __init__(self, token:Token, message:str):
		super().__init__(message)
		self.token = token
		self.message = message

def location(token:Token) -> str:
	if token.kind == END: return " at end"
	return " at '%s'" % token.lexeme

class Issue(NamedTuple):
	phase: str
	line: int
	where: str
	message: str
	token: Optional[Token]

	def as_text(self):
		if self.phase == RUNTIME:
			return "%s\n[line %d]" % (self.message, self.line)
		return "[line %d] Error%s: %s" % (self.line, self.where, self.message)

class Report:
	""" One of these lasts a whole session. Each execution unit starts with a reset. """
	_issues: list[Issue]

	def __init__(self, *, verbose:int=0):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	def issues(self, phase:Optional[str]=None) -> list[Issue]:
		return [i for i in self._issues if phase is None or i.phase == phase]

	def _had(self, phase:str) -> bool:
		return any(i.phase == phase for i in self._issues)

	def had_syntax_error(self): return self._had(SYNTAX)
	def had_resolution_error(self): return self._had(RESOLUTION)
	def had_runtime_error(self): return self._had(RUNTIME)

	def reset(self):
		self._issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def issue(self, it:Issue):
		self._issues.append(it)
		self.info("Noted:", it.as_text())

	# The scanner calls this:
	def lexical_error(self, line:int, message:str):
		self.issue(Issue(SYNTAX, line, "", message, None))

	# The parser calls this:
	def parse_error(self, token:Token, message:str):
		self.issue(Issue(SYNTAX, token.line, location(token), message, token))

	# The resolver calls this:
	def resolution_error(self, token:Token, message:str):
		self.issue(Issue(RESOLUTION, token.line, location(token), message, token))

	# The tree-walker's driver calls this:
	def runtime_error(self, ex:LoxRuntimeError):
		token = ex.token
		self.issue(Issue(RUNTIME, token.line, location(token), ex.message, token))

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		for i in self._issues:
			print(i.as_text(), file=sys.stderr)
			if i.token is not None and i.token.kind != END and i.token.source is not None:
				print(self._illustrate(i.token), file=sys.stderr)
		sys.stderr.flush()

	@staticmethod
	def _illustrate(token:Token):
		# Against the text the token came from, which in a long session may be an earlier unit.
		row, col = token.source.find_row_col(token.offset)
		single_line = token.source.line_of_text(row)
		width = max(len(token.lexeme), 1)
		return illustration(single_line, col, width, prefix='% 6d |' % row)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(message)
