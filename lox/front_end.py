"""
Submit text to the scanner and the parser; report what happened.
"""
from boozetools.support.failureprone import SourceText
from . import syntax
from .diagnostics import Report
from .parser import Parser
from .scanner import Scanner
from .tokens import Token

def scan_text(text:str, report:Report, filename=None) -> list[Token]:
	""" Each token remembers this text, so complaints can illustrate the right line later on. """
	tokens = Scanner(SourceText(text, filename=filename), report).scan_tokens()
	report.info("Scanned %d token(s)." % len(tokens))
	return tokens

def parse_text(text:str, report:Report, filename=None) -> list[syntax.Stmt]:
	"""
	Always returns whatever statements could be parsed.
	Lexical problems do not stop the parse: It may find more problems.
	Check `report.had_syntax_error()` before doing anything else with the result.
	"""
	statements = Parser(scan_text(text, report, filename), report).parse()
	report.info("Parsed %d top-level statement(s)." % len(statements))
	return statements
