"""
The overall control for running text: one execution unit at a time, through every phase.

Scan and parse, then resolve, then interpret, stopping after any phase that complained.
A session keeps one interpreter, so globals declared by one unit are there for the next.
"""
import sys
import threading
from typing import Sequence
from .. import syntax
from ..diagnostics import Report
from ..front_end import parse_text
from ..resolution import Resolver
from .runtime import Interpreter

# Each Lox call nests about a dozen Python frames,
# so a unit gets a recursion limit and a thread stack to match.
RECURSION_LIMIT = 200_000
STACK_SIZE = 512 * 1024 * 1024

def run_deep(fn, *args):
	"""
	Run fn(*args) to completion in a worker thread with a deep stack, and hand back its result.
	Whatever it raises is raised again here, in the caller's thread.
	"""
	outcome = {}
	def work():
		try: outcome["result"] = fn(*args)
		except BaseException as ex: outcome["exception"] = ex
	if sys.getrecursionlimit() < RECURSION_LIMIT:
		sys.setrecursionlimit(RECURSION_LIMIT)
	prior = threading.stack_size(STACK_SIZE)
	try:
		worker = threading.Thread(target=work, name="lox")
		worker.start()
	finally:
		threading.stack_size(prior)
	worker.join()
	if "exception" in outcome: raise outcome["exception"]
	return outcome["result"]

class Session:
	def __init__(self, report:Report, out=None):
		self.report = report
		self.interpreter = Interpreter(out)

	def define_native(self, name:str, arity:int, fn):
		self.interpreter.define_native(name, arity, fn)

	def run(self, text:str, filename=None) -> bool:
		""" Returns True if the unit ran to completion with no complaints. """
		return run_deep(self._run, text, filename)

	def _run(self, text:str, filename) -> bool:
		self.report.reset()
		statements = parse_text(text, self.report, filename)
		if self.report.had_syntax_error(): return False
		return self.run_statements(statements)

	def run_statements(self, statements:Sequence[syntax.Stmt]) -> bool:
		""" For a tree already parsed. Resolution is repeatable: it writes the same distances again. """
		Resolver(self.interpreter.distances, self.report).resolve(statements)
		if self.report.had_resolution_error(): return False
		return self.interpreter.interpret(statements, self.report)
