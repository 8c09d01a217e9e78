"""
This is an interpreter for the Lox programming language.

For example:

    lox program.lox

will run program.lox if possible, or else try to explain why not.

    lox

with no program starts an interactive session. Each line runs as it is entered.

    lox -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

# Conventional exit statuses, per BSD sysexits.
EX_OK = 0
EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70

PROMPT = "> "

parser = argparse.ArgumentParser(
	prog="lox",
	description="Interpreter for the Lox programming language.",
)
parser.add_argument("program", nargs="?", help="try examples/classes.lox for example. Omit for an interactive session.")
parser.add_argument('-c', "--check", action="store_true", help="Check the program but do not actually execute the program.")
parser.add_argument('-t', "--tokens", action="store_true", help="Print the tokens of the program, and stop.")
parser.add_argument('-a', "--ast", action="store_true", help="Print the syntax tree of the program, and stop.")
parser.add_argument('-v', "--verbose", action="count", help="Say what each phase did.")

def exit_status(report) -> int:
	""" Caller policy: any static complaint is bad data; a run-time complaint is a software failure. """
	if report.had_syntax_error() or report.had_resolution_error(): return EX_DATAERR
	if report.had_runtime_error(): return EX_SOFTWARE
	return EX_OK

def run(args) -> int:
	from .diagnostics import Report
	report = Report(verbose=args.verbose)
	if args.program is None:
		if args.check or args.tokens or args.ast:
			print("The --check, --tokens, and --ast options need a program.", file=sys.stderr)
			return EX_USAGE
		return run_prompt(report)
	path = Path(args.program)
	try:
		with open(path, "r", encoding="utf-8") as fh: text = fh.read()
	except OSError:
		print("I see no file called", path, file=sys.stderr)
		return EX_NOINPUT
	if args.tokens: return dump_tokens(text, report)
	if args.ast: return dump_tree(text, report)
	if args.check: return check(text, report, str(path))
	from .tree_walker.executive import Session
	Session(report).run(text, str(path))
	report.complain_to_console()
	return exit_status(report)

def dump_tokens(text:str, report) -> int:
	from .front_end import scan_text
	for token in scan_text(text, report):
		print(token)
	report.complain_to_console()
	return exit_status(report)

def dump_tree(text:str, report) -> int:
	from .front_end import parse_text
	from .printer import AstPrinter
	statements = parse_text(text, report)
	if report.ok():
		print(AstPrinter().dump(statements))
	report.complain_to_console()
	return exit_status(report)

def check(text:str, report, filename:str) -> int:
	from .front_end import parse_text
	from .resolution import Resolver
	statements = parse_text(text, report, filename)
	if report.ok():
		Resolver({}, report).resolve(statements)
	if report.ok():
		print("Looks plausible to me.", file=sys.stderr)
	report.complain_to_console()
	return exit_status(report)

def run_prompt(report, stdin=None) -> int:
	"""
	Every line is its own execution unit: complaints are reported and forgotten,
	but whatever it declared stays declared.
	"""
	from .tree_walker.executive import Session
	stdin = stdin or sys.stdin
	session = Session(report)
	while True:
		print(PROMPT, end="", flush=True)
		line = stdin.readline()
		if not line:
			print()
			return EX_OK
		session.run(line)
		report.complain_to_console()

def main():
	sys.exit(run(parser.parse_args()))
