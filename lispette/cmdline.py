"""
This is an interpreter for the Lispette programming language.

{0}

For example:

    lispette program.lsp

will run program.lsp if possible, or else try to explain why not.

    lispette < program.lsp

reads the program from standard input instead.

    lispette -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

RECURSION_LIMIT = 20000

parser = argparse.ArgumentParser(
	prog="lispette",
	description="Interpreter for the Lispette programming language.",
)
parser.add_argument("program", nargs="?", default="-", help="path to a program, or - for standard input.")
parser.add_argument('-a', "--ast", action="store_true", help="Print the parsed program before running it.")
parser.add_argument('-c', "--check", action="store_true", help="Parse the program but do not actually execute it.")
parser.add_argument('-v', "--verbose", action="count", help="Say more about what is going on. Repeat for more.")

def _read_program(args, report):
	if args.program == "-":
		return sys.stdin.read(), "stdin"
	path = Path.cwd() / args.program
	report.info("Reading", path)
	with open(path, "r", encoding="utf-8") as fh:
		return fh.read(), str(path)

def run(args, console=None) -> int:
	from .diagnostics import Report
	from .front_end import parse_text
	from .ontology import EvaluationError
	from .pretty import dump
	from .evaluator import run_program
	report = Report(verbose=args.verbose)
	try:
		text, name = _read_program(args, report)
	except OSError as ex:
		print("Could not open file for reading %s: %s" % (args.program, ex.strerror), file=sys.stderr)
		return 1
	program = parse_text(text, name, report)
	if report.sick():
		report.complain_to_console()
		return 1
	report.info("Parsed %d top-level expression(s)." % len(program.exprs))
	if args.ast:
		print(dump(program))
	if args.check:
		print("Looks plausible to me.", file=sys.stderr)
		return 0
	sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))
	try:
		result = run_program(program, console)
	except EvaluationError as ex:
		report.evaluation_error(ex)
	except RecursionError:
		report.stack_overflow()
	else:
		report.info("Result:", repr(result))
		return 0
	report.complain_to_console()
	return 1

def main():
	if len(sys.argv) > 1 or not sys.stdin.isatty():
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
