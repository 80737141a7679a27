"""
This is an interpreter for the Belated programming language.

{0}

For example:

    belated program.bel

will run program.bel if possible, or else try to explain why not.

    belated -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="belated",
	description="Interpreter for the Belated programming language.",
)
parser.add_argument("program", help="try examples/write_once.bel for example.")
parser.add_argument('-c', "--check", action="count", help="Check the program (verbosely, if repeated) but do not actually execute the program.")
parser.add_argument('-v', "--verbose", action="count", help="Narrate task scheduling while the program runs.")
parser.add_argument("--max-issues", type=int, default=3, help="Give up after this many complaints.")

def run(args):
	from .diagnostics import Report, TooManyIssues
	from .errors import ScriptError
	from .front_end import parse_file
	from .resolution import check_module, Yuck
	report = Report(verbose=(args.check or 0) > 1 or args.verbose, max_issues=args.max_issues)
	try:
		module = parse_file(Path.cwd() / args.program, report)
		if module is None:
			report.complain_to_console()
			return 1
		report.info("Parsed", args.program)
		try: check_module(module, report)
		except Yuck:
			report.complain_to_console()
			return 1
	except TooManyIssues:
		report.complain_to_console()
		print(" *"*35, file=sys.stderr)
		print("Giving up after a few issues. One crisis at a time, eh?", file=sys.stderr)
		return 1
	if args.check:
		print("Looks plausible to me.", file=sys.stderr)
		return
	from .tree_walker.executive import run_program
	try: run_program(module, report)
	except ScriptError as ex:
		try: report.runtime_fault(ex)
		except TooManyIssues: pass
		report.complain_to_console()
		return 1

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
