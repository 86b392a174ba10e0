"""
This is an interpreter for the Dena scripting language.

For example:

    dena program.dena

will run program.dena if possible, or else try to explain why not.

    dena -e "print 1 + 2;"

runs a program given right on the command line, and

    dena

with no program at all starts an interactive session.
"""
import sys, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="dena",
	description="Interpreter for the Dena scripting language.",
)
source = parser.add_mutually_exclusive_group()
source.add_argument("program", nargs="?", help="a file of Dena source; omit for an interactive session.")
source.add_argument('-e', "--eval", metavar="TEXT", help="Run TEXT as the program instead of reading a file.")
parser.add_argument('-c', "--check", action="store_true", help="Scan, parse and resolve the program but do not actually execute it.")
parser.add_argument('-v', "--verbose", action="count", help="Say more about what each phase is doing.")

PROMPT = "> "

def run(args) -> int:
	from .diagnostics import Report, TooManyIssues
	from .resolution import Yuck
	from .tree_walker.executive import new_interpreter, prepare, run_text, read_program
	report = Report(verbose=args.verbose)
	interpreter = new_interpreter()
	if args.eval is None and args.program is None:
		return interact(interpreter, report)
	try:
		if args.eval is not None: path, text = None, args.eval
		else:
			path = Path.cwd() / args.program
			text = read_program(path, report)
		if args.check:
			prepare(text, interpreter, report, path)
			print("Looks plausible to me.", file=sys.stderr)
		else:
			run_text(text, interpreter, report, path)
	except Yuck:
		assert report.sick()
		report.complain_to_console()
		return 1
	except TooManyIssues:
		report.complain_to_console()
		print(" *"*35, file=sys.stderr)
		print("Giving up after a few issues. One crisis at a time, eh?", file=sys.stderr)
		return 1
	except RecursionError:
		_too_deep()
		return 1
	return 0

def interact(interpreter, report) -> int:
	"""
	Each line is a program in its own right, but they share one global frame,
	so what one line defines the next can use. Mistakes get reported and then
	forgotten. An empty line or end-of-file ends the session.
	"""
	from .diagnostics import TooManyIssues
	from .resolution import Yuck
	from .tree_walker.executive import run_text
	while True:
		try: line = input(PROMPT)
		except EOFError: return 0
		if not line.strip(): return 0
		try: run_text(line, interpreter, report)
		except (Yuck, TooManyIssues): report.complain_to_console()
		except RecursionError:
			_too_deep()
			return 1
		finally: report.reset()

def _too_deep():
	print("The program recursed too deeply for this interpreter to follow. Stopping.", file=sys.stderr)

def main():
	sys.exit(run(parser.parse_args()))
