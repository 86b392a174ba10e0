"""
This is the overall control for the run-time:
take text through every phase, and file whatever goes wrong.
"""
import sys
from pathlib import Path
from typing import Optional
from .. import syntax
from ..diagnostics import Report
from ..environment import Environment
from ..front_end import parse_text
from ..preamble import install_natives
from ..resolution import Resolver, ResolutionError, Yuck
from .evaluator import Interpreter, DenaRuntimeError
from . import runtime  # NOQA: importing it fills the dispatch tables.

# Each level of Dena recursion costs about ten Python frames.
PYTHON_FRAMES = 100_000

def new_interpreter(output=None) -> Interpreter:
	""" A fresh global frame, with natives, and nothing else. """
	if sys.getrecursionlimit() < PYTHON_FRAMES:
		sys.setrecursionlimit(PYTHON_FRAMES)
	frame = Environment()
	install_natives(frame)
	return Interpreter(frame, output)

def prepare(text:str, interpreter:Interpreter, report:Report, path:Optional[Path]=None) -> list[syntax.Stmt]:
	""" Scan, parse, and resolve. Raises Yuck naming the phase that failed. """
	statements = parse_text(text, report, path)
	if report.sick(): raise Yuck("parse")
	before = len(interpreter.locals)
	try: Resolver(interpreter).resolve(statements)
	except ResolutionError as ex:
		report.resolution_error(ex)
		raise Yuck("resolve")
	report.info("Resolved", len(interpreter.locals) - before, "local references")
	return statements

def run_text(text:str, interpreter:Interpreter, report:Report, path:Optional[Path]=None):
	statements = prepare(text, interpreter, report, path)
	try: interpreter.execute(statements)
	except DenaRuntimeError as ex:
		report.runtime_error(ex)
		raise Yuck("runtime")

def read_program(path:Path, report:Report) -> str:
	report.info("Loading", path)
	try:
		with open(path, "r", encoding="utf-8") as fh:
			return fh.read()
	except FileNotFoundError:
		report.no_such_file(path)
	except OSError:
		report.broken_file(path)
	raise Yuck("read")

def run_file(path:Path, interpreter:Interpreter, report:Report):
	run_text(read_program(path, report), interpreter, report, path)
