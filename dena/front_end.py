"""
Text in, statements out, with every complaint along the way filed in the report.
"""
from pathlib import Path
from typing import Optional
from . import syntax
from .diagnostics import Report
from .scanner import scan
from .parser import parse

def parse_text(text:str, report:Report, path:Optional[Path]=None) -> list[syntax.Stmt]:
	"""
	The scanner and parser each collect all their errors rather than stopping
	at the first, so a single run can tell the programmer about several problems.
	Check `report.sick()` before trusting the result.
	"""
	report.set_source(text, path)
	tokens, lex_errors = scan(text)
	for ex in lex_errors: report.lex_error(ex)
	report.info("Scanned", len(tokens), "tokens")
	statements, parse_errors = parse(tokens)
	for ex in parse_errors: report.parse_error(ex)
	report.info("Parsed", len(statements), "top-level statements")
	return statements
