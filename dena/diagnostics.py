import sys, random
from pathlib import Path
from typing import Optional
from boozetools.support.failureprone import SourceText, illustration

from .ontology import DenaError

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]
	minced_oaths = [
		'Ack', 'Blargh', 'Confound it', 'Crud', 'Curses', 'Drat',
		'Fiddlesticks', 'Good Grief', 'Great Scott', 'Jeepers',
		'Nuts', 'Rats', 'Woe is me',
	]
	resignations = [
		'I cannot continue.',
		'I have no idea what the right answer is.',
		'I need to ask for help.',
	]
	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	"""
	Collects whatever goes wrong in each phase, so that the driver can
	decide what to do about it and the console can hear about all of it.
	"""
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0, max_issues=10):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues
		self._source = SourceText("")
		self._path = None

	@property
	def issues(self) -> list["Pic"]: return list(self._issues)

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	def issue(self, it:"Pic"):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def set_source(self, text:str, path:Optional[Path]=None):
		""" Subsequent complaints will be illustrated against this text. """
		self._source = SourceText(text, filename=None if path is None else str(path))
		self._path = path

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	def _complain(self, intro:str, ex:DenaError, footer=()):
		ann = Annotation(self._source, ex.offset, ex.width, ex.message)
		self.issue(Pic(intro % ex.line, self._path, [ann], footer))

	# Methods the front-end is likely to call:
	def lex_error(self, ex:DenaError):
		self._complain("Dena could not make sense of some characters on line %d.", ex)

	def parse_error(self, ex:DenaError):
		self._complain("Dena got confused by the grammar on line %d.", ex)

	def no_such_file(self, path:Path):
		self.issue(Pic("I see no file called "+str(path), None, []))

	def broken_file(self, path:Path):
		self.issue(Pic("Something went pear-shaped while trying to read "+str(path), None, []))

	# The resolver and the run-time
	def resolution_error(self, ex:DenaError):
		self._complain("Scope trouble on line %d.", ex)

	def runtime_error(self, ex:DenaError):
		footer = ["The program stopped here."]
		self._complain("Something went wrong at run-time on line %d.", ex, footer)

class Annotation:
	def __init__(self, source:SourceText, offset:int, width:int, caption:str=""):
		self.source = source
		self.offset = offset
		self.width = width
		self.caption = caption
	def illustrate(self):
		row, col = self.source.find_row_col(self.offset)
		single_line = self.source.line_of_text(row)
		return illustration(single_line, col, self.width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, path:Optional[Path], anns:list[Annotation], footer=()):
		self.intro, self._path, self._anns, self._footer = intro, path, anns, footer
	def captions(self) -> list[str]: return [ann.caption for ann in self._anns]
	def as_text(self):
		lines = [self.intro, ""]
		if self._path is not None:
			lines.append(str(self._path))
		for ann in self._anns:
			lines.append(ann.illustrate())
		lines.extend(self._footer)
		return '\n'.join(lines)

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
