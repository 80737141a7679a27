import sys, random
from pathlib import Path
from typing import Optional, Sequence, Union
from boozetools.support.failureprone import SourceText, illustration

from .ontology import Phrase
from .errors import ScriptError

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]

	minced_oaths = [
		'Ack', 'ARGH', 'Blargh', 'Confound it', 'Crud', 'Curses', "Crikey",
		'Drat', 'Fiddlesticks', 'Good Grief', "Great Scott", 'Jeepers',
		"Heavens to Betsy", 'Nuts', 'Rats', 'Woe is me',
	]

	resignations = [
		'I cannot continue.',
		'That was supposed to wait its turn.',
		'Something was not ready yet.',
		'I need to ask for help.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

WHERE = Union[Phrase, slice, None]

class Annotation:
	source: SourceText
	slice: Optional[slice]
	caption: str
	def __init__(self, source:SourceText, where:WHERE, caption:str=""):
		self.source = source
		self.slice = where.span() if isinstance(where, Phrase) else where
		self.caption = caption
	def illustrate(self):
		if self.slice is None:
			return "      | (at the end of the text) " + self.caption
		row, col = self.source.find_row_col(self.slice.start)
		single_line = self.source.line_of_text(row)
		width = self.slice.stop - self.slice.start
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=()):
		self._intro, self._anns, self._footer = intro, anns, footer
	@property
	def description(self): return self._intro
	def also(self, ann:Annotation): self._anns.append(ann)
	def as_text(self):
		lines = [self._intro, ""]
		filename = None
		for ann in self._anns:
			if ann.source.filename != filename:
				filename = ann.source.filename
				if filename: lines.append(filename)
			lines.append(ann.illustrate())
		lines.extend(self._footer)
		return '\n'.join(lines)

class Report:
	""" Collects what went wrong, and (on request) says so on the console. """
	issues : list[Pic]

	def __init__(self, *, verbose:int=0, max_issues=3):
		self._verbose = verbose or 0   # Because None is incomparable.
		self.issues = []
		self._redefined = {}
		self._max_issues = max_issues
		self._source = SourceText("")

	def ok(self): return not self.issues
	def sick(self): return bool(self.issues)

	def issue(self, it:Pic):
		self.issues.append(it)
		if len(self.issues) == self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self.issues.clear()
		self._redefined.clear()

	def set_source(self, text:str, path:Optional[Path]):
		self._source = SourceText(text, filename=str(path) if path else None)

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def annotate(self, where:WHERE, caption:str="") -> Annotation:
		return Annotation(self._source, where, caption)

	def error(self, guilty: Sequence[Phrase], msg: str):
		""" Actually make an entry of an issue """
		for g in guilty: assert isinstance(g, Phrase), g
		self.issue(Pic(msg, [self.annotate(g) for g in guilty]))

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self.issues)

	def assert_no_issues(self, message=""):
		""" Does what it says on the tin """
		if self.issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	# Methods the front-end is likely to call:

	def parse_error(self, where:Optional[slice], hint:str):
		intro = "Belated got confused by the syntax here."
		self.issue(Pic(intro, [self.annotate(where, "confused here")], [hint]))

	def _file_error(self, path:Path, prefix:str):
		self.issue(Pic(prefix+" "+str(path), []))

	def no_such_file(self, path:Path):
		self._file_error(path, "I see no file called")

	def broken_file(self, path:Path):
		self._file_error(path, "Something went pear-shaped while trying to read")

	# Methods the static checker calls:

	def redefined(self, text:str, first:Phrase, guilty:Phrase):
		key = text, first
		if key not in self._redefined:
			intro = "This name is declared more than once in the same scope."
			issue = Pic(intro, [self.annotate(first, "Earliest declaration")])
			self.issue(issue)
			self._redefined[key] = issue
		self._redefined[key].also(self.annotate(guilty))

	def return_outside_function(self, guilty:Phrase):
		intro = "You can only return from within a function."
		self.issue(Pic(intro, [self.annotate(guilty)]))

	# And the run-time:

	def runtime_fault(self, ex:ScriptError):
		intro = "Uncaught %s" % ex
		anns = [] if ex.site is None else [self.annotate(ex.site, ex.family)]
		self.issue(Pic(intro, anns))

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
