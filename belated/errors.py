"""
The error taxonomy of the run-time.

Scripts observe errors by family: the name a `catch` handler sees.
Several distinct Python classes deliberately share one family, so that
(for instance) reading a write-once constant before its write looks exactly
like any other temporal-dead-zone read, and writing it twice looks exactly
like writing any other constant.
"""
from typing import Optional
from .ontology import Phrase

class ScriptError(Exception):
	""" Anything a script may observe (and catch) as an error. """
	family = "Error"
	site: Optional[Phrase]

	def __init__(self, message:str, site:Optional[Phrase]=None):
		super().__init__(message)
		self.message = message
		self.site = site

	def __str__(self): return "%s: %s" % (self.family, self.message)

	def at(self, site:Phrase) -> "ScriptError":
		""" Attach the innermost site, unless something more specific got there first. """
		if self.site is None: self.site = site
		return self

class ScriptSyntaxError(ScriptError):
	family = "SyntaxError"

class ScriptReferenceError(ScriptError):
	family = "ReferenceError"

class ScriptTypeError(ScriptError):
	family = "TypeError"

class DuplicateNameError(ScriptSyntaxError):
	def __init__(self, name:str, site=None):
		super().__init__("Identifier '%s' has already been declared" % name, site)
		self.name = name

class UnboundAccessError(ScriptReferenceError):
	def __init__(self, name:str, site=None):
		super().__init__("Cannot access '%s' before initialization" % name, site)
		self.name = name

class UnresolvedReferenceError(ScriptReferenceError):
	def __init__(self, name:str, site=None):
		super().__init__("%s is not defined" % name, site)
		self.name = name

class ReassignmentError(ScriptTypeError):
	def __init__(self, name:str, site=None):
		super().__init__("Assignment to constant variable '%s'" % name, site)
		self.name = name

class Thrown(ScriptError):
	""" Carries whatever value a `throw` statement threw. """
	def __init__(self, value, message:str, site=None):
		super().__init__(message, site)
		self.value = value

class CannotSuspend(ScriptError):
	def __init__(self, site=None):
		super().__init__("pause can only suspend a running task, not a nested call", site)

class ContractViolation(AssertionError):
	"""
	The declaration installer broke its promise to the environment record.
	Scripts never see this one: it means the interpreter has a bug.
	"""
