"""
This module defines the specialized value-types that the tree-walker operates in terms of.
Basic primitive values play themselves (numbers, strings, flags, and lists as arrays),
but special things like closures need more help.
"""
from abc import ABC, abstractmethod
from inspect import signature
from typing import Any, Callable, Sequence
from .. import syntax
from ..binding import ABSENT, Absent
from ..environment import EnvironmentRecord, ScopeKind
from ..errors import ScriptError, ScriptTypeError, Thrown
from .evaluator import STEPS, exec_body, run_to_completion
from .installer import install, bind_parameters

ARGS = Sequence[Any]

class BelatedValue(ABC):
	""" Root for classes that implement specialized run-time data structures """

class Function(BelatedValue):
	""" A run-time object that can be applied with arguments. """
	@abstractmethod
	def activate(self, args:ARGS) -> STEPS:
		""" Return the steps of a call, ready to be driven by a caller or by the scheduler. """

	def apply(self, args:ARGS) -> Any:
		return run_to_completion(self.activate(args))

	@abstractmethod
	def name(self) -> str: pass

class Closure(Function):
	""" The run-time manifestation of a function: a callable value tied to its natal environment. """
	def __init__(self, sub:syntax.Subroutine, env:EnvironmentRecord):
		self.sub = sub
		self.env = env

	def __str__(self): return "function %s" % self.name()

	def name(self): return self.sub.name()

	def activate(self, args:ARGS) -> STEPS:
		frame = EnvironmentRecord(self.env, ScopeKind.FUNCTION)
		bind_parameters(frame, self.sub.params, args)
		install(frame, self.sub.body, Closure)
		outcome = yield from exec_body(self.sub.body, frame)
		return ABSENT if outcome is None else outcome.value

class Primitive(Function):
	""" A built-in function. All parameters are already values. """
	def __init__(self, name:str, fn:Callable):
		self._name = name
		self._fn = fn
		self._signature = signature(fn)

	def __str__(self): return "function %s" % self._name

	def name(self): return self._name

	def activate(self, args:ARGS) -> STEPS:
		yield from ()
		try: self._signature.bind(*args)
		except TypeError:
			raise ScriptTypeError("%s() cannot take %d argument(s)" % (self._name, len(args))) from None
		return self._fn(*args)

class ErrorValue(BelatedValue):
	""" What a `catch` handler sees when the run-time itself raised the error. """
	def __init__(self, family:str, message:str):
		self.family = family
		self.message = message
	def __str__(self): return "%s: %s" % (self.family, self.message)

def caught_value(ex:ScriptError) -> Any:
	if isinstance(ex, Thrown): return ex.value
	return ErrorValue(ex.family, ex.message)

###############################################################################

def is_number(x) -> bool:
	return isinstance(x, (int, float)) and not isinstance(x, bool)

def type_name(x) -> str:
	""" The answer `typeof` gives. """
	if isinstance(x, Absent): return "undefined"
	if isinstance(x, bool): return "boolean"
	if is_number(x): return "number"
	if isinstance(x, str): return "string"
	if isinstance(x, Function): return "function"
	return "object"

def truthy(x) -> bool:
	if isinstance(x, (list, BelatedValue)): return True
	return bool(x)

def strictly_equal(a, b) -> bool:
	if is_number(a) and is_number(b): return a == b
	if type(a) is not type(b): return False
	if isinstance(a, (list, BelatedValue)): return a is b
	return a == b

def display(x) -> str:
	""" How `print` shows a value. """
	if isinstance(x, bool): return "true" if x else "false"
	if isinstance(x, float):
		if x.is_integer(): return str(int(x))
		return repr(x)
	if isinstance(x, str): return x
	if isinstance(x, list): return "[" + ", ".join(map(_show, x)) + "]"
	return str(x)

def _show(x) -> str:
	return '"%s"' % x if isinstance(x, str) else display(x)
