"""
Run-time environment records, and the chain that links them.

This is the canonical list-structured search: each record knows only its
own bindings and the record lexically outside it. Closures hold on to a
record, which holds on to everything outward, so a record lives exactly as
long as something can still reach one of its names.
"""
import abc
from enum import Enum
from typing import Any, Iterable
from .binding import Binding, Kind
from .errors import DuplicateNameError, UnresolvedReferenceError

class ScopeKind(Enum):
	GLOBAL = "global"
	MODULE = "module"
	FUNCTION = "function"
	BLOCK = "block"
	ITERATION = "iteration"
	CATCH = "catch"

class Environment(abc.ABC):
	@abc.abstractmethod
	def resolve(self, name:str) -> "EnvironmentRecord":
		""" Find the innermost record that binds this name. """

class NullEnv(Environment):
	""" Outside the outermost scope there is nothing at all. """
	def resolve(self, name:str) -> "EnvironmentRecord":
		raise UnresolvedReferenceError(name)
	def __repr__(self): return "<null env>"
null_env = NullEnv()

class EnvironmentRecord(Environment):
	"""
	The bindings of one scope instance. A fresh one is made every time
	a scope is entered, so that (for instance) each trip through a loop
	body gets its own bindings, with their own write-once budgets.
	"""
	_bindings: dict[str, Binding]

	def __init__(self, outer:Environment, kind:ScopeKind=ScopeKind.BLOCK):
		assert isinstance(outer, Environment), outer
		self._bindings = {}
		self._outer = outer
		self.kind = kind

	def __repr__(self):
		return "<%s record: %s>" % (self.kind.value, ", ".join(self._bindings))

	@property
	def outer(self) -> Environment: return self._outer

	def resolve(self, name:str) -> "EnvironmentRecord":
		env = self
		while isinstance(env, EnvironmentRecord):
			if name in env._bindings: return env
			env = env._outer
		return env.resolve(name)

	def has_binding(self, name:str) -> bool:
		return name in self._bindings

	def _create(self, binding:Binding) -> Binding:
		if binding.name in self._bindings:
			raise DuplicateNameError(binding.name)
		self._bindings[binding.name] = binding
		return binding

	def create_immutable_binding(self, name:str, *, awaiting_initializer=False) -> Binding:
		return self._create(Binding(name, Kind.IMMUTABLE, awaiting_initializer=awaiting_initializer))

	def create_mutable_binding(self, name:str) -> Binding:
		return self._create(Binding(name, Kind.MUTABLE))

	def initialize_binding(self, name:str, value:Any):
		self._bindings[name].initialize(value)

	def get_binding_value(self, name:str, for_typeof:bool=False) -> Any:
		return self._bindings[name].get(for_typeof)

	def set_mutable_binding(self, name:str, value:Any):
		self._bindings[name].set(value)

	def binding(self, name:str) -> Binding:
		""" For tests and tracing: peek at the entry itself. """
		return self._bindings[name]

	def chain(self) -> Iterable["EnvironmentRecord"]:
		""" Yield this record and each enclosing record, innermost first. """
		env = self
		while isinstance(env, EnvironmentRecord):
			yield env
			env = env._outer
