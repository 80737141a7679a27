"""
The state of one declared name within one scope instance.

A binding is a tagged variant, Unset or Set(value), plus a separate tag for
the kind of declaration that made it. The one new thing here is that an
immutable binding may sit Unset indefinitely and then accept exactly one
ordinary assignment, after which it is as constant as any other constant.
"""
from enum import Enum
from .errors import UnboundAccessError, ReassignmentError, ContractViolation

class Absent:
	""" The language's "no value" token, better known to scripts as `undefined`. """
	_instance = None
	def __new__(cls):
		if cls._instance is None: cls._instance = super().__new__(cls)
		return cls._instance
	def __repr__(self): return "undefined"
	def __bool__(self): return False

ABSENT = Absent()

class Kind(Enum):
	MUTABLE = "let"
	IMMUTABLE = "const"

class State(Enum):
	UNSET = "unset"
	SET = "set"

class Binding:
	__slots__ = ("name", "kind", "state", "value", "initialized", "awaiting_initializer")

	def __init__(self, name:str, kind:Kind, *, awaiting_initializer=False):
		self.name = name
		self.kind = kind
		self.initialized = False
		if kind is Kind.MUTABLE:
			assert not awaiting_initializer
			self.state, self.value = State.SET, ABSENT
		else:
			self.state, self.value = State.UNSET, None
		# The declaration has its own initializer, which has not run yet.
		self.awaiting_initializer = awaiting_initializer

	def __repr__(self):
		if self.state is State.UNSET: return "<%s %s: unset>" % (self.kind.value, self.name)
		return "<%s %s = %r>" % (self.kind.value, self.name, self.value)

	def is_set(self) -> bool: return self.state is State.SET

	def initialize(self, value):
		if self.initialized:
			raise ContractViolation("binding %r initialized twice" % self.name)
		if self.kind is Kind.IMMUTABLE and self.state is State.SET:
			raise ContractViolation("binding %r initialized after its write-once assignment" % self.name)
		self.initialized = True
		self.awaiting_initializer = False
		self.state, self.value = State.SET, value

	def get(self, for_typeof:bool):
		if self.state is State.SET: return self.value
		# Only a constant declared without an initializer answers typeof while unset.
		if for_typeof and not self.awaiting_initializer: return ABSENT
		raise UnboundAccessError(self.name)

	def set(self, value):
		if self.kind is Kind.MUTABLE:
			self.value = value
		elif self.state is State.SET:
			raise ReassignmentError(self.name)
		elif self.awaiting_initializer:
			raise UnboundAccessError(self.name)
		else:
			self.state, self.value = State.SET, value
