"""
The declaration installer runs once at the entry of every scope instance,
before any of that scope's statements execute. It creates a binding for
every name declared directly in the scope, in textual order, so that
duplicates are caught up front and so that every later reference finds
its binding, set or not.

Only the top level of the given statements is examined: nested blocks get
their own records (and their own installer pass) when they execute.
"""
from functools import partial
from typing import Any, Callable, Sequence
from boozetools.support.foundation import Visitor
from .. import syntax
from ..binding import ABSENT
from ..environment import EnvironmentRecord
from ..errors import DuplicateNameError
from ..ontology import Nom

CLOSE = Callable[[syntax.Subroutine, EnvironmentRecord], Any]

def install(record:EnvironmentRecord, body:Sequence[syntax.Statement], close:CLOSE):
	installer = _Installer(record, close)
	for stmt in body: installer.visit(stmt)

def bind_parameters(record:EnvironmentRecord, params:Sequence[Nom], args:Sequence[Any]):
	for i, nom in enumerate(params):
		_create(record.create_mutable_binding, nom)
		record.initialize_binding(nom.text, args[i] if i < len(args) else ABSENT)

def bind_loop_variable(record:EnvironmentRecord, kind:str, nom:Nom, value:Any):
	_declare(record, kind, nom, True)
	record.initialize_binding(nom.text, value)

def _create(create, nom:Nom):
	try: create(nom.text)
	except DuplicateNameError as ex:
		ex.at(nom)
		raise

def _declare(record:EnvironmentRecord, kind:str, nom:Nom, has_initializer:bool):
	if kind == syntax.CONST:
		_create(partial(record.create_immutable_binding, awaiting_initializer=has_initializer), nom)
	else:
		_create(record.create_mutable_binding, nom)

class _Installer(Visitor):
	def __init__(self, record:EnvironmentRecord, close:CLOSE):
		self._record = record
		self._close = close

	def visit_Statement(self, stmt:syntax.Statement):
		pass

	def visit_Declaration(self, stmt:syntax.Declaration):
		for item in stmt.items:
			_declare(self._record, stmt.kind, item.nom, item.init is not None)

	def visit_PatternDeclaration(self, stmt:syntax.PatternDeclaration):
		for nom in stmt.noms:
			_declare(self._record, stmt.kind, nom, True)

	def visit_FunctionDeclaration(self, stmt:syntax.FunctionDeclaration):
		nom = stmt.sub.nom
		_create(self._record.create_mutable_binding, nom)
		self._record.initialize_binding(nom.text, self._close(stmt.sub, self._record))
