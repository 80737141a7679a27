"""
The generic machinery that everything needs,
without the specific methods corresponding to particular syntax.

Expressions evaluate directly to values. Statements execute as generators,
so that a `pause` anywhere in the statement structure of a task can hand
control back to the scheduler and later resume exactly where it left off.
A statement's generator returns None normally, or a `Returned` when a
`return` statement is unwinding the current function.
"""

from types import GeneratorType
from typing import Any, Generator, Iterable, NamedTuple, Optional
from .. import syntax
from ..environment import EnvironmentRecord
from ..errors import ScriptError, CannotSuspend

STEPS = Generator[None, None, Optional["Returned"]]

class Returned(NamedTuple):
	value: Any

EVALUATE = {}
EXECUTE = {}

def evaluate(expr:syntax.ValueExpression, env:EnvironmentRecord) -> Any:
	try: fn = EVALUATE[type(expr)]
	except KeyError: raise NotImplementedError(type(expr), expr)
	try: return fn(expr, env)
	except ScriptError as ex:
		ex.at(expr)
		raise

def execute(stmt:syntax.Statement, env:EnvironmentRecord) -> STEPS:
	try: fn = EXECUTE[type(stmt)]
	except KeyError: raise NotImplementedError(type(stmt), stmt)
	try:
		# Statements that can never suspend are written as plain functions.
		outcome = fn(stmt, env)
		if isinstance(outcome, GeneratorType): outcome = yield from outcome
	except ScriptError as ex:
		ex.at(stmt)
		raise
	return outcome

def exec_body(body:Iterable[syntax.Statement], env:EnvironmentRecord) -> STEPS:
	for stmt in body:
		outcome = yield from execute(stmt, env)
		if outcome is not None: return outcome

def run_to_completion(steps:STEPS):
	""" For calls from within an expression, which have nowhere to suspend to. """
	try: next(steps)
	except StopIteration as stop: return stop.value
	steps.close()
	raise CannotSuspend()

def attach_evaluation_methods(python_scope):
	for _k, _v in list(python_scope.items()):
		if _k.startswith("_eval_"):
			_t = _v.__annotations__["expr"]
			assert isinstance(_t, type), (_k, _t)
			EVALUATE[_t] = _v
		elif _k.startswith("_exec_"):
			_t = _v.__annotations__["stmt"]
			assert isinstance(_t, type), (_k, _t)
			EXECUTE[_t] = _v
