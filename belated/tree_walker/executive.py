"""
This is the overall control for the run-time.
The main program is just the first task; anything it spawns takes turns with it.
"""
from typing import Optional
from .. import syntax
from ..diagnostics import Report
from ..environment import EnvironmentRecord, ScopeKind
from .evaluator import exec_body
from .installer import install
from .runtime import global_record
from .scheduler import MAIN_QUEUE
from .values import Closure

def run_program(module:syntax.Module, report:Optional[Report]=None) -> EnvironmentRecord:
	"""
	Run a module to completion, along with every task it spawns.
	Uncaught script errors propagate; the module's own record is returned
	so that the curious may inspect its bindings afterward.
	"""
	MAIN_QUEUE.reset(report.info if report else None)
	record = EnvironmentRecord(global_record(), ScopeKind.MODULE)
	install(record, module.body, Closure)
	MAIN_QUEUE.spawn(exec_body(module.body, record), "main")
	MAIN_QUEUE.run()
	return record
