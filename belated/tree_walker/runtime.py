"""
The specific evaluation and execution methods, one per kind of syntax.
These are where names meet their bindings: every reference, assignment,
and `typeof` goes through the environment record that the chain resolves.
"""
import math
import operator
from .. import syntax
from ..binding import ABSENT
from ..environment import EnvironmentRecord, ScopeKind, null_env
from ..errors import ScriptError, ScriptTypeError, UnresolvedReferenceError, Thrown
from .evaluator import evaluate, execute, exec_body, attach_evaluation_methods, Returned
from .installer import install, bind_loop_variable
from .scheduler import MAIN_QUEUE
from .values import (
	Function, Closure, Primitive, caught_value,
	is_number, type_name, truthy, strictly_equal, display,
)

ENV = EnvironmentRecord

def emit(text:str):
	print(text)

def _modulo(a, b):
	# The result takes the sign of the dividend.
	if isinstance(a, int) and isinstance(b, int):
		result = abs(a) % abs(b)
		return -result if a < 0 else result
	return math.fmod(a, b)

PRIMITIVE_BINARY = {
	"*" : operator.mul,
	"/" : operator.truediv,
	"%" : _modulo,
	"+" : operator.add,
	"-" : operator.sub,
	"<" : operator.lt,
	"<=": operator.le,
	">" : operator.gt,
	">=": operator.ge,
}
RELATIONAL = {"<", "<=", ">", ">="}
SHORTCUT = {
	"&&": False,
	"||": True,
}

###############################################################################

def _builtin_len(x):
	if isinstance(x, (list, str)): return len(x)
	raise ScriptTypeError("len() needs an array or string, not %s" % type_name(x))

def _builtin_push(array, *items):
	if not isinstance(array, list):
		raise ScriptTypeError("push() needs an array, not %s" % type_name(array))
	array.extend(items)
	return len(array)

def _builtin_str(x=ABSENT):
	return display(x)

BUILT_INS = {
	"len": _builtin_len,
	"push": _builtin_push,
	"str": _builtin_str,
}

def global_record() -> EnvironmentRecord:
	""" The outermost scope: built-in functions, as ordinary (mutable) bindings. """
	record = EnvironmentRecord(null_env, ScopeKind.GLOBAL)
	for name, fn in BUILT_INS.items():
		record.create_mutable_binding(name)
		record.initialize_binding(name, Primitive(name, fn))
	return record

###############################################################################

def _eval_literal(expr:syntax.Literal, env:ENV):
	return expr.value

def _eval_lookup(expr:syntax.Lookup, env:ENV):
	name = expr.nom.text
	return env.resolve(name).get_binding_value(name)

def _eval_type_of(expr:syntax.TypeOf, env:ENV):
	arg = expr.arg
	if isinstance(arg, syntax.Lookup):
		name = arg.nom.text
		try: record = env.resolve(name)
		except UnresolvedReferenceError: return "undefined"
		value = record.get_binding_value(name, for_typeof=True)
	else:
		value = evaluate(arg, env)
	return type_name(value)

def _eval_unary_exp(expr:syntax.UnaryExp, env:ENV):
	value = evaluate(expr.arg, env)
	if expr.op == "!": return not truthy(value)
	if is_number(value): return -value
	raise ScriptTypeError("Cannot negate %s" % type_name(value))

def _eval_bin_exp(expr:syntax.BinExp, env:ENV):
	a = evaluate(expr.lhs, env)
	b = evaluate(expr.rhs, env)
	op = expr.op
	if op == "==": return strictly_equal(a, b)
	if op == "!=": return not strictly_equal(a, b)
	if op == "+" and (isinstance(a, str) or isinstance(b, str)):
		return display(a) + display(b)
	if is_number(a) and is_number(b):
		if op in ("/", "%") and b == 0:
			raise ScriptError("Division by zero")
		return PRIMITIVE_BINARY[op](a, b)
	if op in RELATIONAL and isinstance(a, str) and isinstance(b, str):
		return PRIMITIVE_BINARY[op](a, b)
	raise ScriptTypeError("Cannot apply '%s' to %s and %s" % (op, type_name(a), type_name(b)))

def _eval_short_cut_exp(expr:syntax.ShortCutExp, env:ENV):
	lhs = evaluate(expr.lhs, env)
	return lhs if truthy(lhs) == SHORTCUT[expr.op] else evaluate(expr.rhs, env)

def _eval_call(expr:syntax.Call, env:ENV):
	function = evaluate(expr.fn_exp, env)
	args = [evaluate(a, env) for a in expr.args]
	if not isinstance(function, Function):
		raise ScriptTypeError("%s is not a function" % display(function))
	return function.apply(args)

def _eval_index(expr:syntax.Index, env:ENV):
	base = evaluate(expr.base, env)
	index = evaluate(expr.index, env)
	if not isinstance(base, (list, str)):
		raise ScriptTypeError("Cannot index into %s" % type_name(base))
	if is_number(index) and float(index).is_integer() and 0 <= index < len(base):
		return base[int(index)]
	return ABSENT

def _eval_array_literal(expr:syntax.ArrayLiteral, env:ENV):
	return [evaluate(e, env) for e in expr.elts]

def _eval_function_expr(expr:syntax.FunctionExpr, env:ENV):
	return Closure(expr.sub, env)

###############################################################################

def _exec_declaration(stmt:syntax.Declaration, env:ENV):
	# Declarations without initializers did all their work at scope entry.
	for item in stmt.items:
		if item.init is not None:
			env.initialize_binding(item.nom.text, evaluate(item.init, env))

def _exec_pattern_declaration(stmt:syntax.PatternDeclaration, env:ENV):
	value = evaluate(stmt.init, env)
	if not isinstance(value, list):
		raise ScriptTypeError("%s is not an array, so it cannot be destructured" % type_name(value))
	for i, nom in enumerate(stmt.noms):
		env.initialize_binding(nom.text, value[i] if i < len(value) else ABSENT)

def _exec_function_declaration(stmt:syntax.FunctionDeclaration, env:ENV):
	pass  # Hoisted by the installer.

def _exec_assign(stmt:syntax.Assign, env:ENV):
	value = evaluate(stmt.expr, env)
	name = stmt.nom.text
	env.resolve(name).set_mutable_binding(name, value)

def _exec_expr_statement(stmt:syntax.ExprStatement, env:ENV):
	evaluate(stmt.expr, env)

def _exec_print(stmt:syntax.Print, env:ENV):
	emit(display(evaluate(stmt.expr, env)))

def _exec_return(stmt:syntax.Return, env:ENV):
	return Returned(ABSENT if stmt.expr is None else evaluate(stmt.expr, env))

def _exec_pause(stmt:syntax.Pause, env:ENV):
	yield

def _exec_spawn(stmt:syntax.Spawn, env:ENV):
	function = evaluate(stmt.expr, env)
	if not isinstance(function, Function):
		raise ScriptTypeError("Cannot spawn %s; it is not a function" % display(function))
	MAIN_QUEUE.spawn(function.activate(()), function.name())

def _exec_throw(stmt:syntax.Throw, env:ENV):
	value = evaluate(stmt.expr, env)
	raise Thrown(value, display(value))

def _exec_block(stmt:syntax.Block, env:ENV):
	inner = EnvironmentRecord(env, ScopeKind.BLOCK)
	install(inner, stmt.body, Closure)
	return (yield from exec_body(stmt.body, inner))

def _exec_if(stmt:syntax.If, env:ENV):
	if truthy(evaluate(stmt.cond, env)):
		return (yield from execute(stmt.then_part, env))
	elif stmt.else_part is not None:
		return (yield from execute(stmt.else_part, env))

def _exec_while(stmt:syntax.While, env:ENV):
	while truthy(evaluate(stmt.cond, env)):
		outcome = yield from execute(stmt.body, env)
		if outcome is not None: return outcome

def _exec_for_of(stmt:syntax.ForOf, env:ENV):
	sequence = evaluate(stmt.iterable, env)
	if not isinstance(sequence, (list, str)):
		raise ScriptTypeError("%s is not iterable" % type_name(sequence))
	i = 0
	while i < len(sequence):
		iteration = EnvironmentRecord(env, ScopeKind.ITERATION)
		bind_loop_variable(iteration, stmt.kind, stmt.nom, sequence[i])
		outcome = yield from execute(stmt.body, iteration)
		if outcome is not None: return outcome
		i += 1

def _exec_try_catch(stmt:syntax.TryCatch, env:ENV):
	try:
		return (yield from execute(stmt.body, env))
	except ScriptError as ex:
		handler_env = EnvironmentRecord(env, ScopeKind.CATCH)
		handler_env.create_mutable_binding(stmt.nom.text)
		handler_env.initialize_binding(stmt.nom.text, caught_value(ex))
		return (yield from execute(stmt.handler, handler_env))

attach_evaluation_methods(globals())
