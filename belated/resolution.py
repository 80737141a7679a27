"""
Static checks, done before anything runs.

The scopes walked here mirror exactly the records the run-time will make,
so a duplicate found here is the same duplicate the declaration installer
would otherwise trip over when the scope is entered. Finding it early just
means the complaint arrives before any side-effects do.
"""
from typing import Optional, Sequence
from boozetools.support.foundation import Visitor
from . import syntax
from .diagnostics import Report
from .ontology import Nom

class Yuck(Exception):
	"""
	The first argument will be the name of the pass fraught with error.
	The end-user might not care about this, but it's handy for testing.
	"""
	pass

class _Scope:
	def __init__(self, outer:Optional["_Scope"], in_function:bool):
		self.outer = outer
		self.in_function = in_function
		self.declared = {}

def check_module(module:syntax.Module, report:Report):
	_Checker(report).check_body(module.body, _Scope(None, False))
	if report.sick(): raise Yuck("check")

class _Checker(Visitor):
	def __init__(self, report:Report):
		self._report = report

	def _declare(self, nom:Nom, scope:_Scope):
		first = scope.declared.get(nom.text)
		if first is None: scope.declared[nom.text] = nom
		else: self._report.redefined(nom.text, first, nom)

	def check_body(self, body:Sequence[syntax.Statement], scope:_Scope):
		# Declarations first, in textual order, just as the installer does.
		for stmt in body:
			if isinstance(stmt, syntax.Declaration):
				for item in stmt.items: self._declare(item.nom, scope)
			elif isinstance(stmt, syntax.PatternDeclaration):
				for nom in stmt.noms: self._declare(nom, scope)
			elif isinstance(stmt, syntax.FunctionDeclaration):
				self._declare(stmt.sub.nom, scope)
		for stmt in body:
			self.visit(stmt, scope)

	def check_subroutine(self, sub:syntax.Subroutine, scope:_Scope):
		inner = _Scope(scope, True)
		for nom in sub.params: self._declare(nom, inner)
		self.check_body(sub.body, inner)

	### Statements

	def visit_Declaration(self, d:syntax.Declaration, scope:_Scope):
		for item in d.items:
			if item.init is not None: self.visit(item.init, scope)

	def visit_PatternDeclaration(self, d:syntax.PatternDeclaration, scope:_Scope):
		self.visit(d.init, scope)

	def visit_FunctionDeclaration(self, d:syntax.FunctionDeclaration, scope:_Scope):
		self.check_subroutine(d.sub, scope)

	def visit_Assign(self, a:syntax.Assign, scope:_Scope):
		self.visit(a.expr, scope)

	def visit_ExprStatement(self, s:syntax.ExprStatement, scope:_Scope): self.visit(s.expr, scope)
	def visit_Print(self, s:syntax.Print, scope:_Scope): self.visit(s.expr, scope)
	def visit_Spawn(self, s:syntax.Spawn, scope:_Scope): self.visit(s.expr, scope)
	def visit_Throw(self, s:syntax.Throw, scope:_Scope): self.visit(s.expr, scope)
	def visit_Pause(self, s:syntax.Pause, scope:_Scope): pass

	def visit_Return(self, r:syntax.Return, scope:_Scope):
		if not scope.in_function: self._report.return_outside_function(r)
		if r.expr is not None: self.visit(r.expr, scope)

	def visit_Block(self, b:syntax.Block, scope:_Scope):
		self.check_body(b.body, _Scope(scope, scope.in_function))

	def visit_If(self, s:syntax.If, scope:_Scope):
		self.visit(s.cond, scope)
		self.visit(s.then_part, scope)
		if s.else_part is not None: self.visit(s.else_part, scope)

	def visit_While(self, s:syntax.While, scope:_Scope):
		self.visit(s.cond, scope)
		self.visit(s.body, scope)

	def visit_ForOf(self, s:syntax.ForOf, scope:_Scope):
		self.visit(s.iterable, scope)
		iteration = _Scope(scope, scope.in_function)
		self._declare(s.nom, iteration)
		self.visit(s.body, iteration)

	def visit_TryCatch(self, s:syntax.TryCatch, scope:_Scope):
		self.visit(s.body, scope)
		handler = _Scope(scope, scope.in_function)
		self._declare(s.nom, handler)
		self.visit(s.handler, handler)

	### Expressions

	def visit_Literal(self, l:syntax.Literal, scope:_Scope): pass
	def visit_Lookup(self, l:syntax.Lookup, scope:_Scope): pass

	def visit_TypeOf(self, expr:syntax.TypeOf, scope:_Scope): self.visit(expr.arg, scope)
	def visit_UnaryExp(self, expr:syntax.UnaryExp, scope:_Scope): self.visit(expr.arg, scope)

	def visit_BinExp(self, expr:syntax.BinExp, scope:_Scope):
		self.visit(expr.lhs, scope)
		self.visit(expr.rhs, scope)

	def visit_ShortCutExp(self, expr:syntax.ShortCutExp, scope:_Scope):
		self.visit(expr.lhs, scope)
		self.visit(expr.rhs, scope)

	def visit_Call(self, expr:syntax.Call, scope:_Scope):
		self.visit(expr.fn_exp, scope)
		for a in expr.args: self.visit(a, scope)

	def visit_Index(self, expr:syntax.Index, scope:_Scope):
		self.visit(expr.base, scope)
		self.visit(expr.index, scope)

	def visit_ArrayLiteral(self, expr:syntax.ArrayLiteral, scope:_Scope):
		for e in expr.elts: self.visit(e, scope)

	def visit_FunctionExpr(self, expr:syntax.FunctionExpr, scope:_Scope):
		self.check_subroutine(expr.sub, scope)
