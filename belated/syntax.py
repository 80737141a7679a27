"""
The set of parse-nodes in simple form.
The parser calls these constructors with subordinate semantic-values in a bottom-up tree transduction.
Every node can say where it came from, which is all the diagnostics need.
"""
from pathlib import Path
from typing import Optional, Any, Sequence
from .ontology import Phrase, Nom, Token, ValueExpression, Statement

CONST = "const"
LET = "let"

class Literal(ValueExpression):
	def __init__(self, value:Any, where:slice):
		self.value, self.where = value, where
	def __repr__(self): return "<Literal %r>" % (self.value,)
	def left(self): return self.where.start
	def right(self): return self.where.stop

class Lookup(ValueExpression):
	def __init__(self, nom:Nom): self.nom = nom
	def __repr__(self): return "<ref:%s>" % self.nom.text
	def left(self): return self.nom.left()
	def right(self): return self.nom.right()

class TypeOf(ValueExpression):
	def __init__(self, head:Token, arg:ValueExpression):
		self.head, self.arg = head, arg
	def left(self): return self.head.left()
	def right(self): return self.arg.right()

class UnaryExp(ValueExpression):
	def __init__(self, op:str, head:Token, arg:ValueExpression):
		self.op, self.head, self.arg = op, head, arg
	def left(self): return self.head.left()
	def right(self): return self.arg.right()

class BinExp(ValueExpression):
	def __init__(self, lhs:ValueExpression, op:str, rhs:ValueExpression):
		self.lhs, self.op, self.rhs = lhs, op, rhs
	def left(self): return self.lhs.left()
	def right(self): return self.rhs.right()

class ShortCutExp(BinExp): pass

class Call(ValueExpression):
	def __init__(self, fn_exp:ValueExpression, args:Sequence[ValueExpression], close:Token):
		self.fn_exp, self.args, self._close = fn_exp, tuple(args), close
	def left(self): return self.fn_exp.left()
	def right(self): return self._close.right()

class Index(ValueExpression):
	def __init__(self, base:ValueExpression, index:ValueExpression, close:Token):
		self.base, self.index, self._close = base, index, close
	def left(self): return self.base.left()
	def right(self): return self._close.right()

class ArrayLiteral(ValueExpression):
	def __init__(self, open_:Token, elts:Sequence[ValueExpression], close:Token):
		self._open, self.elts, self._close = open_, tuple(elts), close
	def left(self): return self._open.left()
	def right(self): return self._close.right()

class Subroutine(Phrase):
	""" Both function declarations and function expressions; the latter have no name. """
	nom: Optional[Nom]
	def __init__(self, head:Token, nom:Optional[Nom], params:Sequence[Nom], body:Sequence[Statement], close:Token):
		self._head, self.nom, self.params, self.body, self._close = head, nom, tuple(params), tuple(body), close
	def __repr__(self):
		return "{function %s(%s)}" % (self.name(), ", ".join(p.text for p in self.params))
	def name(self): return self.nom.text if self.nom else "anonymous"
	def left(self): return self._head.left()
	def right(self): return self._close.right()

class FunctionExpr(ValueExpression):
	def __init__(self, sub:Subroutine): self.sub = sub
	def left(self): return self.sub.left()
	def right(self): return self.sub.right()

###############################################################################

class Declarator(Phrase):
	def __init__(self, nom:Nom, init:Optional[ValueExpression]=None):
		self.nom, self.init = nom, init
	def left(self): return self.nom.left()
	def right(self): return (self.init or self.nom).right()

class Declaration(Statement):
	def __init__(self, kind:str, head:Token, items:Sequence[Declarator], semi:Token):
		assert kind in (CONST, LET), kind
		self.kind, self._head, self.items, self._semi = kind, head, tuple(items), semi
	def left(self): return self._head.left()
	def right(self): return self._semi.right()

class PatternDeclaration(Statement):
	""" Destructuring: always with an initializer, because patterns need a value immediately. """
	def __init__(self, kind:str, head:Token, noms:Sequence[Nom], init:ValueExpression, semi:Token):
		assert kind in (CONST, LET), kind
		self.kind, self._head, self.noms, self.init, self._semi = kind, head, tuple(noms), init, semi
	def left(self): return self._head.left()
	def right(self): return self._semi.right()

class FunctionDeclaration(Statement):
	def __init__(self, sub:Subroutine):
		assert sub.nom is not None
		self.sub = sub
	def left(self): return self.sub.left()
	def right(self): return self.sub.right()

class Assign(Statement):
	def __init__(self, nom:Nom, expr:ValueExpression, semi:Token):
		self.nom, self.expr, self._semi = nom, expr, semi
	def left(self): return self.nom.left()
	def right(self): return self._semi.right()

class _Headed(Statement):
	""" Statements that begin with a keyword; most of them end with a semicolon. """
	_head: Token
	_tail: Phrase
	def left(self): return self._head.left()
	def right(self): return self._tail.right()

class ExprStatement(Statement):
	def __init__(self, expr:ValueExpression, semi:Token):
		self.expr, self._semi = expr, semi
	def left(self): return self.expr.left()
	def right(self): return self._semi.right()

class Print(_Headed):
	def __init__(self, head:Token, expr:ValueExpression, semi:Token):
		self._head, self.expr, self._tail = head, expr, semi

class Return(_Headed):
	def __init__(self, head:Token, expr:Optional[ValueExpression], semi:Token):
		self._head, self.expr, self._tail = head, expr, semi

class Pause(_Headed):
	def __init__(self, head:Token, semi:Token):
		self._head, self._tail = head, semi

class Spawn(_Headed):
	def __init__(self, head:Token, expr:ValueExpression, semi:Token):
		self._head, self.expr, self._tail = head, expr, semi

class Throw(_Headed):
	def __init__(self, head:Token, expr:ValueExpression, semi:Token):
		self._head, self.expr, self._tail = head, expr, semi

class Block(Statement):
	def __init__(self, open_:Token, body:Sequence[Statement], close:Token):
		self._open, self.body, self._close = open_, tuple(body), close
	def left(self): return self._open.left()
	def right(self): return self._close.right()

class If(_Headed):
	def __init__(self, head:Token, cond:ValueExpression, then_part:Block, else_part:Optional[Statement]=None):
		self._head, self.cond, self.then_part, self.else_part = head, cond, then_part, else_part
		self._tail = else_part or then_part

class While(_Headed):
	def __init__(self, head:Token, cond:ValueExpression, body:Block):
		self._head, self.cond, self.body, self._tail = head, cond, body, body

class ForOf(_Headed):
	def __init__(self, head:Token, kind:str, nom:Nom, iterable:ValueExpression, body:Block):
		assert kind in (CONST, LET), kind
		self._head, self.kind, self.nom, self.iterable, self.body = head, kind, nom, iterable, body
		self._tail = body

class TryCatch(_Headed):
	def __init__(self, head:Token, body:Block, nom:Nom, handler:Block):
		self._head, self.body, self.nom, self.handler, self._tail = head, body, nom, handler, handler

class Module:
	path: Optional[Path]
	def __init__(self, body:Sequence[Statement]):
		self.body = tuple(body)
		self.path = None
		self.text = ""
