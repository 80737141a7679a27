"""
Scanner and parser for the Belated language.

Both halves come from booze-tools: a MiniScan definition turns text into
(kind, semantic) pairs, and a MiniParse grammar folds those into the node
classes in `syntax`. Every token's semantic value knows its own slice of
the source text, so later passes can point at things.
"""
import sys
from pathlib import Path
from typing import Optional

from boozetools.scanning import miniscan
from boozetools.parsing import miniparse
from boozetools.parsing.interface import ParseError
from . import syntax
from .binding import ABSENT
from .diagnostics import Report
from .ontology import Nom, Token

class BelatedParseError(ParseError):
	""" args are the complaint and the slice of text where it happened (or None at end-of-text). """
	pass

RESERVED = frozenset("""
	const let function return if else while for of print typeof
	pause spawn try catch throw true false undefined
""".split())

class _Definition(miniscan.Definition):
	def on_stuck(self, yy):
		raise BelatedParseError("I don't know what to make of this character.", slice(yy.left, yy.left+1))

_scanner = _Definition("Belated")
_scanner.ignore(r'\s+')
_scanner.ignore(r'\/\/.*')

@_scanner.on(r'\d+(\.\d+)?')
def _scan_number(yy):
	text = yy.match()
	value = float(text) if "." in text else int(text)
	yy.token("number", syntax.Literal(value, yy.slice()))

@_scanner.on(r'\"[^\"]*\"')
def _scan_string(yy):
	yy.token("string", syntax.Literal(yy.match()[1:-1], yy.slice()))

@_scanner.on(r'[A-Za-z_]\w*')
def _scan_word(yy):
	word = yy.match()
	if word in RESERVED: yy.token(word.upper(), Token(yy.slice()))
	else: yy.token("name", Nom(sys.intern(word), yy.slice()))

@_scanner.on(r'[\-\+\*\/\%\<\>\=\!\(\)\{\}\[\]\,\;]|\<\=|\>\=|\=\=|\!\=|\&\&|\|\|')
def _scan_punctuation(yy):
	yy.token(sys.intern(yy.match()), Token(yy.slice()))

###############################################################################

def _stack_symbols(hfa, pds) -> list[str]:
	return list(map(hfa.get_breadcrumb, pds.path_from_root()))[1:]

# Parse-stack suffix and look-ahead, paired with advice.
_HINTS = [
	(["[", "names", "]"], ";", "A destructuring declaration needs an initializer: patterns always take their value immediately."),
	(["CONST", "decl_list"], "name", "Probably a missing comma between these names."),
	(["expr"], "name", "Probably a missing semicolon just before here."),
	(["expr"], "=", "Only plain names can be assigned to."),
	(["IF"], "name", "The condition of an `if` goes in (parentheses)."),
	(["WHILE"], "name", "The condition of a `while` goes in (parentheses)."),
]

def _best_hint(stack_symbols, lookahead) -> str:
	for suffix, kind, advice in _HINTS:
		if kind == lookahead and stack_symbols[-len(suffix):] == suffix:
			return advice
	return "Guru Meditation: " + " ".join(stack_symbols + ["●", str(lookahead)])

class _Grammar(miniparse.MiniParse):
	def unexpected_token(self, kind, semantic, pds):
		hfa, _ = self.get_hfa_and_combine()
		hint = _best_hint(_stack_symbols(hfa, pds), kind)
		raise BelatedParseError(hint, semantic.span())

	def unexpected_eof(self, pds):
		raise BelatedParseError("The text ends in the middle of something. Is a '}' or ';' missing?", None)

_grammar = _Grammar('program')
_grammar.left(['(', '['])
_grammar.right(['!', 'TYPEOF', 'NEGATE'])
_grammar.left(['*', '/', '%'])
_grammar.left(['+', '-'])
_grammar.left(['<', '<=', '>', '>='])
_grammar.left(['==', '!='])
_grammar.left(['&&'])
_grammar.left(['||'])

rule = _grammar.rule

def _first(item): return [item]
def _more(some, another):
	some.append(another)
	return some
def _empty(): return []

for _list, _item in [("stmts", None), ("decl_list", "decl"), ("names", "name"), ("param_list", "name"), ("arg_list", "expr")]:
	if _item is None:
		rule(_list, '')(_empty)
		rule(_list, '.%s .stmt'%_list)(_more)
	else:
		rule(_list, '.'+_item)(_first)
		rule(_list, '.%s , .%s'%(_list, _item))(_more)

rule('params', '')(_empty)
rule('params', '.param_list')(None)
rule('args', '')(_empty)
rule('args', '.arg_list')(None)

rule('program', '.stmts')(syntax.Module)

# Statements

for _keyword, _kind in [("CONST", syntax.CONST), ("LET", syntax.LET)]:
	rule('stmt', '.%s .decl_list .;'%_keyword)(lambda head, items, semi, kind=_kind: syntax.Declaration(kind, head, items, semi))
	rule('stmt', '.%s [ .names ] = .expr .;'%_keyword)(lambda head, noms, init, semi, kind=_kind: syntax.PatternDeclaration(kind, head, noms, init, semi))
	rule('stmt', '.FOR ( %s .name OF .expr ) .block'%_keyword)(lambda head, nom, it, body, kind=_kind: syntax.ForOf(head, kind, nom, it, body))

rule('decl', '.name')(syntax.Declarator)
rule('decl', '.name = .expr')(syntax.Declarator)

rule('stmt', '.name = .expr .;')(syntax.Assign)
rule('stmt', '.expr .;')(syntax.ExprStatement)
rule('stmt', '.PRINT .expr .;')(syntax.Print)
rule('stmt', '.block')(None)
rule('stmt', '.if_stmt')(None)
rule('stmt', '.WHILE ( .expr ) .block')(syntax.While)
rule('stmt', '.FUNCTION .name ( .params ) { .stmts .}')(lambda head, nom, params, body, close: syntax.FunctionDeclaration(syntax.Subroutine(head, nom, params, body, close)))
rule('stmt', '.RETURN .;')(lambda head, semi: syntax.Return(head, None, semi))
rule('stmt', '.RETURN .expr .;')(syntax.Return)
rule('stmt', '.PAUSE .;')(syntax.Pause)
rule('stmt', '.SPAWN .expr .;')(syntax.Spawn)
rule('stmt', '.THROW .expr .;')(syntax.Throw)
rule('stmt', '.TRY .block CATCH ( .name ) .block')(syntax.TryCatch)

rule('block', '.{ .stmts .}')(syntax.Block)

rule('if_stmt', '.IF ( .expr ) .block')(syntax.If)
rule('if_stmt', '.IF ( .expr ) .block ELSE .block')(syntax.If)
rule('if_stmt', '.IF ( .expr ) .block ELSE .if_stmt')(syntax.If)

# Expressions

rule('expr', '.number')(None)
rule('expr', '.string')(None)
rule('expr', '.TRUE')(lambda t: syntax.Literal(True, t.where))
rule('expr', '.FALSE')(lambda t: syntax.Literal(False, t.where))
rule('expr', '.UNDEFINED')(lambda t: syntax.Literal(ABSENT, t.where))
rule('expr', '.name')(syntax.Lookup)
rule('expr', '( .expr )')(None)
rule('expr', '.[ .args .]')(syntax.ArrayLiteral)
rule('expr', '.expr ( .args .)')(syntax.Call)
rule('expr', '.expr [ .expr .]')(syntax.Index)
rule('expr', '.FUNCTION ( .params ) { .stmts .}')(lambda head, params, body, close: syntax.FunctionExpr(syntax.Subroutine(head, None, params, body, close)))
rule('expr', '.- .expr', 'NEGATE')(lambda head, arg: syntax.UnaryExp('-', head, arg))
rule('expr', '.! .expr')(lambda head, arg: syntax.UnaryExp('!', head, arg))
rule('expr', '.TYPEOF .expr')(syntax.TypeOf)

for _op in ['*', '/', '%', '+', '-', '<', '<=', '>', '>=', '==', '!=']:
	rule('expr', '.expr %s .expr'%_op)(lambda a, b, op=_op: syntax.BinExp(a, op, b))
for _op in ['&&', '||']:
	rule('expr', '.expr %s .expr'%_op)(lambda a, b, op=_op: syntax.ShortCutExp(a, op, b))

###############################################################################

def parse_text(text:str, path:Optional[Path], report:Report) -> Optional[syntax.Module]:
	""" Submit text to parser; return the module, or report the trouble and return None """
	report.set_source(text, path)
	try:
		module = _grammar.parse(_scanner.scan(text))
	except BelatedParseError as ex:
		complaint, where = ex.args
		report.parse_error(where, complaint)
		return None
	module.path = path
	module.text = text
	return module

def parse_file(path:Path, report:Report) -> Optional[syntax.Module]:
	try:
		with open(path, "r", encoding="utf-8") as fh: text = fh.read()
	except FileNotFoundError:
		report.no_such_file(path)
	except OSError:
		report.broken_file(path)
	else:
		return parse_text(text, path, report)
