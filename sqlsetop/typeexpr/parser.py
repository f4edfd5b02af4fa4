# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Parser for row-type expressions.

Row types are written the way they are printed:

	RECORD(id INTEGER NOT NULL, name VARCHAR(20), tags ROW(a INT, b INT))

Columns are nullable unless marked NOT NULL. Every field keeps the 1-based
line/column of its name so diagnostics can point into the source text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from sqlsetop.core.span import Span
from sqlsetop.core.types_core import TypeId, TypeTable

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	start="row_type",
	propagate_positions=True,
	maybe_placeholders=False,
)


@dataclass(frozen=True)
class Located:
	line: int
	column: int

	def to_span(self, file: str | None = None) -> Span:
		return Span(file=file, line=self.line, column=self.column)


@dataclass
class ScalarTypeExpr:
	name: str
	precision: Optional[int]
	loc: Located


@dataclass
class FieldTypeExpr:
	name: str
	type: "ScalarTypeExpr | RowTypeExpr"
	nullable: bool
	loc: Located


@dataclass
class RowTypeExpr:
	fields: List[FieldTypeExpr] = field(default_factory=list)
	loc: Located = field(default_factory=lambda: Located(1, 1))


class TypeExprError(ValueError):
	"""
	Malformed or unresolvable row-type expression.

	Carries a best-effort location so the CLI can report it as a diagnostic.
	"""

	def __init__(self, message: str, *, loc: Optional[Located]) -> None:
		super().__init__(message)
		self.loc = loc


def parse_row_type(source: str) -> RowTypeExpr:
	"""Parse `source` into a RowTypeExpr, raising TypeExprError on bad input."""
	try:
		tree = _PARSER.parse(source)
	except UnexpectedInput as exc:
		raise TypeExprError(_describe_unexpected(exc), loc=_exc_loc(exc)) from exc
	return _build_row(tree)


def resolve_row_type(table: TypeTable, expr: RowTypeExpr) -> TypeId:
	"""Intern the row type described by `expr` in `table`."""
	fields = []
	for f in expr.fields:
		if isinstance(f.type, RowTypeExpr):
			field_ty = table.with_nullability(resolve_row_type(table, f.type), f.nullable)
		else:
			try:
				field_ty = table.ensure_scalar(f.type.name, precision=f.type.precision, nullable=f.nullable)
			except ValueError as exc:
				raise TypeExprError(str(exc), loc=f.type.loc) from exc
		fields.append((f.name, field_ty))
	return table.new_row(fields)


def _describe_unexpected(exc: UnexpectedInput) -> str:
	if isinstance(exc, UnexpectedEOF):
		return "unexpected end of row type"
	if isinstance(exc, UnexpectedToken):
		if exc.token.type == "$END":
			return "unexpected end of row type"
		return f"unexpected '{exc.token}' in row type"
	if isinstance(exc, UnexpectedCharacters):
		return f"unexpected character '{exc.char}' in row type"
	return "invalid row type"


def _exc_loc(exc: UnexpectedInput) -> Optional[Located]:
	line = getattr(exc, "line", -1)
	column = getattr(exc, "column", -1)
	if not isinstance(line, int) or line < 1:
		return None
	return Located(line=line, column=column)


def _loc(tree: Tree) -> Located:
	meta = tree.meta
	return Located(line=meta.line, column=meta.column)


def _tok_loc(tok: Token) -> Located:
	return Located(line=tok.line, column=tok.column)


def _build_row(tree: Tree) -> RowTypeExpr:
	assert tree.data == "row_type"
	return RowTypeExpr(fields=[_build_field(child) for child in tree.children], loc=_loc(tree))


def _build_field(tree: Tree) -> FieldTypeExpr:
	name_tok, type_tree, *rest = tree.children
	nullable = True
	if rest:
		nullable = rest[0].data == "nullable"
	if type_tree.data == "row_type":
		ftype: ScalarTypeExpr | RowTypeExpr = _build_row(type_tree)
	else:
		ftype = _build_scalar(type_tree)
	return FieldTypeExpr(name=str(name_tok), type=ftype, nullable=nullable, loc=_tok_loc(name_tok))


def _build_scalar(tree: Tree) -> ScalarTypeExpr:
	name_tok = tree.children[0]
	precision = int(tree.children[1]) if len(tree.children) > 1 else None
	return ScalarTypeExpr(name=str(name_tok), precision=precision, loc=_tok_loc(name_tok))


__all__ = [
	"Located",
	"ScalarTypeExpr",
	"FieldTypeExpr",
	"RowTypeExpr",
	"TypeExprError",
	"parse_row_type",
	"resolve_row_type",
]
