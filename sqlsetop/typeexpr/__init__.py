"""
Row-type expression parsing (lark grammar in grammar.lark).
"""

from __future__ import annotations

from .parser import (
	FieldTypeExpr,
	Located,
	RowTypeExpr,
	ScalarTypeExpr,
	TypeExprError,
	parse_row_type,
	resolve_row_type,
)

__all__ = [
	"FieldTypeExpr",
	"Located",
	"RowTypeExpr",
	"ScalarTypeExpr",
	"TypeExprError",
	"parse_row_type",
	"resolve_row_type",
]
