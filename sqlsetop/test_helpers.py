# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Builders shared by the test suite.

Tests describe operands as row types; these helpers wrap them in SELECT nodes
with predictable spans (operand i sits on line i+1, column c+1 for field c) so
assertions can check where a diagnostic points.
"""

from __future__ import annotations

from typing import Sequence, Tuple

from sqlsetop.checker.call_binding import CallBinding
from sqlsetop.checker.validator import SqlValidator
from sqlsetop.core.span import Span
from sqlsetop.core.sql_nodes import SqlIdentifier, SqlNode, SqlNodeList, SqlSelect
from sqlsetop.core.types_core import TypeId, TypeTable
from sqlsetop.operators import UNION, SqlOperator


def row(table: TypeTable, *fields: Tuple[str, TypeId]) -> TypeId:
	return table.new_row(list(fields))


def select_for_row(table: TypeTable, row_ty: TypeId, *, line: int = 1) -> SqlSelect:
	"""SELECT node whose items are the row's field names."""
	items: list[SqlNode] = [
		SqlIdentifier([f.name], span=Span(line=line, column=f.index + 1)) for f in table.field_list(row_ty)
	]
	return SqlSelect(
		select_list=SqlNodeList(items, span=Span(line=line, column=1)),
		span=Span(line=line, column=0),
	)


def make_binding(
	table: TypeTable,
	operand_types: Sequence[TypeId],
	op: SqlOperator = UNION,
	*,
	operands: Sequence[SqlNode] | None = None,
) -> CallBinding:
	"""Bind `op` to SELECT operands built from `operand_types` (or explicit nodes)."""
	if operands is None:
		operands = [select_for_row(table, ty, line=i + 1) for i, ty in enumerate(operand_types)]
	call = op.create_call(*operands, span=Span(line=1, column=0))
	return CallBinding.of(SqlValidator(table), call, operand_types)


__all__ = ["row", "select_for_row", "make_binding"]
