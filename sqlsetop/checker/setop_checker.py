# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Operand type checking for set operators (UNION, INTERSECT, EXCEPT).

Both operands must be rows with the same number of fields, and each pair of
corresponding fields must be union-compatible: the type table must know a
least-restrictive type both can be widened to.

Only binary set operations are supported; a call with any other operand count
is a caller bug and trips an assertion.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Tuple

from sqlsetop.checker.call_binding import CallBinding
from sqlsetop.checker.operand_types import OperandCountRange
from sqlsetop.checker.validator import SqlValidationError
from sqlsetop.core.sql_nodes import SqlNode, SqlSelect, get_select_list_item
from sqlsetop.core.types_core import RowField, TypeId

if TYPE_CHECKING:
	from sqlsetop.operators import SqlOperator

COLUMN_COUNT_MISMATCH = "E-SETOP-COLUMN-COUNT"
COLUMN_TYPE_MISMATCH = "E-SETOP-COLUMN-TYPE"


class SetopMismatchKind(str, Enum):
	COLUMN_COUNT = "column_count"
	COLUMN_TYPE = "column_type"


@dataclass(frozen=True)
class SetopCheckResult:
	"""
	Outcome of comparing the two operand row types.

	On success `column_types` holds the widened type of every column. On
	failure `kind` says what went wrong, `operand_index` which operand is
	blamed and `column_index` (0-based) which column, for type mismatches.
	"""

	ok: bool
	column_types: Tuple[TypeId, ...] = ()
	kind: Optional[SetopMismatchKind] = None
	operand_index: Optional[int] = None
	column_index: Optional[int] = None

	@classmethod
	def compatible(cls, column_types: Tuple[TypeId, ...]) -> "SetopCheckResult":
		return cls(ok=True, column_types=column_types)

	@classmethod
	def column_count_mismatch(cls, operand_index: int) -> "SetopCheckResult":
		return cls(ok=False, kind=SetopMismatchKind.COLUMN_COUNT, operand_index=operand_index)

	@classmethod
	def column_type_mismatch(cls, column_index: int) -> "SetopCheckResult":
		return cls(ok=False, kind=SetopMismatchKind.COLUMN_TYPE, operand_index=0, column_index=column_index)


class SetopOperandTypeChecker:
	"""Operand type-checking strategy for a set operator."""

	def check_setop_operands(self, binding: CallBinding) -> SetopCheckResult:
		"""
		Compare the operand row types without raising for user errors.

		Column count is checked before any column type; columns are then
		checked in ascending order and the first mismatch wins.
		"""
		if binding.get_operand_count() != 2:
			raise AssertionError("setops are binary (for now)")
		table = binding.type_table
		lattice = binding.type_lattice
		arg_fields: List[List[RowField]] = []
		col_count = -1
		for i in range(binding.get_operand_count()):
			arg_type = binding.get_operand_type(i)
			if not table.is_struct(arg_type):
				raise AssertionError(f"setop arg must be a struct, got {table.label(arg_type)}")
			fields = table.field_list(arg_type)
			arg_fields.append(fields)
			if i == 0:
				col_count = len(fields)
				continue
			if len(fields) != col_count:
				return SetopCheckResult.column_count_mismatch(i)

		# For each column ordinal, widen the slice holding that column's type
		# from every operand.
		widened = []
		for col in range(col_count):
			column_slice = [operand_fields[col].type_id for operand_fields in arg_fields]
			ty = lattice.least_restrictive(column_slice)
			if ty is None:
				return SetopCheckResult.column_type_mismatch(col)
			widened.append(ty)
		return SetopCheckResult.compatible(tuple(widened))

	def check_operand_types(self, binding: CallBinding, throw_on_failure: bool) -> bool:
		result = self.check_setop_operands(binding)
		if result.ok:
			return True
		if throw_on_failure:
			raise self._failure_error(binding, result)
		return False

	def get_operand_count_range(self) -> OperandCountRange:
		return OperandCountRange.of(2)

	def get_allowed_signatures(self, op: "SqlOperator", op_name: str) -> str:
		return "{0} " + op_name + " {1}"

	def _failure_error(self, binding: CallBinding, result: SetopCheckResult) -> SqlValidationError:
		op_name = binding.operator_name
		table = binding.type_table
		if result.kind is SetopMismatchKind.COLUMN_COUNT:
			assert result.operand_index is not None
			node: SqlNode = binding.operand(result.operand_index)
			# Point at the column list rather than the whole sub-query.
			if isinstance(node, SqlSelect):
				node = node.select_list
			widths = [len(table.field_list(binding.get_operand_type(i))) for i in range(binding.get_operand_count())]
			return binding.validator.new_validation_error(
				node,
				f"Column count mismatch in {op_name}",
				code=COLUMN_COUNT_MISMATCH,
				notes=[f"left operand has {widths[0]} column(s), right operand has {widths[result.operand_index]}"],
			)
		assert result.column_index is not None
		col = result.column_index
		field_node = get_select_list_item(binding.operand(0), col)
		left = table.field_list(binding.get_operand_type(0))[col]
		right = table.field_list(binding.get_operand_type(1))[col]
		return binding.validator.new_validation_error(
			field_node,
			f"Type mismatch in column {col + 1} of {op_name}",
			code=COLUMN_TYPE_MISMATCH,
			notes=[f"left column '{left.name}' is {table.label(left.type_id)}, right column '{right.name}' is {table.label(right.type_id)}"],
		)


__all__ = [
	"COLUMN_COUNT_MISMATCH",
	"COLUMN_TYPE_MISMATCH",
	"SetopMismatchKind",
	"SetopCheckResult",
	"SetopOperandTypeChecker",
]
