# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Binding of one operator call to its already-typed operands.

This is the only input a checker sees: the call node (for locating errors),
the operand types, and the validator (for the type lattice and error factory).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence, Tuple

from sqlsetop.checker.validator import SqlValidator
from sqlsetop.core.sql_nodes import SqlCall, SqlNode
from sqlsetop.core.types_core import TypeId, TypeLattice, TypeTable

if TYPE_CHECKING:
	from sqlsetop.operators import SqlOperator


@dataclass(frozen=True)
class CallBinding:
	validator: SqlValidator
	call: SqlCall
	operand_types: Tuple[TypeId, ...]

	def __post_init__(self) -> None:
		if len(self.operand_types) != len(self.call.operands):
			raise ValueError(
				f"call has {len(self.call.operands)} operand(s) but {len(self.operand_types)} operand type(s) were bound"
			)

	@classmethod
	def of(cls, validator: SqlValidator, call: SqlCall, operand_types: Sequence[TypeId]) -> "CallBinding":
		return cls(validator=validator, call=call, operand_types=tuple(operand_types))

	@property
	def operator(self) -> "SqlOperator":
		return self.call.operator

	@property
	def operator_name(self) -> str:
		return self.call.operator.name

	@property
	def type_table(self) -> TypeTable:
		return self.validator.type_table

	@property
	def type_lattice(self) -> TypeLattice:
		"""The lattice used to widen operand column types (the validator's type table)."""
		return self.validator.type_table

	def get_operand_count(self) -> int:
		return len(self.operand_types)

	def get_operand_type(self, i: int) -> TypeId:
		return self.operand_types[i]

	def operand(self, i: int) -> SqlNode:
		return self.call.operands[i]


__all__ = ["CallBinding"]
