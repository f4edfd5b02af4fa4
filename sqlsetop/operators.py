# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Operators and the standard set operators.

An operator knows its name, its node kind and which operand type checker
strategy validates its calls. The operator validates the operand count first
and only then hands the binding to the strategy.
"""

from __future__ import annotations

from typing import Dict

from sqlsetop.checker.call_binding import CallBinding
from sqlsetop.checker.operand_types import OperandTypeChecker
from sqlsetop.checker.setop_checker import SetopOperandTypeChecker
from sqlsetop.core.sql_nodes import SqlKind, SqlNode, SqlCall
from sqlsetop.core.span import Span
from sqlsetop.core.types_core import TypeId

OPERAND_COUNT_MISMATCH = "E-OPERAND-COUNT"
NO_COMMON_ROW_TYPE = "E-SETOP-NO-COMMON-TYPE"


class SqlOperator:
	def __init__(self, name: str, kind: SqlKind, operand_type_checker: OperandTypeChecker) -> None:
		self.name = name
		self.kind = kind
		self.operand_type_checker = operand_type_checker

	def __repr__(self) -> str:
		return f"{type(self).__name__}({self.name!r})"

	def create_call(self, *operands: SqlNode, span: Span | None = None) -> SqlCall:
		return SqlCall(operator=self, operands=list(operands), span=span or Span())

	def validate_operand_count(self, binding: CallBinding) -> None:
		"""Raise a located error if the call has an unacceptable number of operands."""
		count_range = self.operand_type_checker.get_operand_count_range()
		count = binding.get_operand_count()
		if not count_range.is_valid_count(count):
			raise binding.validator.new_validation_error(
				binding.call,
				f"Invalid number of arguments to {self.name}; expected {count_range.describe()}, got {count}",
				code=OPERAND_COUNT_MISMATCH,
			)

	def check_operand_types(self, binding: CallBinding, throw_on_failure: bool = True) -> bool:
		"""
		Validate the operand count, then the operand types.

		A wrong count is always an error when `throw_on_failure` is set and a
		plain False otherwise, so the strategy never sees a call it does not
		support.
		"""
		if not self.operand_type_checker.get_operand_count_range().is_valid_count(binding.get_operand_count()):
			if throw_on_failure:
				self.validate_operand_count(binding)
			return False
		return self.operand_type_checker.check_operand_types(binding, throw_on_failure)

	def get_allowed_signatures(self) -> str:
		return self.operand_type_checker.get_allowed_signatures(self, self.name)


class SqlSetOperator(SqlOperator):
	"""UNION / INTERSECT / EXCEPT, with or without ALL."""

	def __init__(self, name: str, kind: SqlKind, all: bool) -> None:
		super().__init__(name, kind, SetopOperandTypeChecker())
		self.all = all

	def infer_return_type(self, binding: CallBinding) -> TypeId:
		"""
		Derive the row type of the set operation.

		Column names come from the first operand; column types are the
		least-restrictive types of each column. Callers are expected to have
		checked the operands already; if no common type exists this raises.
		"""
		ty = binding.type_table.least_restrictive(binding.operand_types)
		if ty is None:
			raise binding.validator.new_validation_error(
				binding.call,
				f"Operands of {self.name} have no common row type",
				code=NO_COMMON_ROW_TYPE,
			)
		return ty


UNION = SqlSetOperator("UNION", SqlKind.UNION, all=False)
UNION_ALL = SqlSetOperator("UNION ALL", SqlKind.UNION, all=True)
INTERSECT = SqlSetOperator("INTERSECT", SqlKind.INTERSECT, all=False)
INTERSECT_ALL = SqlSetOperator("INTERSECT ALL", SqlKind.INTERSECT, all=True)
EXCEPT = SqlSetOperator("EXCEPT", SqlKind.EXCEPT, all=False)
EXCEPT_ALL = SqlSetOperator("EXCEPT ALL", SqlKind.EXCEPT, all=True)

SET_OPERATORS: Dict[str, SqlSetOperator] = {
	op.name: op for op in (UNION, UNION_ALL, INTERSECT, INTERSECT_ALL, EXCEPT, EXCEPT_ALL)
}


def lookup_set_operator(name: str) -> SqlSetOperator:
	"""Find a standard set operator by name (case-insensitive, whitespace-normalized)."""
	key = " ".join(name.upper().split())
	try:
		return SET_OPERATORS[key]
	except KeyError:
		raise KeyError(f"unknown set operator '{name}'") from None


__all__ = [
	"OPERAND_COUNT_MISMATCH",
	"NO_COMMON_ROW_TYPE",
	"SqlOperator",
	"SqlSetOperator",
	"UNION",
	"UNION_ALL",
	"INTERSECT",
	"INTERSECT_ALL",
	"EXCEPT",
	"EXCEPT_ALL",
	"SET_OPERATORS",
	"lookup_set_operator",
]
