# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Operand type checker protocol and operand-count ranges.

An operator delegates "are these operands acceptable?" to a strategy object.
Every strategy answers the same three questions, so operators can hold any of
them without knowing which one they got.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
	from sqlsetop.checker.call_binding import CallBinding
	from sqlsetop.operators import SqlOperator


@dataclass(frozen=True)
class OperandCountRange:
	"""Closed range of accepted operand counts; `max_count=None` means unbounded."""

	min_count: int
	max_count: Optional[int]

	def __post_init__(self) -> None:
		if self.min_count < 0:
			raise ValueError(f"operand count minimum must be >= 0, got {self.min_count}")
		if self.max_count is not None and self.max_count < self.min_count:
			raise ValueError(f"operand count range [{self.min_count}, {self.max_count}] is empty")

	@classmethod
	def of(cls, count: int) -> "OperandCountRange":
		"""Exactly `count` operands."""
		return cls(count, count)

	@classmethod
	def between(cls, min_count: int, max_count: int) -> "OperandCountRange":
		return cls(min_count, max_count)

	@classmethod
	def from_(cls, min_count: int) -> "OperandCountRange":
		"""At least `min_count` operands."""
		return cls(min_count, None)

	def is_valid_count(self, count: int) -> bool:
		if count < self.min_count:
			return False
		return self.max_count is None or count <= self.max_count

	def describe(self) -> str:
		if self.max_count is None:
			return f"at least {self.min_count}"
		if self.max_count == self.min_count:
			return f"exactly {self.min_count}"
		return f"between {self.min_count} and {self.max_count}"


class OperandTypeChecker(Protocol):
	"""Strategy that validates the operand types of an operator call."""

	def check_operand_types(self, binding: "CallBinding", throw_on_failure: bool) -> bool:
		"""
		Return True if the operands are acceptable.

		With `throw_on_failure` a rejection raises a located SqlValidationError
		instead of returning False.
		"""
		...

	def get_operand_count_range(self) -> OperandCountRange:
		...

	def get_allowed_signatures(self, op: "SqlOperator", op_name: str) -> str:
		"""Return a signature template such as `{0} UNION {1}` for usage messages."""
		...


__all__ = ["OperandCountRange", "OperandTypeChecker"]
