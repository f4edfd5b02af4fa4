# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Operand type checkers.

Operators hold an OperandTypeChecker strategy and consult it with a
CallBinding. SetopOperandTypeChecker is the strategy for UNION, INTERSECT and
EXCEPT.
"""

from __future__ import annotations

from sqlsetop.checker.call_binding import CallBinding
from sqlsetop.checker.operand_types import OperandCountRange, OperandTypeChecker
from sqlsetop.checker.setop_checker import (
	COLUMN_COUNT_MISMATCH,
	COLUMN_TYPE_MISMATCH,
	SetopCheckResult,
	SetopMismatchKind,
	SetopOperandTypeChecker,
)
from sqlsetop.checker.validator import SqlValidationError, SqlValidator

__all__ = [
	"CallBinding",
	"OperandCountRange",
	"OperandTypeChecker",
	"COLUMN_COUNT_MISMATCH",
	"COLUMN_TYPE_MISMATCH",
	"SetopCheckResult",
	"SetopMismatchKind",
	"SetopOperandTypeChecker",
	"SqlValidationError",
	"SqlValidator",
]
