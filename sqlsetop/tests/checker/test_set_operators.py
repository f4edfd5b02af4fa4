# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Operator layer: operand-count validation, delegation and result types."""

from __future__ import annotations

import pytest

from sqlsetop.checker import OperandCountRange, SqlValidationError
from sqlsetop.core.sql_nodes import SqlKind
from sqlsetop.core.types_core import TypeTable
from sqlsetop.operators import (
	EXCEPT_ALL,
	INTERSECT,
	NO_COMMON_ROW_TYPE,
	OPERAND_COUNT_MISMATCH,
	SET_OPERATORS,
	UNION,
	UNION_ALL,
	SqlOperator,
	lookup_set_operator,
)
from sqlsetop.test_helpers import make_binding, row


def test_standard_set_operators():
	assert sorted(SET_OPERATORS) == ["EXCEPT", "EXCEPT ALL", "INTERSECT", "INTERSECT ALL", "UNION", "UNION ALL"]
	assert UNION_ALL.kind is SqlKind.UNION and UNION_ALL.all
	assert not UNION.all
	assert EXCEPT_ALL.kind is SqlKind.EXCEPT


def test_lookup_set_operator_is_case_and_space_insensitive():
	assert lookup_set_operator("union") is UNION
	assert lookup_set_operator("  union   all ") is UNION_ALL
	with pytest.raises(KeyError, match="unknown set operator"):
		lookup_set_operator("MINUS")


def test_allowed_signatures_use_operator_name():
	assert UNION_ALL.get_allowed_signatures() == "{0} UNION ALL {1}"
	assert INTERSECT.get_allowed_signatures() == "{0} INTERSECT {1}"


def test_operator_rejects_wrong_operand_count_before_type_checks():
	table = TypeTable()
	ty = row(table, ("id", table.ensure_int()))
	binding = make_binding(table, [ty, ty, ty])

	assert UNION.check_operand_types(binding, throw_on_failure=False) is False
	with pytest.raises(SqlValidationError) as excinfo:
		UNION.check_operand_types(binding)
	assert excinfo.value.code == OPERAND_COUNT_MISMATCH
	assert str(excinfo.value) == "Invalid number of arguments to UNION; expected exactly 2, got 3"


def test_operator_delegates_to_its_checker():
	table = TypeTable()
	a = row(table, ("id", table.ensure_int()))
	b = row(table, ("id", table.ensure_varchar()))

	assert UNION.check_operand_types(make_binding(table, [a, a])) is True
	assert UNION.check_operand_types(make_binding(table, [a, b]), throw_on_failure=False) is False


def test_custom_strategy_is_dispatched_polymorphically():
	class AnyCountChecker:
		def __init__(self) -> None:
			self.calls = 0

		def check_operand_types(self, binding, throw_on_failure):
			self.calls += 1
			return True

		def get_operand_count_range(self):
			return OperandCountRange.from_(1)

		def get_allowed_signatures(self, op, op_name):
			return f"{op_name}(...)"

	strategy = AnyCountChecker()
	op = SqlOperator("COALESCE", SqlKind.OTHER_FUNCTION, strategy)
	table = TypeTable()
	ty = row(table, ("id", table.ensure_int()))

	assert op.check_operand_types(make_binding(table, [ty, ty, ty], op)) is True
	assert strategy.calls == 1
	assert op.get_allowed_signatures() == "COALESCE(...)"


def test_infer_return_type_widens_columns_and_keeps_first_names():
	table = TypeTable()
	a = row(table, ("id", table.ensure_int()), ("name", table.ensure_scalar("CHAR", 2)))
	b = row(table, ("key", table.ensure_bigint()), ("label", table.ensure_varchar(9)))
	binding = make_binding(table, [a, b])

	result = UNION.infer_return_type(binding)

	assert table.label(result) == "RECORD(id BIGINT, name VARCHAR(9))"


def test_infer_return_type_raises_without_common_type():
	table = TypeTable()
	a = row(table, ("id", table.ensure_int()))
	b = row(table, ("id", table.ensure_boolean()))

	with pytest.raises(SqlValidationError) as excinfo:
		UNION.infer_return_type(make_binding(table, [a, b]))
	assert excinfo.value.code == NO_COMMON_ROW_TYPE
