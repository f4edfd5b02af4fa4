# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from types import SimpleNamespace

from sqlsetop.core.span import Span
from sqlsetop.typeexpr import Located, TypeExprError, parse_row_type


def test_span_from_row_type_location_keeps_line_and_column():
	span = Span.from_loc(Located(line=1, column=16))

	assert span == Span(line=1, column=16)
	assert span.with_file("cases.json[bad][0]") == Span(file="cases.json[bad][0]", line=1, column=16)


def test_span_from_type_expression_error():
	try:
		parse_row_type("RECORD(id INT, )")
	except TypeExprError as exc:
		span = Span.from_loc(exc.loc).with_file("cases.json[c][1]")
	else:
		raise AssertionError("expected a TypeExprError")

	assert span.file == "cases.json[c][1]"
	assert (span.line, span.column) == (1, 16)


def test_span_from_missing_or_foreign_locations():
	token = SimpleNamespace(line=3, column=5, end_line=3, end_column=9)
	existing = Span(file="a", line=2, column=1)

	assert Span.from_loc(None) == Span()
	assert not Span.from_loc(None).is_known()
	assert Span.from_loc(existing) is existing
	assert Span.from_loc(token) == Span(line=3, column=5, end_line=3, end_column=9, raw=token)
	# A span that already names its file keeps it.
	assert existing.with_file("b") is existing
