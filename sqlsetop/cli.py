#!/usr/bin/env python3
# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Command line front-end: check set-operation cases described in a JSON file.

A case names a set operator and gives both operands as row-type expressions:

	{"name": "ids", "operator": "UNION", "operands": ["RECORD(id INT)", "RECORD(id BIGINT)"]}

The file holds one case object or a list of them. Each operand is turned into
a SELECT whose select list carries the field positions, so diagnostics point
into the operand text.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

from sqlsetop.checker.call_binding import CallBinding
from sqlsetop.checker.validator import SqlValidationError, SqlValidator
from sqlsetop.core.diagnostics import Diagnostic
from sqlsetop.core.span import Span
from sqlsetop.core.sql_nodes import SqlIdentifier, SqlNodeList, SqlSelect
from sqlsetop.core.types_core import TypeTable
from sqlsetop.operators import lookup_set_operator
from sqlsetop.typeexpr import RowTypeExpr, TypeExprError, parse_row_type, resolve_row_type


@dataclass
class CaseResult:
	name: str
	compatible: bool
	result_type: Optional[str] = None
	diagnostics: List[Diagnostic] = field(default_factory=list)


def _input_diag(message: str, *, file: str, loc: Any = None) -> Diagnostic:
	span = Span.from_loc(loc).with_file(file) if loc is not None else Span(file=file)
	return Diagnostic(message=message, code="E-INPUT", phase="input", severity="error", span=span)


def _diag_to_json(diag: Diagnostic, source: Path) -> dict:
	"""Render a Diagnostic to a structured JSON-friendly dict."""
	return {
		"phase": diag.phase,
		"code": diag.code,
		"message": diag.message,
		"severity": diag.severity,
		"file": diag.span.file or str(source),
		"line": diag.span.line,
		"column": diag.span.column,
		"notes": list(diag.notes),
	}


def _report_file_error(diag: Diagnostic, source: Path, *, as_json: bool) -> int:
	"""Report a problem with the case file as a whole; always exit code 1."""
	if as_json:
		print(json.dumps({"exit_code": 1, "diagnostics": [_diag_to_json(diag, source)]}))
	else:
		print(diag.render(), file=sys.stderr)
	return 1


def select_from_row_expr(expr: RowTypeExpr, *, file: str | None) -> SqlSelect:
	"""Build a SELECT whose select list mirrors the fields of `expr`."""
	items = [SqlIdentifier([f.name], span=f.loc.to_span(file)) for f in expr.fields]
	first = expr.fields[0].loc.to_span(file) if expr.fields else expr.loc.to_span(file)
	return SqlSelect(select_list=SqlNodeList(items, span=first), span=expr.loc.to_span(file))


def check_case(case: Any, *, index: int, source: Path, speculative: bool) -> CaseResult:
	"""Check one case object; malformed cases yield an input diagnostic."""
	name = f"case{index}"
	label = f"{source}[{name}]"
	if not isinstance(case, dict):
		return CaseResult(name=name, compatible=False, diagnostics=[_input_diag("case must be an object", file=label)])
	name = str(case.get("name") or name)
	label = f"{source}[{name}]"
	operands = case.get("operands")
	if not isinstance(operands, list) or not all(isinstance(o, str) for o in operands):
		return CaseResult(name=name, compatible=False, diagnostics=[_input_diag("'operands' must be a list of row-type strings", file=label)])
	try:
		op = lookup_set_operator(str(case.get("operator", "UNION")))
	except KeyError as exc:
		return CaseResult(name=name, compatible=False, diagnostics=[_input_diag(str(exc.args[0]), file=label)])

	table = TypeTable()
	validator = SqlValidator(table)
	nodes = []
	types = []
	for i, text in enumerate(operands):
		operand_file = f"{label}[{i}]"
		try:
			expr = parse_row_type(text)
			types.append(resolve_row_type(table, expr))
		except TypeExprError as exc:
			return CaseResult(name=name, compatible=False, diagnostics=[_input_diag(str(exc), file=operand_file, loc=exc.loc)])
		nodes.append(select_from_row_expr(expr, file=operand_file))

	binding = CallBinding.of(validator, op.create_call(*nodes, span=Span(file=label)), types)
	try:
		ok = op.check_operand_types(binding, throw_on_failure=not speculative)
	except SqlValidationError as err:
		return CaseResult(name=name, compatible=False, diagnostics=[err.diagnostic])
	if not ok:
		return CaseResult(name=name, compatible=False)
	return CaseResult(name=name, compatible=True, result_type=table.label(op.infer_return_type(binding)))


def main(argv: list[str] | None = None) -> int:
	"""
	Check every case in a case file.

	With --json, prints one object with per-case results and an exit_code;
	otherwise prints `ok` lines on stdout and diagnostics on stderr.
	"""
	parser = argparse.ArgumentParser(prog="sqlsetop", description="Check set-operation operand compatibility")
	parser.add_argument("source", type=Path, help="JSON case file")
	parser.add_argument(
		"--json",
		action="store_true",
		help="Emit results as JSON (name/compatible/result_type/diagnostics)",
	)
	parser.add_argument(
		"--speculative",
		action="store_true",
		help="Probe compatibility only; report incompatible cases without locating the error",
	)
	args = parser.parse_args(argv)
	source: Path = args.source

	try:
		payload = json.loads(source.read_text(encoding="utf-8"))
	except (OSError, ValueError) as exc:
		return _report_file_error(_input_diag(f"cannot read case file: {exc}", file=str(source)), source, as_json=args.json)

	cases = payload if isinstance(payload, list) else [payload]
	if not cases:
		return _report_file_error(_input_diag("case file contains no cases", file=str(source)), source, as_json=args.json)
	results = [check_case(case, index=i, source=source, speculative=args.speculative) for i, case in enumerate(cases)]
	exit_code = 0 if all(r.compatible for r in results) else 1

	if args.json:
		print(
			json.dumps(
				{
					"exit_code": exit_code,
					"results": [
						{
							"name": r.name,
							"compatible": r.compatible,
							"result_type": r.result_type,
							"diagnostics": [_diag_to_json(d, source) for d in r.diagnostics],
						}
						for r in results
					],
				}
			)
		)
		return exit_code

	for r in results:
		if r.compatible:
			print(f"ok {r.name}: {r.result_type}")
		elif not r.diagnostics:
			print(f"{source}: {r.name}: operands are not union-compatible", file=sys.stderr)
		for diag in r.diagnostics:
			print(diag.render(str(source)), file=sys.stderr)
	return exit_code


__all__ = ["CaseResult", "check_case", "main", "select_from_row_expr"]


if __name__ == "__main__":  # pragma: no cover
	sys.exit(main())
