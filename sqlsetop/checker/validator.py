# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Validation context shared by operator checks.

The validator owns the type table (the type lattice) and is the single place
that turns "this node is wrong because ..." into a raised, located error.
"""

from __future__ import annotations

from typing import Optional, Sequence

from sqlsetop.core.diagnostics import Diagnostic
from sqlsetop.core.span import Span
from sqlsetop.core.sql_nodes import SqlNode
from sqlsetop.core.types_core import TypeTable


class SqlValidationError(ValueError):
	"""
	User-facing validation failure.

	Carries a structured Diagnostic (code, message, span) so callers can report
	it without parsing the exception text.
	"""

	def __init__(self, diagnostic: Diagnostic) -> None:
		super().__init__(diagnostic.message)
		self.diagnostic = diagnostic
		self.loc = diagnostic.span

	@property
	def code(self) -> str | None:
		return self.diagnostic.code


class SqlValidator:
	"""Holds the type table for one validation run and builds located errors."""

	def __init__(self, type_table: TypeTable | None = None, *, source_file: Optional[str] = None) -> None:
		self.type_table = type_table or TypeTable()
		self.source_file = source_file

	def new_validation_error(
		self,
		node: SqlNode | None,
		message: str,
		*,
		code: str,
		notes: Sequence[str] = (),
	) -> SqlValidationError:
		"""Build (not raise) an error located at `node`."""
		span = node.span if node is not None else Span()
		diag = Diagnostic(
			message=message,
			code=code,
			phase="validate",
			severity="error",
			span=span.with_file(self.source_file),
			notes=list(notes),
		)
		return SqlValidationError(diag)


__all__ = ["SqlValidationError", "SqlValidator"]
