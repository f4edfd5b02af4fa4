# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Positions of SQL nodes and diagnostics.

Validation errors are reported at the span of the node they blame (an operand,
its select list, or one select item). Spans built from operand text point into
that text, with `file` naming the case and operand it came from.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""1-based line/column of a node; any part may be unknown."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	end_line: Optional[int] = None
	end_column: Optional[int] = None
	raw: Any = None

	@classmethod
	def from_loc(cls, loc: Any) -> "Span":
		"""
		Span for the location attached to an input error.

		`loc` is usually the row-type `Located` a `TypeExprError` carries, or
		None when the error has no position. Spans pass through unchanged;
		other objects with line/column attributes are copied and kept in
		`raw`.
		"""
		if loc is None:
			return cls()
		if isinstance(loc, cls):
			return loc
		to_span = getattr(loc, "to_span", None)
		if callable(to_span):
			return to_span()
		return cls(
			line=getattr(loc, "line", None),
			column=getattr(loc, "column", None),
			end_line=getattr(loc, "end_line", None),
			end_column=getattr(loc, "end_column", None),
			raw=loc,
		)

	def with_file(self, file: str | None) -> "Span":
		"""Attach the operand/case label `file` unless the span already has one."""
		if self.file is not None or file is None:
			return self
		return replace(self, file=file)

	def is_known(self) -> bool:
		return self.line is not None


__all__ = ["Span"]
