"""
Common diagnostic structure for the validator and the command line.

A diagnostic is a message plus a code, a phase label and a span. Validation
errors carry one; the CLI renders them as text or JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .span import Span


@dataclass
class Diagnostic:
	"""One reported problem: an operand mismatch or a malformed case/operand."""

	message: str
	code: str | None = None
	# Phase label: "validate" for operand checks, "input" for malformed case
	# files and type expressions.
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)  # Source location (Span() denotes unknown).
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	def render(self, default_file: str | None = None) -> str:
		"""Render as `file:line:col: severity: message`, using `?` for unknown parts."""
		file = self.span.file or default_file or "?"
		line = self.span.line if self.span.line is not None else "?"
		column = self.span.column if self.span.column is not None else "?"
		text = f"{file}:{line}:{column}: {self.severity}: {self.message}"
		for note in self.notes:
			text += f"\n  note: {note}"
		return text


__all__ = ["Diagnostic"]
