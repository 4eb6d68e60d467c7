"""
Common diagnostic structure for the schema compiler passes.

A diagnostic is a message plus optional span/metadata. Every pass that can fail
raises one of the errors in `core.errors`; the driver turns those into
Diagnostics so the CLI can render them uniformly (human or JSON).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .span import Span


@dataclass
class Diagnostic:
	"""Represents a compiler diagnostic (error/warning)."""

	message: str
	code: str | None = None
	# Pipeline phase that produced the diagnostic ("parser", "resolve",
	# "registry", "layer", "emit").
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)  # Span() denotes an unknown location.
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	@property
	def is_error(self) -> bool:
		return self.severity == "error"

	def format_human(self) -> str:
		"""Render as `file:line:col: severity: message` (notes indented below)."""
		head = f"{self.span.describe()}: {self.severity}: {self.message}"
		if not self.notes:
			return head
		return "\n".join([head, *(f"  note: {n}" for n in self.notes)])

	def to_json(self) -> dict[str, Any]:
		"""Render to a structured JSON-friendly dict."""
		return {
			"phase": self.phase,
			"code": self.code,
			"message": self.message,
			"severity": self.severity,
			"file": self.span.file,
			"line": self.span.line,
			"column": self.span.column,
			"notes": list(self.notes),
		}


def has_errors(diagnostics: list[Diagnostic]) -> bool:
	return any(d.is_error for d in diagnostics)


__all__ = ["Diagnostic", "has_errors"]
