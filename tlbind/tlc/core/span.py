# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lightweight source span representation used by diagnostics.

A Span carries optional file/line/column info for a schema location. Parser
locations (lark tokens, tree metadata, UnexpectedInput errors) are accepted by
`from_loc` so call sites do not need to know which object they hold.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""Represents a source span (best-effort file/line/column plus raw parser loc)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	end_line: Optional[int] = None
	end_column: Optional[int] = None
	raw: Any = None

	@classmethod
	def from_loc(cls, loc: Any, *, file: Optional[str] = None) -> "Span":
		"""
		Construct a Span from an existing parser/location object.

		If `loc` is already a Span it is returned unchanged (re-pointed at `file`
		when the span has none).
		"""
		if loc is None:
			return cls(file=file)
		if isinstance(loc, cls):
			if loc.file is None and file is not None:
				return cls(
					file=file,
					line=loc.line,
					column=loc.column,
					end_line=loc.end_line,
					end_column=loc.end_column,
					raw=loc.raw,
				)
			return loc
		return cls(
			file=file or getattr(loc, "file", None) or None,
			line=getattr(loc, "line", None),
			column=getattr(loc, "column", None),
			end_line=getattr(loc, "end_line", None),
			end_column=getattr(loc, "end_column", None),
			raw=loc,
		)

	def describe(self) -> str:
		"""Render as `file:line:col` with `?` for unknown parts."""
		file = self.file or "<schema>"
		line = self.line if self.line is not None else "?"
		column = self.column if self.column is not None else "?"
		return f"{file}:{line}:{column}"


__all__ = ["Span"]
