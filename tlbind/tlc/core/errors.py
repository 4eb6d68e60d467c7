# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Errors raised by the schema compiler.

Fatal errors are `ValueError` subclasses carrying a best-effort location
(`loc`) so the driver can convert them into structured diagnostics instead of
crashing with a raw traceback. `MissingVersionMarker` is not fatal: the driver
reports it as a warning and skips layer propagation.
"""

from __future__ import annotations

from typing import Any, Optional

from .diagnostics import Diagnostic
from .span import Span


class CompileError(ValueError):
	"""Base class for fatal compile errors (schema or resolution)."""

	phase = "compile"
	code = "compile-error"

	def __init__(self, message: str, *, loc: Any = None, notes: Optional[list[str]] = None) -> None:
		super().__init__(message)
		self.message = message
		self.loc = loc
		self.notes = list(notes or [])

	def to_diagnostic(self, *, file: Optional[str] = None) -> Diagnostic:
		return Diagnostic(
			message=self.message,
			code=self.code,
			phase=self.phase,
			severity="error",
			span=Span.from_loc(self.loc, file=file),
			notes=list(self.notes),
		)


class SchemaParseError(CompileError):
	"""Malformed schema text (syntax, unknown section, duplicate tag/name)."""

	phase = "parser"
	code = "schema-parse"


class UnresolvedTypeError(CompileError):
	"""
	A wire-type token that does not resolve to a scalar, vector, named type or
	generic placeholder, or a named reference to a type the schema never
	declares. `record` names the combinator the token belongs to.
	"""

	phase = "resolve"
	code = "unresolved-type"

	def __init__(self, message: str, *, record: Optional[str] = None, token: Optional[str] = None, loc: Any = None) -> None:
		notes = []
		if record is not None:
			notes.append(f"in combinator '{record}'")
		super().__init__(message, loc=loc, notes=notes)
		self.record = record
		self.token = token


class MissingVersionMarker(LookupError):
	"""The `// LAYER <n>` comment is absent from the schema text."""

	code = "missing-version-marker"

	def __init__(self, message: str = "schema has no '// LAYER <n>' marker; layer constant not updated") -> None:
		super().__init__(message)
		self.message = message

	def to_diagnostic(self, *, file: Optional[str] = None) -> Diagnostic:
		return Diagnostic(
			message=self.message,
			code=self.code,
			phase="layer",
			severity="warning",
			span=Span(file=file),
		)


__all__ = ["CompileError", "SchemaParseError", "UnresolvedTypeError", "MissingVersionMarker"]
