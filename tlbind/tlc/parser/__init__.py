"""
Schema front end: parses TL text into validated RawRecords.

`parse_schema` raises on malformed input; `parse_schema_file` is the
diagnostic-returning adapter used by the driver.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple

from tlbind.tlc.core.diagnostics import Diagnostic
from tlbind.tlc.core.errors import SchemaParseError
from tlbind.tlc.core.span import Span

from . import ast as schema_ast
from .ast import RawParam, RawRecord, RawSchema, RecordKind, WireTypeExpr
from .parser import parse_schema, parse_wire_type


def parse_schema_file(path: Path) -> Tuple[Optional[RawSchema], str, List[Diagnostic]]:
	"""
	Read and parse a schema file.

	Returns `(schema, text, diagnostics)`; `schema` is None when parsing failed.
	The raw text is returned as well since the layer marker lives in a comment.
	"""
	try:
		text = path.read_text(encoding="utf-8")
	except (OSError, UnicodeDecodeError) as err:
		return None, "", [
			Diagnostic(
				message=f"cannot read schema: {getattr(err, 'strerror', None) or err}",
				code="schema-io",
				phase="parser",
				span=Span(file=str(path)),
			)
		]
	try:
		schema = parse_schema(text, filename=str(path))
	except SchemaParseError as err:
		return None, text, [err.to_diagnostic(file=str(path))]
	return schema, text, []


__all__ = [
	"schema_ast",
	"RawParam",
	"RawRecord",
	"RawSchema",
	"RecordKind",
	"WireTypeExpr",
	"parse_schema",
	"parse_schema_file",
	"parse_wire_type",
]
