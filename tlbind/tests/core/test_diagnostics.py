# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import json
from pathlib import Path

from tlbind.tlc.core.artifacts import canonical_json_bytes, write_atomic
from tlbind.tlc.core.diagnostics import Diagnostic, has_errors
from tlbind.tlc.core.errors import MissingVersionMarker, SchemaParseError, UnresolvedTypeError
from tlbind.tlc.core.span import Span
from tlbind.tlc.parser.ast import Located


def test_human_format_includes_location_and_notes() -> None:
	diag = Diagnostic(
		message="boom",
		code="x",
		phase="resolve",
		span=Span(file="api.tl", line=3, column=7),
		notes=["in combinator 'msg'"],
	)
	assert diag.format_human() == "api.tl:3:7: error: boom\n  note: in combinator 'msg'"


def test_unknown_location_renders_question_marks() -> None:
	assert Diagnostic(message="m").format_human() == "<schema>:?:?: error: m"


def test_schema_parse_error_to_diagnostic() -> None:
	err = SchemaParseError("bad", loc=Located(line=2, column=5))
	assert isinstance(err, ValueError)
	diag = err.to_diagnostic(file="api.tl")
	assert diag.to_json() == {
		"phase": "parser",
		"code": "schema-parse",
		"message": "bad",
		"severity": "error",
		"file": "api.tl",
		"line": 2,
		"column": 5,
		"notes": [],
	}


def test_unresolved_type_error_names_record() -> None:
	err = UnresolvedTypeError("unknown type 'Foo'", record="msg", token="Foo")
	assert err.record == "msg"
	assert err.token == "Foo"
	diag = err.to_diagnostic()
	assert diag.phase == "resolve"
	assert diag.notes == ["in combinator 'msg'"]


def test_missing_version_marker_is_a_warning() -> None:
	err = MissingVersionMarker()
	assert isinstance(err, LookupError)
	diag = err.to_diagnostic(file="api.tl")
	assert diag.severity == "warning"
	assert diag.code == "missing-version-marker"
	assert not has_errors([diag])
	assert has_errors([diag, Diagnostic(message="x")])


def test_canonical_json_is_sorted_and_newline_terminated() -> None:
	data = canonical_json_bytes({"b": 1, "a": [1, 2]})
	assert data.endswith(b"\n")
	assert list(json.loads(data)) == ["a", "b"]
	assert data == canonical_json_bytes({"a": [1, 2], "b": 1})


def test_write_atomic_replaces_and_leaves_no_temp(tmp_path: Path) -> None:
	target = tmp_path / "out" / "file.txt"
	write_atomic(target, b"one")
	write_atomic(target, b"two")
	assert target.read_bytes() == b"two"
	assert [p.name for p in target.parent.iterdir()] == ["file.txt"]
