# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from pathlib import Path

import pytest

from tlbind.tlc.core.errors import SchemaParseError
from tlbind.tlc.parser import parse_schema, parse_schema_file
from tlbind.tlc.parser.ast import RecordKind


def test_parse_schema_splits_constructors_and_functions(schema_text: str) -> None:
	schema = parse_schema(schema_text)

	ctor_names = [r.name for r in schema.constructors]
	fn_names = [r.name for r in schema.functions]
	assert ctor_names[:3] == ["vector", "boolFalse", "boolTrue"]
	assert "messages.messages" in ctor_names
	assert fn_names == [
		"messages.getHistory",
		"help.getConfig",
		"contacts.resolvePeer",
		"invokeWithLayer",
		"messages.getMessageIds",
	]
	assert all(r.kind is RecordKind.FUNCTION for r in schema.functions)


def test_builtin_declarations_are_dropped(schema_text: str) -> None:
	schema = parse_schema(schema_text)
	names = {r.name for r in schema.records}
	assert not names & {"int", "long", "string"}


def test_explicit_tag_and_params() -> None:
	schema = parse_schema("inputPeerUser#dde8a54c user_id:long access_hash:long = InputPeer;")
	(rec,) = schema.records
	assert rec.tag == 0xDDE8A54C
	assert not rec.tag_inferred
	assert [(p.name, p.wire_type) for p in rec.params] == [("user_id", "long"), ("access_hash", "long")]
	assert rec.result_type == "InputPeer"
	assert rec.namespace is None
	assert rec.member == "inputPeerUser"


def test_vector_builtin_tag_is_inferred() -> None:
	schema = parse_schema("vector {t:Type} # [ t ] = Vector t;")
	(rec,) = schema.records
	assert rec.tag_inferred
	assert rec.tag == 0x1CB5C415
	assert rec.generic_params == ("t",)
	assert rec.result_type == "Vector t"


def test_bool_tags_are_inferred() -> None:
	schema = parse_schema("boolFalse = Bool;\nboolTrue = Bool;")
	assert [r.tag for r in schema.records] == [0xBC799737, 0x997275B5]


def test_generic_args_are_not_params() -> None:
	schema = parse_schema("---functions---\ninvokeWithLayer#da9b0d0d {X:Type} layer:int query:!X = X;")
	(rec,) = schema.records
	assert rec.generic_params == ("X",)
	assert [p.name for p in rec.params] == ["layer", "query"]
	assert rec.params[1].wire_type == "!X"


def test_bitmask_params_and_conditions() -> None:
	schema = parse_schema("config#232566ac flags:# test_mode:flags.0?true limit:flags.1?int = Config;")
	(rec,) = schema.records
	flags, test_mode, limit = rec.params
	assert flags.is_bitmask
	assert flags.wire_type == "#"
	assert not test_mode.is_bitmask
	assert limit.wire_type == "flags.1?int"


def test_namespaced_names_and_angle_result() -> None:
	schema = parse_schema(
		"---functions---\nmessages.getMessageIds#12345678 id:Vector<int> = Vector<long>;"
	)
	(rec,) = schema.records
	assert rec.namespace == "messages"
	assert rec.member == "getMessageIds"
	assert rec.result_type == "Vector<long>"


def test_comments_are_ignored() -> None:
	text = """
// LAYER 12
/* block
   comment */
msg#abcdef01 text:string = Message; // trailing
"""
	schema = parse_schema(text)
	assert [r.name for r in schema.records] == ["msg"]


def test_unknown_section_is_error() -> None:
	with pytest.raises(SchemaParseError, match="unknown schema section"):
		parse_schema("---things---\nmsg#abcdef01 = Message;")


def test_malformed_schema_reports_location() -> None:
	with pytest.raises(SchemaParseError) as excinfo:
		parse_schema("msg#abcdef01 text:string = Message;\nbroken#01 = ;\n")
	assert excinfo.value.loc.line == 2


def test_duplicate_param_names_are_rejected() -> None:
	with pytest.raises(SchemaParseError, match="duplicate param 'a'"):
		parse_schema("pair#00000001 a:int a:int = Pair;")


def test_parse_schema_file_returns_diagnostics(tmp_path: Path) -> None:
	bad = tmp_path / "bad.tl"
	bad.write_text("---things---\n", encoding="utf-8")
	schema, _text, diags = parse_schema_file(bad)
	assert schema is None
	assert len(diags) == 1
	assert diags[0].phase == "parser"
	assert diags[0].span.file == str(bad)

	missing = tmp_path / "missing.tl"
	schema, text, diags = parse_schema_file(missing)
	assert schema is None
	assert text == ""
	assert diags[0].code == "schema-io"


def test_parse_schema_file_success(tmp_path: Path, schema_text: str) -> None:
	path = tmp_path / "api.tl"
	path.write_text(schema_text, encoding="utf-8")
	schema, text, diags = parse_schema_file(path)
	assert diags == []
	assert text == schema_text
	assert schema is not None and schema.source == str(path)
