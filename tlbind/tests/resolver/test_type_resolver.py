# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from tlbind.tlc.core.errors import UnresolvedTypeError
from tlbind.tlc.core.types_core import GenericPlaceholder, NamedType, Scalar, ScalarKind, Vector
from tlbind.tlc.parser import parse_schema
from tlbind.tlc.shapes import build_shapes
from tlbind.tlc.type_resolver import check_references, resolve_result_type, resolve_wire_type


@pytest.mark.parametrize(
	"token, kind",
	[
		("int", ScalarKind.INT),
		("Int", ScalarKind.INT),
		("long", ScalarKind.LONG),
		("double", ScalarKind.DOUBLE),
		("Bool", ScalarKind.BOOL),
		("true", ScalarKind.TRUE),
		("string", ScalarKind.STRING),
		("bytes", ScalarKind.BYTES),
		("int128", ScalarKind.INT128),
		("int256", ScalarKind.INT256),
		("Object", ScalarKind.OBJECT),
	],
)
def test_scalar_keywords_are_case_insensitive(token: str, kind: ScalarKind) -> None:
	assert resolve_wire_type(token) == Scalar(kind)


def test_flag_gate_is_not_part_of_the_type() -> None:
	assert resolve_wire_type("flags.0?int") == Scalar(ScalarKind.INT)
	assert resolve_wire_type("flags2.3?Vector<long>") == Vector(Scalar(ScalarKind.LONG))


def test_vector_unwraps_one_level_in_either_case() -> None:
	assert resolve_wire_type("Vector<Message>") == Vector(NamedType("Message"))
	assert resolve_wire_type("vector<int>") == Vector(Scalar(ScalarKind.INT))


def test_nested_vector_is_rejected() -> None:
	with pytest.raises(UnresolvedTypeError, match="nested vectors"):
		resolve_wire_type("Vector<Vector<int>>", record="matrix")


def test_unknown_type_constructor_is_rejected() -> None:
	with pytest.raises(UnresolvedTypeError, match="unknown type constructor"):
		resolve_wire_type("Maybe<int>")


def test_malformed_token_names_the_record() -> None:
	with pytest.raises(UnresolvedTypeError) as excinfo:
		resolve_wire_type("Vector<int", record="msg")
	assert excinfo.value.record == "msg"
	assert excinfo.value.token == "Vector<int"


def test_generic_param_is_a_placeholder() -> None:
	assert resolve_wire_type("!X") == GenericPlaceholder(name="X")


def test_boxed_reference_is_abstract_by_default() -> None:
	assert resolve_wire_type("InputPeer") == NamedType("InputPeer", abstract=True)
	assert resolve_wire_type("messages.Messages") == NamedType("Messages", namespace="messages")


def test_concrete_reference_decapitalizes_member() -> None:
	ty = resolve_wire_type("messages.Messages", abstract=False)
	assert ty == NamedType("messages", namespace="messages", abstract=False)


def test_bare_references_pin_a_constructor() -> None:
	assert resolve_wire_type("%Message") == NamedType("message", abstract=False)
	assert resolve_wire_type("inputPeerEmpty") == NamedType("inputPeerEmpty", abstract=False)


def test_result_type_of_generic_function() -> None:
	schema = parse_schema("---functions---\ninvokeWithLayer#da9b0d0d {X:Type} layer:int query:!X = X;")
	assert resolve_result_type(schema.records[0]) == GenericPlaceholder(name="X", is_result=True)


def test_check_references_accepts_forward_references() -> None:
	schema = parse_schema(
		"holder#00000001 peer:InputPeer = Holder;\ninputPeerEmpty#7f3b18ea = InputPeer;"
	)
	shapes = build_shapes(schema.records)
	check_references(shapes, groups=["Holder", "InputPeer"], constructors=["holder", "inputPeerEmpty"])


def test_check_references_rejects_unknown_types() -> None:
	schema = parse_schema("holder#00000001 peer:InputPeer = Holder;")
	shapes = build_shapes(schema.records)
	with pytest.raises(UnresolvedTypeError, match="unknown type 'InputPeer'") as excinfo:
		check_references(shapes, groups=["Holder"], constructors=["holder"])
	assert excinfo.value.record == "holder"


def test_check_references_allows_results_without_constructors() -> None:
	schema = parse_schema("---functions---\nhttp_wait#9299359f max_delay:int wait_after:int max_wait:int = HttpWait;")
	check_references(build_shapes(schema.records), groups=[], constructors=[])


def test_check_references_still_checks_concrete_results() -> None:
	schema = parse_schema("---functions---\nget#00000001 = Vector<%Pong>;")
	with pytest.raises(UnresolvedTypeError, match="unknown constructor 'pong'"):
		check_references(build_shapes(schema.records), groups=[], constructors=[])
