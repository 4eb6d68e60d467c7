# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Wire-type resolver.

Maps raw param type tokens (`int`, `flags.1?Vector<long>`, `%Message`,
`messages.Messages`, `!X`) to ResolvedType shapes:

  1. the `flags.N?` gate is parsed off by the wire-type grammar and ignored here,
  2. one `vector<...>`/`Vector<...>` level is unwrapped (nesting is rejected),
  3. the element is looked up case-insensitively in the builtin keyword table,
  4. anything else is a named reference: bare references (`%T`, lowercase
     member) pin a single constructor, boxed references name the group unless
     the caller asks for a concrete reference,
  5. the vector wrapper is re-applied.

Named references are checked against the schema separately (`check_references`)
once every group is known, so forward references resolve.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Sequence

from lark.exceptions import UnexpectedInput

from tlbind.tlc.core.errors import UnresolvedTypeError
from tlbind.tlc.core.types_core import (
	GenericPlaceholder,
	NamedType,
	ResolvedType,
	Scalar,
	ScalarKind,
	Vector,
	iter_named,
)
from tlbind.tlc.parser.ast import GenericTerm, NamedTerm, RawRecord, Term, VectorTerm, WireTypeExpr
from tlbind.tlc.parser.parser import parse_wire_type

# Builtin keywords, matched case-insensitively (`Bool`, `Int`, `True` included).
# `!x` is handled by the grammar's generic term.
SCALAR_KEYWORDS: Mapping[str, ScalarKind] = {
	"int": ScalarKind.INT,
	"long": ScalarKind.LONG,
	"bool": ScalarKind.BOOL,
	"double": ScalarKind.DOUBLE,
	"true": ScalarKind.TRUE,
	"string": ScalarKind.STRING,
	"bytes": ScalarKind.BYTES,
	"int128": ScalarKind.INT128,
	"int256": ScalarKind.INT256,
	"object": ScalarKind.OBJECT,
}


def parse_token(token: str, *, record: Optional[str] = None, loc: Any = None) -> WireTypeExpr:
	"""Parse a raw wire-type token, reporting malformed tokens against `record`."""
	try:
		return parse_wire_type(token)
	except UnexpectedInput as err:
		raise UnresolvedTypeError(
			f"cannot resolve wire type '{token}'",
			record=record,
			token=token,
			loc=loc,
		) from err


def resolve_wire_type(
	token: str,
	*,
	abstract: bool = True,
	generic_params: Sequence[str] = (),
	record: Optional[str] = None,
	loc: Any = None,
) -> ResolvedType:
	"""Resolve a raw wire-type token (any `flags.N?` gate is ignored)."""
	expr = parse_token(token, record=record, loc=loc)
	return resolve_expr(expr, abstract=abstract, generic_params=generic_params, record=record, loc=loc)


def resolve_expr(
	expr: WireTypeExpr,
	*,
	abstract: bool = True,
	generic_params: Sequence[str] = (),
	record: Optional[str] = None,
	loc: Any = None,
) -> ResolvedType:
	term = expr.term
	if isinstance(term, VectorTerm):
		if term.keyword.lower() != "vector":
			raise UnresolvedTypeError(
				f"unknown type constructor '{term.keyword}<...>' in '{expr.raw}'",
				record=record,
				token=expr.raw,
				loc=loc,
			)
		if isinstance(term.elem, VectorTerm):
			raise UnresolvedTypeError(
				f"nested vectors are not supported: '{expr.raw}'",
				record=record,
				token=expr.raw,
				loc=loc,
			)
		return Vector(_resolve_element(term.elem, abstract=abstract, generic_params=generic_params))
	return _resolve_element(term, abstract=abstract, generic_params=generic_params)


def _resolve_element(term: Term, *, abstract: bool, generic_params: Sequence[str]) -> ResolvedType:
	if isinstance(term, GenericTerm):
		return GenericPlaceholder(name=term.name)
	assert isinstance(term, NamedTerm)
	if term.namespace is None:
		kind = SCALAR_KEYWORDS.get(term.name.lower())
		if kind is not None:
			return Scalar(kind)
		if term.name in generic_params:
			return GenericPlaceholder(name=term.name, is_result=True)
	boxed = term.name[:1].isupper()
	if boxed and abstract and not term.bare:
		return NamedType(name=term.name, namespace=term.namespace, abstract=True)
	# Bare reference: the constructor carrying the decapitalized member name.
	member = term.name[:1].lower() + term.name[1:] if boxed else term.name
	return NamedType(name=member, namespace=term.namespace, abstract=False)


def resolve_result_type(record: RawRecord) -> ResolvedType:
	"""Resolve a combinator's declared result type (`X` of `{X:Type}` included)."""
	return resolve_wire_type(
		record.result_type,
		generic_params=record.generic_params,
		record=record.name,
		loc=record.loc,
	)


def check_references(
	shapes: Iterable[Any],
	*,
	groups: Iterable[str],
	constructors: Iterable[str],
) -> None:
	"""
	Verify every named reference in `shapes` is declared by the schema.

	Abstract references must name a group (result type), concrete references a
	constructor. A function may return a type no constructor produces (mtproto
	`http_wait ... = HttpWait`); that result binds to `TLObject` later, so only
	its concrete references are checked. Raises UnresolvedTypeError for the
	first dangling reference.
	"""
	group_names = set(groups)
	ctor_names = set(constructors)
	for shape in shapes:
		candidates = [(f.raw_type, f.type, False) for f in shape.fields]
		if shape.returns is not None:
			candidates.append((shape.result_type, shape.returns, True))
		for raw, ty, is_result in candidates:
			for named in iter_named(ty):
				if is_result and named.abstract:
					continue
				known = group_names if named.abstract else ctor_names
				if named.qualified not in known:
					what = "type" if named.abstract else "constructor"
					raise UnresolvedTypeError(
						f"unknown {what} '{named.qualified}' referenced by '{raw}'",
						record=shape.name,
						token=raw,
						loc=shape.loc,
					)


__all__ = [
	"SCALAR_KEYWORDS",
	"parse_token",
	"resolve_wire_type",
	"resolve_expr",
	"resolve_result_type",
	"check_references",
]
