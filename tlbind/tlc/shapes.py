# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Shape builder: one resolved Shape per schema record.

A Shape keeps every param in schema order (`entries`), bitmask params included
because the declared-shape descriptor lists them; `fields` is the value-bearing
subset that generated constructors accept. Wire encoding is positional, so no
pass may reorder entries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from tlbind.tlc.core.errors import UnresolvedTypeError
from tlbind.tlc.core.tags import SKIP_TAGS
from tlbind.tlc.core.types_core import GenericPlaceholder, ResolvedType, Scalar, ScalarKind, Vector
from tlbind.tlc.parser.ast import Located, RawRecord, RecordKind
from tlbind.tlc.type_resolver import parse_token, resolve_expr, resolve_result_type

MAX_FLAG_BIT = 31


def normalize_group_name(result_type: str) -> str:
	"""Collapse whitespace so `Vector  t` and `Vector t` key the same group."""
	return " ".join(result_type.split())


@dataclass(frozen=True)
class ResolvedField:
	name: str
	type: ResolvedType
	raw_type: str
	optional: bool = False
	bitmask_field: Optional[str] = None  # gating bitmask param, when optional
	bound_bit: Optional[int] = None
	is_bitmask: bool = False

	@property
	def is_true_flag(self) -> bool:
		"""Optional `true` field: presence is carried by the bit alone."""
		return self.optional and self.type == Scalar(ScalarKind.TRUE)


@dataclass(frozen=True)
class Shape:
	tag: int
	name: str
	kind: RecordKind
	result_type: str
	entries: Tuple[ResolvedField, ...]
	is_generic: bool = False  # a param or the result is bound by the caller
	returns: Optional[ResolvedType] = None  # functions only; before group collapse
	loc: Optional[Located] = None

	@property
	def namespace(self) -> Optional[str]:
		ns, sep, _member = self.name.rpartition(".")
		return ns if sep else None

	@property
	def member(self) -> str:
		return self.name.rpartition(".")[2]

	@property
	def result_group(self) -> str:
		"""Key of the group this constructor belongs to."""
		return normalize_group_name(self.result_type)

	@property
	def is_function(self) -> bool:
		return self.kind is RecordKind.FUNCTION

	@property
	def fields(self) -> Tuple[ResolvedField, ...]:
		return tuple(e for e in self.entries if not e.is_bitmask)

	@property
	def optional_fields(self) -> Tuple[ResolvedField, ...]:
		return tuple(f for f in self.fields if f.optional)

	@property
	def bitmask_fields(self) -> Tuple[ResolvedField, ...]:
		return tuple(e for e in self.entries if e.is_bitmask)

	@property
	def all_optional(self) -> bool:
		"""True when the constructor can be called without arguments."""
		return all(f.optional for f in self.fields)

	def declared_descriptor(self) -> Tuple[Tuple[str, ResolvedType, str], ...]:
		"""Ordered `(name, resolved type, raw wire type)` for every entry."""
		return tuple((e.name, e.type, e.raw_type) for e in self.entries)


def build_shape(record: RawRecord) -> Shape:
	"""
	Resolve a record's params into a Shape.

	Bitmask params (`flags:#`, `flags2:#`) become bitmask entries. Every other
	param is resolved; a `flags.N?` gate marks it optional and must point at a
	bitmask param declared earlier in the same record.
	"""
	entries: List[ResolvedField] = []
	bitmasks: set[str] = set()
	for param in record.params:
		if param.is_bitmask:
			bitmasks.add(param.name)
			entries.append(
				ResolvedField(
					name=param.name,
					type=Scalar(ScalarKind.INT),
					raw_type=param.wire_type,
					is_bitmask=True,
				)
			)
			continue
		expr = parse_token(param.wire_type, record=record.name, loc=record.loc)
		ty = resolve_expr(expr, record=record.name, loc=record.loc)
		cond = expr.condition
		if cond is not None:
			if cond.field not in bitmasks:
				raise UnresolvedTypeError(
					f"param '{param.name}' is gated by undeclared bitmask field '{cond.field}'",
					record=record.name,
					token=param.wire_type,
					loc=record.loc,
				)
			if cond.bit > MAX_FLAG_BIT:
				raise UnresolvedTypeError(
					f"param '{param.name}' uses bit {cond.bit} of a 32-bit bitmask",
					record=record.name,
					token=param.wire_type,
					loc=record.loc,
				)
		entries.append(
			ResolvedField(
				name=param.name,
				type=ty,
				raw_type=param.wire_type,
				optional=cond is not None,
				bitmask_field=cond.field if cond is not None else None,
				bound_bit=cond.bit if cond is not None else None,
			)
		)
	returns = resolve_result_type(record) if record.kind is RecordKind.FUNCTION else None
	is_generic = any(_is_generic(e.type) for e in entries) or (returns is not None and _is_generic(returns))
	return Shape(
		tag=record.tag,
		name=record.name,
		kind=record.kind,
		result_type=record.result_type,
		entries=tuple(entries),
		is_generic=is_generic,
		returns=returns,
		loc=record.loc,
	)


def _is_generic(ty: ResolvedType) -> bool:
	if isinstance(ty, Vector):
		return _is_generic(ty.elem)
	return isinstance(ty, GenericPlaceholder)


def build_shapes(records: Iterable[RawRecord], *, skip_tags: Iterable[int] = SKIP_TAGS) -> Tuple[Shape, ...]:
	"""Build shapes for every record whose tag is not skipped, in schema order."""
	skipped = frozenset(skip_tags)
	return tuple(build_shape(r) for r in records if r.tag not in skipped)


__all__ = ["ResolvedField", "Shape", "build_shape", "build_shapes", "normalize_group_name", "MAX_FLAG_BIT"]
