# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Parsed schema records.

The parser validates the schema once and produces these frozen records; every
later pass works on them only. Wire types stay as raw strings on `RawParam`
(they are re-parsed into `WireTypeExpr` by the resolver) because the raw text is
also part of the declared-shape descriptor.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union


class RecordKind(Enum):
	CONSTRUCTOR = "constructor"
	FUNCTION = "function"


BITMASK_WIRE_TYPE = "#"


@dataclass(frozen=True)
class Located:
	line: int
	column: int


@dataclass(frozen=True)
class RawParam:
	name: str
	wire_type: str

	@property
	def is_bitmask(self) -> bool:
		"""`flags:#`-style synthetic bitmask field (a bit source, not a value field)."""
		return self.name.startswith("flags") and self.wire_type == BITMASK_WIRE_TYPE


@dataclass(frozen=True)
class RawRecord:
	tag: int
	name: str
	result_type: str
	params: Tuple[RawParam, ...]
	kind: RecordKind = RecordKind.CONSTRUCTOR
	generic_params: Tuple[str, ...] = ()
	loc: Optional[Located] = None
	tag_inferred: bool = False

	@property
	def namespace(self) -> Optional[str]:
		ns, sep, _member = self.name.rpartition(".")
		return ns if sep else None

	@property
	def member(self) -> str:
		return self.name.rpartition(".")[2]


@dataclass(frozen=True)
class RawSchema:
	records: Tuple[RawRecord, ...] = ()
	source: Optional[str] = None

	@property
	def constructors(self) -> Tuple[RawRecord, ...]:
		return tuple(r for r in self.records if r.kind is RecordKind.CONSTRUCTOR)

	@property
	def functions(self) -> Tuple[RawRecord, ...]:
		return tuple(r for r in self.records if r.kind is RecordKind.FUNCTION)


# Wire-type expressions (one param type token).


@dataclass(frozen=True)
class Condition:
	"""`flags.N?` gate: `field` is the bitmask param, `bit` the bit index."""

	field: str
	bit: int


@dataclass(frozen=True)
class NamedTerm:
	name: str
	namespace: Optional[str] = None
	bare: bool = False  # `%Type` form


@dataclass(frozen=True)
class GenericTerm:
	name: str


@dataclass(frozen=True)
class VectorTerm:
	keyword: str
	elem: "Term"


Term = Union[NamedTerm, GenericTerm, VectorTerm]


@dataclass(frozen=True)
class WireTypeExpr:
	term: Term
	condition: Optional[Condition] = None
	raw: str = field(default="", compare=False)


__all__ = [
	"RecordKind",
	"BITMASK_WIRE_TYPE",
	"Located",
	"RawParam",
	"RawRecord",
	"RawSchema",
	"Condition",
	"NamedTerm",
	"GenericTerm",
	"VectorTerm",
	"Term",
	"WireTypeExpr",
]
