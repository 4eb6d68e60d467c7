# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Resolved type shapes shared by the resolver, shape builder and emitter.

A ResolvedType is one of:
  - Scalar(kind): a builtin wire scalar (int, long, string, ...),
  - GenericPlaceholder: the type bound by a generic function at call time,
  - NamedType: a reference to a group (abstract) or a single constructor,
  - Vector(elem): a homogeneous sequence of a non-vector element.

All shapes are frozen so they can be shared freely across passes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class ScalarKind(Enum):
	"""Builtin wire scalars. Values are the schema keywords."""

	INT = "int"
	LONG = "long"
	DOUBLE = "double"
	BOOL = "bool"
	TRUE = "true"
	STRING = "string"
	BYTES = "bytes"
	INT128 = "int128"
	INT256 = "int256"
	OBJECT = "object"


@dataclass(frozen=True)
class Scalar:
	kind: ScalarKind


@dataclass(frozen=True)
class GenericPlaceholder:
	"""
	The type parameter of a generic function.

	`is_result` distinguishes the function's declared result (`= X`) from a
	param typed `!X`: the param carries a request whose result is the type
	parameter, the result *is* the type parameter.
	"""

	name: str = "X"
	is_result: bool = False


@dataclass(frozen=True)
class NamedType:
	"""
	Reference to a schema-declared type.

	abstract=True references the group (sum type) `name`; abstract=False
	references the single constructor `name`.
	"""

	name: str
	namespace: Optional[str] = None
	abstract: bool = True

	@property
	def qualified(self) -> str:
		return f"{self.namespace}.{self.name}" if self.namespace else self.name


@dataclass(frozen=True)
class Vector:
	elem: "ResolvedType"

	def __post_init__(self) -> None:
		if isinstance(self.elem, Vector):
			raise TypeError("nested vectors are not representable on the wire")


ResolvedType = Union[Scalar, GenericPlaceholder, NamedType, Vector]


def iter_named(ty: ResolvedType):
	"""Yield every NamedType reachable from `ty` (the element of a Vector included)."""
	if isinstance(ty, Vector):
		yield from iter_named(ty.elem)
	elif isinstance(ty, NamedType):
		yield ty


__all__ = [
	"ScalarKind",
	"Scalar",
	"GenericPlaceholder",
	"NamedType",
	"Vector",
	"ResolvedType",
	"iter_named",
]
