# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Binding declaration tree.

The IR records *what* the bindings contain (classes, unions, namespace
aliases, registries) in schema terms: schema names and ResolvedTypes. How those
are spelled in the target language is the printer's job, so the resolution
passes never deal with output text.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from tlbind.tlc.core.types_core import ResolvedType
from tlbind.tlc.parser.ast import RecordKind


@dataclass(frozen=True)
class FieldDecl:
	name: str
	type: ResolvedType
	raw_type: str
	optional: bool = False
	is_bitmask: bool = False
	bitmask_field: Optional[str] = None
	bound_bit: Optional[int] = None
	is_true_flag: bool = False


@dataclass(frozen=True)
class ClassDecl:
	"""One constructor or function binding."""

	schema_name: str
	tag: int
	kind: RecordKind
	result_type: str
	fields: Tuple[FieldDecl, ...]  # every entry, bitmask fields included, schema order
	all_optional: bool = True
	is_generic: bool = False
	returns: Optional[ResolvedType] = None  # bound return type (functions only)

	@property
	def namespace(self) -> Optional[str]:
		ns, sep, _member = self.schema_name.rpartition(".")
		return ns if sep else None

	@property
	def is_function(self) -> bool:
		return self.kind is RecordKind.FUNCTION

	@property
	def params(self) -> Tuple[FieldDecl, ...]:
		"""Constructor parameters: the value-bearing fields."""
		return tuple(f for f in self.fields if not f.is_bitmask)

	@property
	def conditions(self) -> Tuple[FieldDecl, ...]:
		return tuple(f for f in self.fields if f.optional)


@dataclass(frozen=True)
class UnionDecl:
	"""A result-type group exposed as a sum type over its constructors."""

	schema_name: str
	members: Tuple[str, ...]

	@property
	def namespace(self) -> Optional[str]:
		ns, sep, _member = self.schema_name.rpartition(".")
		return ns if sep else None


class MemberKind(Enum):
	CLASS = "class"
	UNION = "union"


@dataclass(frozen=True)
class NamespaceMember:
	schema_name: str
	kind: MemberKind


@dataclass(frozen=True)
class NamespaceDecl:
	"""Public grouping for namespace-qualified declarations (`ns.member`)."""

	name: str
	members: Tuple[NamespaceMember, ...]


@dataclass(frozen=True)
class RegistryDecl:
	constructors: Tuple[str, ...] = ()
	functions: Tuple[str, ...] = ()
	generic_functions: Tuple[str, ...] = ()
	groups: Tuple[str, ...] = ()
	by_tag: Tuple[Tuple[int, str], ...] = ()


@dataclass(frozen=True)
class ModuleDecl:
	source: Optional[str]
	layer: Optional[int]
	classes: Tuple[ClassDecl, ...]
	unions: Tuple[UnionDecl, ...]
	namespaces: Tuple[NamespaceDecl, ...]
	registry: RegistryDecl

	@property
	def has_generic(self) -> bool:
		return any(c.is_generic for c in self.classes)


__all__ = [
	"FieldDecl",
	"ClassDecl",
	"UnionDecl",
	"MemberKind",
	"NamespaceMember",
	"NamespaceDecl",
	"RegistryDecl",
	"ModuleDecl",
]
