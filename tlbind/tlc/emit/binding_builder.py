# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Build the binding declaration tree from resolved shapes.

One ClassDecl per shape (schema order), one UnionDecl per group (first
appearance order), namespace groupings for qualified names, and the registry
tables. Function return types are bound against the group table here.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from tlbind.tlc.emit.ir import (
	ClassDecl,
	FieldDecl,
	MemberKind,
	ModuleDecl,
	NamespaceDecl,
	NamespaceMember,
	RegistryDecl,
	UnionDecl,
)
from tlbind.tlc.groups import GroupTable, bind_return_type
from tlbind.tlc.registry import Registry
from tlbind.tlc.shapes import Shape


def build_class_decl(shape: Shape, groups: GroupTable) -> ClassDecl:
	fields = tuple(
		FieldDecl(
			name=e.name,
			type=e.type,
			raw_type=e.raw_type,
			optional=e.optional,
			is_bitmask=e.is_bitmask,
			bitmask_field=e.bitmask_field,
			bound_bit=e.bound_bit,
			is_true_flag=e.is_true_flag,
		)
		for e in shape.entries
	)
	returns = bind_return_type(shape.returns, groups) if shape.returns is not None else None
	return ClassDecl(
		schema_name=shape.name,
		tag=shape.tag,
		kind=shape.kind,
		result_type=shape.result_type,
		fields=fields,
		all_optional=shape.all_optional,
		is_generic=shape.is_generic,
		returns=returns,
	)


def _namespaces(classes: Sequence[ClassDecl], unions: Sequence[UnionDecl]) -> tuple[NamespaceDecl, ...]:
	order: List[str] = []
	members: Dict[str, List[NamespaceMember]] = {}

	def add(ns: Optional[str], member: NamespaceMember) -> None:
		if ns is None:
			return
		if ns not in members:
			order.append(ns)
			members[ns] = []
		members[ns].append(member)

	for cls in classes:
		add(cls.namespace, NamespaceMember(schema_name=cls.schema_name, kind=MemberKind.CLASS))
	for union in unions:
		add(union.namespace, NamespaceMember(schema_name=union.schema_name, kind=MemberKind.UNION))
	return tuple(NamespaceDecl(name=ns, members=tuple(members[ns])) for ns in order)


def build_module_decl(
	shapes: Iterable[Shape],
	groups: GroupTable,
	registry: Registry,
	*,
	source: Optional[str] = None,
	layer: Optional[int] = None,
) -> ModuleDecl:
	"""Assemble the full declaration tree for one schema."""
	classes = tuple(build_class_decl(s, groups) for s in shapes)
	unions = tuple(UnionDecl(schema_name=g.name, members=g.members) for g in groups.groups)
	reg = RegistryDecl(
		constructors=tuple(c.schema_name for c in classes if not c.is_function),
		functions=tuple(c.schema_name for c in classes if c.is_function),
		generic_functions=tuple(c.schema_name for c in classes if c.is_function and c.is_generic),
		groups=tuple(u.schema_name for u in unions),
		by_tag=tuple((tag, shape.name) for tag, shape in registry.by_tag.items()),
	)
	return ModuleDecl(
		source=source,
		layer=layer,
		classes=classes,
		unions=unions,
		namespaces=_namespaces(classes, unions),
		registry=reg,
	)


__all__ = ["build_class_decl", "build_module_decl"]
