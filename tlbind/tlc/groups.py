# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Sum-type grouper.

Constructors sharing a declared result type form a Group (the sum type the
bindings expose for abstract references). Membership comes from the result-type
string alone, compared namespace-qualified, and keeps schema encounter order.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from tlbind.tlc.core.types_core import NamedType, ResolvedType, Scalar, ScalarKind, Vector
from tlbind.tlc.shapes import Shape, normalize_group_name


@dataclass(frozen=True)
class Group:
	name: str
	members: Tuple[str, ...]

	@property
	def namespace(self) -> Optional[str]:
		ns, sep, _member = self.name.rpartition(".")
		return ns if sep else None

	@property
	def member(self) -> str:
		return self.name.rpartition(".")[2]


@dataclass(frozen=True)
class GroupTable:
	groups: Tuple[Group, ...] = ()

	@property
	def by_name(self) -> Mapping[str, Group]:
		return MappingProxyType({g.name: g for g in self.groups})

	def get(self, name: str) -> Optional[Group]:
		return self.by_name.get(normalize_group_name(name))


def group_constructors(shapes: Iterable[Shape]) -> GroupTable:
	"""Fold constructors (functions are ignored) into an ordered GroupTable."""
	order: List[str] = []
	members: Dict[str, List[str]] = {}
	for shape in shapes:
		if shape.is_function:
			continue
		key = shape.result_group
		if key not in members:
			order.append(key)
			members[key] = []
		members[key].append(shape.name)
	return GroupTable(groups=tuple(Group(name=k, members=tuple(members[k])) for k in order))


def bind_return_type(resolved: ResolvedType, groups: GroupTable) -> ResolvedType:
	"""
	Bind a function's return type against the group table.

	An abstract reference to a group with exactly one member collapses to that
	constructor (also as a vector element). Multi-member groups stay abstract.
	A type no constructor produces has no union to name and binds to `Object`.
	"""
	if isinstance(resolved, Vector):
		return Vector(bind_return_type(resolved.elem, groups))
	if not isinstance(resolved, NamedType) or not resolved.abstract:
		return resolved
	group = groups.get(resolved.qualified)
	if group is None:
		return Scalar(ScalarKind.OBJECT)
	if len(group.members) != 1:
		return resolved
	ns, sep, member = group.members[0].rpartition(".")
	return NamedType(name=member, namespace=ns if sep else None, abstract=False)


__all__ = ["Group", "GroupTable", "group_constructors", "bind_return_type", "normalize_group_name"]
