# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Registry builder.

Two lookup tables over the resolved shapes:
  - by_tag: constructor tag -> Shape, used to dispatch decoding,
  - by_name: qualified schema name -> Shape (constructors and functions).

Skipped tags never reach this pass (shapes are built without them).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping

from tlbind.tlc.core.errors import SchemaParseError
from tlbind.tlc.core.tags import format_tag
from tlbind.tlc.shapes import Shape


@dataclass(frozen=True)
class Registry:
	by_tag: Mapping[int, Shape] = field(default_factory=lambda: MappingProxyType({}))
	by_name: Mapping[str, Shape] = field(default_factory=lambda: MappingProxyType({}))

	def identifier_to_name(self) -> Dict[str, str]:
		"""Formatted tag -> schema name, in registration order."""
		return {format_tag(tag): shape.name for tag, shape in self.by_tag.items()}


def build_registry(shapes: Iterable[Shape]) -> Registry:
	"""
	Build the tag and name tables in schema order.

	Duplicate tags (among constructors and functions alike) or duplicate names
	make dispatch ambiguous and are reported as schema errors.
	"""
	by_tag: Dict[int, Shape] = {}
	by_name: Dict[str, Shape] = {}
	seen_tags: Dict[int, Shape] = {}
	for shape in shapes:
		prior = seen_tags.get(shape.tag)
		if prior is not None:
			raise SchemaParseError(
				f"duplicate tag {format_tag(shape.tag)} on '{shape.name}'",
				loc=shape.loc,
				notes=[f"first declared by '{prior.name}'"],
			)
		seen_tags[shape.tag] = shape
		if shape.name in by_name:
			raise SchemaParseError(f"duplicate combinator name '{shape.name}'", loc=shape.loc)
		by_name[shape.name] = shape
		if not shape.is_function:
			by_tag[shape.tag] = shape
	return Registry(by_tag=MappingProxyType(by_tag), by_name=MappingProxyType(by_name))


def registry_to_json(registry: Registry, *, layer: int | None = None) -> Dict[str, Any]:
	"""
	Schema dump for tooling: definitions keyed by name plus the tag table.

	Each definition is `[tag, [[param, wire type], ...], result type]`.
	"""
	definitions: Dict[str, Any] = {}
	for name, shape in registry.by_name.items():
		definitions[name] = [
			format_tag(shape.tag),
			[[e.name, e.raw_type] for e in shape.entries],
			shape.result_type,
		]
	return {
		"layer": layer,
		"definitions": definitions,
		"identifier_to_name": registry.identifier_to_name(),
	}


__all__ = ["Registry", "build_registry", "registry_to_json"]
