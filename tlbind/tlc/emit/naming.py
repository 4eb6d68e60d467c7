# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Python spelling of schema names.

Canonical (module-level) names are derived once from the schema name:
  constructor/function  `inputPeerEmpty`        -> `InputPeerEmpty`
                        `messages.sendMessage`  -> `messages_SendMessage`
  group                 `InputPeer`             -> `TypeInputPeer`
                        `messages.Messages`     -> `messages_TypeMessages`
Namespace aliases (`messages.SendMessage`) are obtained by stripping the
`<ns>_` prefix from the canonical name, never by re-deriving them.
"""

from __future__ import annotations

import keyword
from typing import Optional

# Names that cannot be used as parameters of generated `__init__` methods.
_RESERVED = frozenset({"self"})


def escape(name: str) -> str:
	"""Append `_` to names that are Python keywords (or otherwise reserved)."""
	if keyword.iskeyword(name) or name in _RESERVED:
		return name + "_"
	return name


def pascal_case(member: str) -> str:
	"""`inputPeerEmpty` -> `InputPeerEmpty`, `p_q_inner_data` -> `PQInnerData`."""
	return "".join(part[:1].upper() + part[1:] for part in member.split("_") if part)


def split_name(schema_name: str) -> tuple[Optional[str], str]:
	ns, sep, member = schema_name.rpartition(".")
	return (ns if sep else None), member


def _qualify(ns: Optional[str], base: str) -> str:
	return f"{ns}_{base}" if ns else base


def class_name(schema_name: str) -> str:
	ns, member = split_name(schema_name)
	return _qualify(ns, escape(pascal_case(member)))


def union_name(schema_name: str) -> str:
	ns, member = split_name(schema_name)
	return _qualify(ns, "Type" + pascal_case(member))


def namespace_name(ns: str) -> str:
	return escape(ns)


def alias_name(canonical: str, ns: str) -> str:
	"""Public name of `canonical` inside its namespace holder."""
	prefix = f"{ns}_"
	if not canonical.startswith(prefix):
		raise ValueError(f"'{canonical}' is not declared in namespace '{ns}'")
	return canonical[len(prefix):]


def attr_name(field: str) -> str:
	return escape(field)


__all__ = [
	"escape",
	"pascal_case",
	"split_name",
	"class_name",
	"union_name",
	"namespace_name",
	"alias_name",
	"attr_name",
]
