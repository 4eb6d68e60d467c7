# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Runtime base classes for generated TL bindings.

Generated classes only carry data: the schema descriptors below are class
attributes filled in by the generator, and instance values live in plain
attributes. `_values_()` pairs every `_params_` entry (bitmask entries
included) with its current value, so the two always line up positionally.

Optional fields are absent when `None`. A `true` flag is absent when `None` or
`False`; its presence is carried by the bitmask bit alone.
"""

from __future__ import annotations

import typing
from typing import Any, ClassVar, Dict, Tuple

R = typing.TypeVar("R")

# Wire type of bitmask entries in `_params_`.
BITMASK_WIRE_TYPE = "#"


class TLObject:
	"""Base of every generated constructor (and, through TLRequest, function)."""

	_name_: ClassVar[str] = ""
	_tag_: ClassVar[int] = 0
	_result_: ClassVar[str] = ""
	# (schema name, annotation text, raw wire type), schema order.
	_params_: ClassVar[Tuple[Tuple[str, str, str], ...]] = ()
	# (attribute, bitmask field, bit, is true flag) for every optional field.
	_conditions_: ClassVar[Tuple[Tuple[str, str, int, bool], ...]] = ()

	def _values_(self) -> Tuple[Tuple[str, Any], ...]:
		return ()

	def _bitmask_(self, field: str) -> int:
		"""Compute the bitmask `field` from the presence of the fields it gates."""
		mask = 0
		for attr, bitmask, bit, is_true_flag in self._conditions_:
			if bitmask != field:
				continue
			value = getattr(self, attr)
			if value is None or (is_true_flag and value is False):
				continue
			mask |= 1 << bit
		return mask

	def to_dict(self) -> Dict[str, Any]:
		"""
		Plain-data view: `{"_": name, field: value, ...}`.

		Bitmask entries are omitted (they are derived); nested objects and lists
		are converted recursively.
		"""
		out: Dict[str, Any] = {"_": self._name_}
		wire_types = {name: raw for name, _ann, raw in self._params_}
		for name, value in self._values_():
			if wire_types.get(name) == BITMASK_WIRE_TYPE:
				continue
			out[name] = _plain(value)
		return out

	def __eq__(self, other: object) -> bool:
		if type(other) is not type(self):
			return NotImplemented
		return self._values_() == other._values_()  # type: ignore[attr-defined]

	def __hash__(self) -> int:
		# list-valued fields make the object unhashable, like a tuple holding a list
		return hash((type(self), self._values_()))

	def __repr__(self) -> str:
		parts = ", ".join(
			f"{name}={value!r}" for name, value in self._values_() if value is not None
		)
		return f"{type(self).__name__}({parts})"


class TLRequest(TLObject, typing.Generic[R]):
	"""Base of generated functions; `R` is the type the call returns."""


def _plain(value: Any) -> Any:
	if isinstance(value, TLObject):
		return value.to_dict()
	if isinstance(value, list):
		return [_plain(v) for v in value]
	return value


__all__ = ["TLObject", "TLRequest", "BITMASK_WIRE_TYPE"]
