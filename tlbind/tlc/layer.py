# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Schema layer (version) marker handling.

The schema announces its layer in a comment (`// LAYER 181`). The value is
propagated into a `LAYER = <n>` constant kept in another source file; nothing
else in that file is touched.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

from tlbind.tlc.core.artifacts import write_atomic
from tlbind.tlc.core.errors import MissingVersionMarker

_LAYER_MARKER = re.compile(r"//\s*LAYER\s+([0-9]+)")
_LAYER_CONSTANT = re.compile(r"LAYER = [0-9]+", re.IGNORECASE)


def extract_layer(text: str) -> Optional[int]:
	"""Return the layer announced by the schema, or None when there is no marker."""
	m = _LAYER_MARKER.search(text)
	if m is None:
		return None
	return int(m.group(1))


def require_layer(text: str) -> int:
	"""Like `extract_layer` but raises MissingVersionMarker when absent."""
	layer = extract_layer(text)
	if layer is None:
		raise MissingVersionMarker()
	return layer


def replace_layer_constant(source: str, layer: int) -> tuple[str, bool]:
	"""Rewrite the first `LAYER = <n>` in `source`; returns (text, replaced)."""
	new_source, count = _LAYER_CONSTANT.subn(f"LAYER = {layer}", source, count=1)
	return new_source, count == 1


def layer_patch_bytes(path: Path, layer: int) -> Optional[bytes]:
	"""
	Contents of `path` with its `LAYER = <n>` constant set to `layer`.

	Returns None when the file has no such constant. Nothing is written; raises
	OSError when the file cannot be read and UnicodeDecodeError when it is not
	UTF-8.
	"""
	source = path.read_bytes().decode("utf-8")
	new_source, replaced = replace_layer_constant(source, layer)
	if not replaced:
		return None
	return new_source.encode("utf-8")


def patch_layer_constant(path: Path, layer: int) -> bool:
	"""
	Update the `LAYER = <n>` constant in `path`.

	Returns False (and leaves the file untouched) when the file has no such
	constant. The file is rewritten atomically and byte-for-byte otherwise.
	"""
	patched = layer_patch_bytes(path, layer)
	if patched is None:
		return False
	if patched != path.read_bytes():
		write_atomic(path, patched)
	return True


__all__ = ["extract_layer", "require_layer", "replace_layer_constant", "layer_patch_bytes", "patch_layer_constant"]
