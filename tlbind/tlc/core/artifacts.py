# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Output artifact helpers: deterministic JSON and atomic file replacement.

Artifacts are rendered fully in memory first; `write_atomic` then swaps them
into place so a failed run never leaves a half-written file behind.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any


def canonical_json_bytes(obj: Any) -> bytes:
	"""
	Render JSON deterministically.

	Rules:
	- UTF-8
	- stable key ordering
	- two-space indentation and a trailing newline (artifacts are reviewed in diffs)
	"""
	return (json.dumps(obj, sort_keys=True, ensure_ascii=False, indent=2) + "\n").encode("utf-8")


def write_atomic(path: Path, data: bytes) -> None:
	"""Write `data` to `path` through a sibling temp file and `os.replace`."""
	path.parent.mkdir(parents=True, exist_ok=True)
	tmp = path.with_name(path.name + f".tmp.{os.getpid()}")
	try:
		tmp.write_bytes(data)
		os.replace(tmp, path)
	finally:
		if tmp.exists():
			tmp.unlink()


__all__ = ["canonical_json_bytes", "write_atomic"]
