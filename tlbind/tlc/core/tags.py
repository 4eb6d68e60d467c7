# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Wire tag helpers.

Tags are 32-bit combinator identifiers. Their canonical text form is the
big-endian byte representation in uppercase hex with a `0x` prefix, always
four bytes wide, which is how tags appear on the wire and in generated code.
"""

from __future__ import annotations

import re
import struct
import zlib

# Known duplicate/builtin tags skipped entirely: vector, boolFalse, boolTrue.
SKIP_TAGS: frozenset[int] = frozenset({0x1CB5C415, 0xBC799737, 0x997275B5})

_TAG_STRUCT = struct.Struct(">I")
_TRUE_FLAG_PARAM = re.compile(r" \w+:flags\d*\.\d+\?true")


def format_tag(tag: int) -> str:
	"""Render `tag` as `0x` + 8 uppercase hex digits in big-endian byte order."""
	if not 0 <= tag <= 0xFFFFFFFF:
		raise ValueError(f"tag out of 32-bit range: {tag}")
	return "0x" + _TAG_STRUCT.pack(tag).hex().upper()


def parse_tag(text: str) -> int:
	"""Parse a `#abcdef01` / `abcdef01` / `0xABCDEF01` tag literal."""
	raw = text.lstrip("#")
	if raw[:2].lower() == "0x":
		raw = raw[2:]
	value = int(raw, 16)
	if value > 0xFFFFFFFF:
		raise ValueError(f"tag out of 32-bit range: {text}")
	return value


def infer_tag(canonical: str) -> int:
	"""
	Compute the tag TL assigns to a combinator declared without `#tag`.

	`canonical` is the whitespace-normalized combinator text without the tag or
	trailing `;` (e.g. `vector {t:Type} # [ t ] = Vector t`). TL hashes it with
	CRC32 after folding `bytes` into `string`, dropping angle and curly
	brackets, and removing `true`-typed flag params.
	"""
	text = (
		canonical.replace(":bytes ", ":string ")
		.replace("?bytes ", "?string ")
		.replace("<", " ")
		.replace(">", "")
		.replace("{", "")
		.replace("}", "")
	)
	text = _TRUE_FLAG_PARAM.sub("", text)
	return zlib.crc32(text.encode("utf-8")) & 0xFFFFFFFF


__all__ = ["SKIP_TAGS", "format_tag", "parse_tag", "infer_tag"]
