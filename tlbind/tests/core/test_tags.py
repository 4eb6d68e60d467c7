# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from tlbind.tlc.core.tags import SKIP_TAGS, format_tag, infer_tag, parse_tag


def test_format_tag_is_uppercase_big_endian() -> None:
	assert format_tag(0x7B197DC8) == "0x7B197DC8"
	assert format_tag(0xABCDEF01) == "0xABCDEF01"


def test_format_tag_pads_to_four_bytes() -> None:
	assert format_tag(0) == "0x00000000"
	assert format_tag(0x1) == "0x00000001"


def test_format_tag_rejects_out_of_range() -> None:
	with pytest.raises(ValueError):
		format_tag(0x1_0000_0000)
	with pytest.raises(ValueError):
		format_tag(-1)


@pytest.mark.parametrize("text", ["#abcdef01", "abcdef01", "0xABCDEF01", "ABCDEF01"])
def test_parse_tag_accepts_common_spellings(text: str) -> None:
	assert parse_tag(text) == 0xABCDEF01


def test_infer_tag_matches_known_builtins() -> None:
	assert infer_tag("vector {t:Type} # [ t ] = Vector t") == 0x1CB5C415
	assert infer_tag("boolFalse = Bool") == 0xBC799737
	assert infer_tag("boolTrue = Bool") == 0x997275B5


def test_infer_tag_ignores_true_flags() -> None:
	with_flag = infer_tag("config flags:# test_mode:flags.0?true = Config")
	without_flag = infer_tag("config flags:# = Config")
	assert with_flag == without_flag


def test_skip_tags_are_the_builtin_duplicates() -> None:
	assert SKIP_TAGS == frozenset({0x1CB5C415, 0xBC799737, 0x997275B5})
