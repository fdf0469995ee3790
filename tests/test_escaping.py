from __future__ import annotations

import pytest

from core.render.escaping import (
    escape_markdown,
    escape_yaml,
    make_filename_escape,
    replace_illegal_filename_chars,
)


def test_yaml_plain_value_passes_through() -> None:
    assert escape_yaml("Team Sync") == "Team Sync"


@pytest.mark.parametrize("value", ["Room 4: North", "#general", "[draft]", "{x}", "a, b"])
def test_yaml_structural_characters_are_quoted(value: str) -> None:
    assert escape_yaml(value) == f'"{value}"'


def test_yaml_quoted_value_escapes_quotes_and_backslashes() -> None:
    assert escape_yaml('say "hi", C:\\tmp') == '"say \\"hi\\", C:\\\\tmp"'


@pytest.mark.parametrize("value", ["Line 1\nLine 2", "Line 1\r\nLine 2", "Line 1\rLine 2"])
def test_yaml_multiline_value_becomes_block_literal(value: str) -> None:
    assert escape_yaml(value) == "|\n  Line 1\n  Line 2"


def test_yaml_multiline_wins_over_quoting() -> None:
    assert escape_yaml("a: 1\nb: 2") == "|\n  a: 1\n  b: 2"


def test_markdown_escapes_single_characters() -> None:
    assert escape_markdown("*bold* _x_ [a](b) <t> #h !|^ `c` {d} \\") == (
        "\\*bold\\* \\_x\\_ \\[a\\]\\(b\\) \\<t\\> \\#h \\!\\|\\^ \\`c\\` \\{d\\} \\\\"
    )


def test_markdown_escapes_digraphs_only_in_pairs() -> None:
    assert escape_markdown("%%note%% ~~old~~ ==hi== 5% ~ =") == (
        "\\%\\%note\\%\\% \\~\\~old\\~\\~ \\=\\=hi\\=\\= 5% ~ ="
    )


def test_escapers_are_deterministic() -> None:
    value = "Room 4: *North* == %%"

    assert escape_markdown(value) == escape_markdown(value)
    assert escape_yaml(value) == escape_yaml(value)


def test_filename_escape_replaces_slashes() -> None:
    assert make_filename_escape("_")("Q1/Q2 Review") == "Q1_Q2 Review"
    assert make_filename_escape("")("a/b") == "ab"


def test_illegal_filename_characters_are_replaced() -> None:
    assert replace_illegal_filename_chars('a*b"c\\d<e>f:g|h?i', "-") == "a-b-c-d-e-f-g-h-i"
    assert replace_illegal_filename_chars("Re: Sync?", "") == "Re Sync"
