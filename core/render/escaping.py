"""Section escapers for note rendering.

Each escaper is applied to every interpolated value of its section. They are
best-effort and deterministic; none of them is a full YAML or Markdown encoder.
"""

from __future__ import annotations

import re

from core.templates.scope import Escape

_LINE_BREAK_RE = re.compile(r"\r\n?|\n")
_YAML_STRUCTURAL_RE = re.compile(r"[:#\[\]{},]")
_YAML_QUOTED_CHARS_RE = re.compile(r'["\\]')

_MARKDOWN_CHARS_RE = re.compile(r"[\\`*_\[\]{}<>()#!|^]")
_MARKDOWN_DIGRAPHS = (
    ("%%", r"\%\%"),
    ("~~", r"\~\~"),
    ("==", r"\=\="),
)

_ILLEGAL_FILENAME_CHARS_RE = re.compile(r'[*"\\<>:|?]')


def escape_yaml(value: str) -> str:
    """Escape a front-matter value.

    Multi-line values become a block literal indented by two spaces, values with YAML
    flow/comment characters are double-quoted, anything else passes through.
    """

    if _LINE_BREAK_RE.search(value):
        return "|\n  " + _LINE_BREAK_RE.sub("\n  ", value)
    if _YAML_STRUCTURAL_RE.search(value):
        return '"' + _YAML_QUOTED_CHARS_RE.sub(lambda match: "\\" + match.group(0), value) + '"'
    return value


def escape_markdown(value: str) -> str:
    """Backslash-escape Markdown formatting characters and digraphs."""

    escaped = _MARKDOWN_CHARS_RE.sub(lambda match: "\\" + match.group(0), value)
    for digraph, replacement in _MARKDOWN_DIGRAPHS:
        escaped = escaped.replace(digraph, replacement)
    return escaped


def make_filename_escape(replacement: str) -> Escape:
    """Escaper replacing path separators inside interpolated values."""

    def escape(value: str) -> str:
        return value.replace("/", replacement)

    return escape


def replace_illegal_filename_chars(value: str, replacement: str) -> str:
    return _ILLEGAL_FILENAME_CHARS_RE.sub(lambda _: replacement, value)
