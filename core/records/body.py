"""Body text fallback for invites whose plain ``body`` field is empty."""

from __future__ import annotations

import re
from html import unescape

from core.records.models import InviteRecord

BODY_FALLBACK_KEYS: tuple[str, ...] = ("bodyText", "bodyPlainText", "bodyHtml", "rtfCompressed")

_STYLE_SCRIPT_RE = re.compile(r"<(style|script)[^>]*?>.*?</\1>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")


def ensure_body(record: InviteRecord) -> None:
    """Fill ``body`` from the first usable fallback field, or set it to empty text."""

    if isinstance(record.body, str) and record.body.strip():
        return

    for key in BODY_FALLBACK_KEYS:
        candidate = record.get(key)
        if isinstance(candidate, str) and candidate.strip():
            record.body = drop_html_tags(candidate) if "<" in candidate else candidate
            return

    record.body = ""


def drop_html_tags(html: str) -> str:
    """Reduce HTML markup to a single line of plain text."""

    text = _STYLE_SCRIPT_RE.sub("", html)
    text = _TAG_RE.sub("", text)
    text = unescape(text)
    return _WHITESPACE_RE.sub(" ", text).strip()
