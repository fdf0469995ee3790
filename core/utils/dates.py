"""Date parsing and formatting shared by the occurrence logic and render helpers.

Instants coming out of the invite parser are free-form strings (ISO 8601 from most
producers, RFC 2822 from some). They are parsed leniently with dateutil and keep
whatever offset they carried; naive values stay naive.

Display patterns use moment-style tokens (``YYYY-MM-DD HH.mm``, ``L LT``) because that
is what users write in their templates. Arrow understands the plain tokens; the
locale tokens (``L``, ``LT``...) are expanded here to their English forms first.
"""

from __future__ import annotations

import re
from datetime import date, datetime

import arrow
from dateutil import parser as dateutil_parser

OCCURRENCE_DATE_FORMAT = "%Y-%m-%d"
OCCURRENCE_DATE_PATTERN = "YYYY-MM-DD"

DATE_ONLY_PATTERN = "YYYY-MM-DD"
TIME_ONLY_PATTERN = "HH:mm"
LABEL_PATTERN = "L LT"

_OCCURRENCE_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_LOCALE_TOKEN_RE = re.compile(r"\[[^\]]*\]|LTS|LT|L{1,4}|l{1,4}")
_LOCALE_TOKENS = {
    "LT": "h:mm A",
    "LTS": "h:mm:ss A",
    "L": "MM/DD/YYYY",
    "LL": "MMMM D, YYYY",
    "LLL": "MMMM D, YYYY h:mm A",
    "LLLL": "dddd, MMMM D, YYYY h:mm A",
    "l": "M/D/YYYY",
    "ll": "MMM D, YYYY",
    "lll": "MMM D, YYYY h:mm A",
    "llll": "ddd, MMM D, YYYY h:mm A",
}


def parse_instant(value: object) -> datetime | None:
    """Parse an instant string leniently; return None when it is not a valid instant."""

    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return dateutil_parser.parse(value.strip())
    except (ValueError, OverflowError):
        return None


def format_instant(value: datetime) -> str:
    """Format an instant in canonical form, e.g. ``2024-02-07T10:00:00+00:00``."""

    return value.isoformat(timespec="seconds")


def format_moment(value: datetime, pattern: str) -> str:
    """Format an instant with a moment-style display pattern."""

    return arrow.get(value).format(expand_locale_tokens(pattern))


def expand_locale_tokens(pattern: str) -> str:
    """Replace moment locale tokens with their English token sequences.

    Bracketed literals (``[at]``) are left for arrow to unwrap.
    """

    def _replace(match: re.Match[str]) -> str:
        token = match.group(0)
        return _LOCALE_TOKENS.get(token, token)

    return _LOCALE_TOKEN_RE.sub(_replace, pattern)


def parse_occurrence_date(text: str) -> date | None:
    """Strictly parse ``YYYY-MM-DD``; anything else (including ``2024-2-7``) is None."""

    if not _OCCURRENCE_DATE_RE.fullmatch(text):
        return None
    try:
        return datetime.strptime(text, OCCURRENCE_DATE_FORMAT).date()
    except ValueError:
        return None


def format_occurrence_date(value: date) -> str:
    return value.strftime(OCCURRENCE_DATE_FORMAT)
