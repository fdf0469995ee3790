"""Key-name heuristics over invite records.

Producers do not agree on recurrence metadata field names, so recurrence and
start-instant fields are recognised by pattern instead of by a fixed schema. Keys are
compared lower-cased with spaces, hyphens and underscores removed.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_BOOLEAN_CLUES = frozenset({"isrecurring", "isrecurringmeeting", "recurring"})

DEFAULT_HINT_SUBSTRINGS: tuple[str, ...] = (
    "apptrecur",
    "appointmentrecur",
    "recurrence",
    "recurrencerule",
    "recurrencepattern",
    "recurrenceinfo",
    "recurrencestate",
    "recurrencetype",
    "recurringmaster",
    "apptimezonedefrecur",
)

RECURRING_MESSAGE_CLASS_MARKERS: tuple[str, ...] = ("recurring", "exception", "occurrence")

START_PREFIX = "apptstart"

_SEPARATOR_RE = re.compile(r"[\s_\-]+")


class RecurrenceClues(BaseModel):
    """Configurable clue lists used by recurrence detection.

    Values extend the built-in defaults; they never replace them.
    """

    model_config = ConfigDict(extra="forbid")

    boolean_clues: list[str] = Field(default_factory=list)
    hint_substrings: list[str] = Field(default_factory=list)

    def boolean_set(self) -> frozenset[str]:
        return DEFAULT_BOOLEAN_CLUES | {normalize_key(item) for item in self.boolean_clues}

    def hint_list(self) -> tuple[str, ...]:
        extra = tuple(normalize_key(item) for item in self.hint_substrings)
        return DEFAULT_HINT_SUBSTRINGS + tuple(item for item in extra if item)


def normalize_key(key: str) -> str:
    return _SEPARATOR_RE.sub("", key.lower())


def is_boolean_recurrence_clue(key: str, clues: Iterable[str] = DEFAULT_BOOLEAN_CLUES) -> bool:
    return normalize_key(key) in set(clues)


def is_recurrence_hint_key(key: str, hints: Iterable[str] = DEFAULT_HINT_SUBSTRINGS) -> bool:
    normalized = normalize_key(key)
    return any(hint in normalized for hint in hints)


def matches_start_date_prefix(key: str) -> bool:
    normalized = normalize_key(key)
    return normalized.startswith(START_PREFIX) and "date" in normalized


def matches_start_time_prefix(key: str) -> bool:
    normalized = normalize_key(key)
    return normalized.startswith(START_PREFIX) and "time" in normalized


def matches_start_text_prefix(key: str) -> bool:
    normalized = normalize_key(key)
    return normalized.startswith(START_PREFIX) and "text" in normalized
