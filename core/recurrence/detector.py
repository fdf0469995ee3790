"""Recurring-appointment detection."""

from __future__ import annotations

from core.records.heuristics import (
    RECURRING_MESSAGE_CLASS_MARKERS,
    RecurrenceClues,
    is_boolean_recurrence_clue,
    is_recurrence_hint_key,
)
from core.records.models import InviteRecord


def is_recurring(record: InviteRecord, clues: RecurrenceClues | None = None) -> bool:
    """Return True when any recurrence signal is found.

    Signals are checked in order and the first positive one wins:
    1. a boolean clue field set to exactly ``True``;
    2. a hint field: booleans are trusted as-is (an explicit ``False`` ends the
       search), any other non-empty value means recurring;
    3. a message class naming a recurring item, exception or occurrence.
    """

    active = clues or RecurrenceClues()
    boolean_clues = active.boolean_set()
    hints = active.hint_list()
    keys = record.keys()

    for key in keys:
        if is_boolean_recurrence_clue(key, boolean_clues) and record.get(key) is True:
            return True

    for key in keys:
        if not is_recurrence_hint_key(key, hints):
            continue
        value = record.get(key)
        if isinstance(value, bool):
            return value
        if value is not None and value != "":
            return True

    if isinstance(record.message_class, str):
        lowered = record.message_class.lower()
        if any(marker in lowered for marker in RECURRING_MESSAGE_CLASS_MARKERS):
            return True

    return False
