"""Project a chosen occurrence date onto a recurring invite's date/time fields."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta

from core.records.heuristics import (
    matches_start_date_prefix,
    matches_start_text_prefix,
    matches_start_time_prefix,
)
from core.records.models import InviteRecord
from core.utils.dates import (
    DATE_ONLY_PATTERN,
    LABEL_PATTERN,
    TIME_ONLY_PATTERN,
    format_instant,
    format_moment,
    parse_instant,
    parse_occurrence_date,
)

logger = logging.getLogger("meetnotes.recurrence")

START_WHOLE = "apptStartWhole"
END_WHOLE = "apptEndWhole"
START_WHOLE_LOCAL = "apptStartWholeLocal"
END_WHOLE_LOCAL = "apptEndWholeLocal"

_WHOLE_INSTANT_KEYS = frozenset({START_WHOLE, END_WHOLE, START_WHOLE_LOCAL, END_WHOLE_LOCAL})


def apply_occurrence(record: InviteRecord, occurrence_date: str) -> None:
    """Move the invite's start/end onto ``occurrence_date`` in place.

    Time of day, offset and duration are kept. The absolute pair and the local pair
    are shifted independently, each with its own duration. Derived start fields and
    the end label are rewritten from the shifted instants; anything else is untouched.
    """

    record.helper_selected_occurrence_date = occurrence_date
    selected = parse_occurrence_date(occurrence_date)
    if selected is None:
        return

    _warn_if_pairs_disagree(record)

    adjusted_start = _shift_pair(record, START_WHOLE, END_WHOLE, selected)
    _shift_pair(record, START_WHOLE_LOCAL, END_WHOLE_LOCAL, selected)

    if adjusted_start is not None:
        _rewrite_start_fields(record, adjusted_start)

    if isinstance(record.appt_end_text, str):
        adjusted_end = parse_instant(record.appt_end_whole)
        if adjusted_end is not None:
            record.appt_end_text = format_moment(adjusted_end, LABEL_PATTERN)


def _shift_pair(
    record: InviteRecord, start_key: str, end_key: str, selected: date
) -> datetime | None:
    start = parse_instant(record.get(start_key))
    if start is None:
        return None
    duration = _duration(start, parse_instant(record.get(end_key)))

    adjusted_start = start.replace(year=selected.year, month=selected.month, day=selected.day)
    record.set(start_key, format_instant(adjusted_start))
    if duration is not None:
        record.set(end_key, format_instant(adjusted_start + duration))
    return adjusted_start


def _duration(start: datetime, end: datetime | None) -> timedelta | None:
    if end is None:
        return None
    try:
        return end - start
    except TypeError:
        # naive/aware mix
        return None


def _rewrite_start_fields(record: InviteRecord, adjusted_start: datetime) -> None:
    for key in record.keys():
        if key in _WHOLE_INSTANT_KEYS or not isinstance(record.get(key), str):
            continue
        if matches_start_date_prefix(key):
            record.set(key, format_moment(adjusted_start, DATE_ONLY_PATTERN))
        elif matches_start_time_prefix(key):
            record.set(key, format_moment(adjusted_start, TIME_ONLY_PATTERN))
        elif matches_start_text_prefix(key):
            record.set(key, format_moment(adjusted_start, LABEL_PATTERN))


def _warn_if_pairs_disagree(record: InviteRecord) -> None:
    start = parse_instant(record.appt_start_whole)
    start_local = parse_instant(record.appt_start_whole_local)
    if start is None or start_local is None or start.date() == start_local.date():
        return
    # Each pair takes the chosen date on its own calendar day, so the shifted pairs
    # no longer describe the same instant.
    logger.warning(
        "absolute and local start fall on different calendar days (%s, %s); "
        "shifted pairs will not describe the same instant",
        start.date().isoformat(),
        start_local.date().isoformat(),
    )
