from __future__ import annotations

from core.records.heuristics import RecurrenceClues
from core.records.models import InviteRecord
from core.recurrence.detector import is_recurring


def _record(**fields: object) -> InviteRecord:
    base = {"dataType": "msg", "messageClass": "IPM.Appointment", "subject": "Team Sync"}
    base.update(fields)
    return InviteRecord.from_mapping(base)


def test_plain_record_is_not_recurring() -> None:
    assert is_recurring(_record()) is False


def test_boolean_clue_true_wins_over_everything() -> None:
    record = _record(isRecurring=True, apptRecur=False)

    assert is_recurring(record) is True


def test_boolean_clue_must_be_exactly_true() -> None:
    assert is_recurring(_record(isRecurring="true")) is False
    assert is_recurring(_record(isRecurring=1)) is False


def test_hint_with_value_means_recurring() -> None:
    assert is_recurring(_record(recurrencePattern="Weekly on Wednesday")) is True


def test_hint_with_empty_value_is_ignored() -> None:
    assert is_recurring(_record(recurrencePattern="")) is False


def test_explicit_false_hint_is_trusted() -> None:
    record = InviteRecord.from_mapping(
        {"apptRecur": False, "messageClass": "IPM.Schedule.Meeting.Recurring"}
    )

    assert is_recurring(record) is False


def test_message_class_signal() -> None:
    for message_class in ("IPM.Schedule.Meeting.Recurring", "IPM.OLE.CLASS.{x}.Exception"):
        record = InviteRecord.from_mapping({"messageClass": message_class})
        assert is_recurring(record) is True


def test_configured_hint_substrings_extend_detection() -> None:
    record = _record(series_id="abc-123")

    assert is_recurring(record) is False
    assert is_recurring(record, RecurrenceClues(hint_substrings=["seriesId"])) is True
