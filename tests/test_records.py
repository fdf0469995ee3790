from __future__ import annotations

import pytest

from core.records.body import drop_html_tags, ensure_body
from core.records.models import InviteRecord, ensure_appointment
from core.utils.errors import UnsupportedRecordError


def test_record_exposes_known_fields_and_keeps_extras() -> None:
    record = InviteRecord.from_mapping(
        {
            "dataType": "msg",
            "messageClass": "IPM.Appointment",
            "subject": "Team Sync",
            "apptLocation": "Room 4",
            "recipients": [{"name": "Ada"}],
        }
    )

    assert record.message_class == "IPM.Appointment"
    assert record.get("apptLocation") == "Room 4"
    assert record.keys() == ["dataType", "messageClass", "subject", "apptLocation", "recipients"]
    assert "apptLocation" in record
    assert "apptStartWhole" not in record


def test_set_routes_aliases_and_extras() -> None:
    record = InviteRecord.from_mapping({"subject": "Team Sync"})

    record.set("apptStartWhole", "2024-02-07T10:00:00+00:00")
    record.set("get", "not a method")

    assert record.appt_start_whole == "2024-02-07T10:00:00+00:00"
    assert record.get("get") == "not a method"
    context = record.to_context()
    assert context["apptStartWhole"] == "2024-02-07T10:00:00+00:00"
    assert context["get"] == "not a method"
    assert "body" not in context


def test_from_mapping_rejects_non_mappings_and_bad_types() -> None:
    with pytest.raises(UnsupportedRecordError):
        InviteRecord.from_mapping(["not", "a", "record"])  # type: ignore[arg-type]
    with pytest.raises(UnsupportedRecordError, match="invalid fields"):
        InviteRecord.from_mapping({"subject": ["Team", "Sync"]})


def test_ensure_appointment_accepts_meetings() -> None:
    ensure_appointment(InviteRecord.from_mapping({"dataType": "msg", "messageClass": "IPM.Appointment"}))


@pytest.mark.parametrize(
    ("data", "message"),
    [
        ({"dataType": "eml", "messageClass": "IPM.Appointment"}, "valid msg record"),
        ({"dataType": "msg", "messageClass": "IPM.Note"}, "not an appointment or meeting"),
    ],
)
def test_ensure_appointment_rejects_other_records(data: dict[str, str], message: str) -> None:
    with pytest.raises(UnsupportedRecordError, match=message):
        ensure_appointment(InviteRecord.from_mapping(data))


def test_ensure_body_keeps_existing_body() -> None:
    record = InviteRecord.from_mapping({"body": "Agenda", "bodyText": "ignored"})

    ensure_body(record)

    assert record.body == "Agenda"


def test_ensure_body_uses_first_usable_fallback() -> None:
    record = InviteRecord.from_mapping(
        {"body": "  ", "bodyText": "", "bodyPlainText": None, "bodyHtml": "<p>Hello&nbsp;<b>team</b></p>"}
    )

    ensure_body(record)

    assert record.body == "Hello team"


def test_ensure_body_defaults_to_empty_text() -> None:
    record = InviteRecord.from_mapping({"subject": "Team Sync"})

    ensure_body(record)

    assert record.body == ""


def test_drop_html_tags_removes_style_and_script() -> None:
    html = "<style>p { color: red; }</style><p>Line one</p>\n<script>x()</script><p>Line&amp;two</p>"

    assert drop_html_tags(html) == "Line one Line&two"
