"""Typed wrapper around a parsed invite record.

The invite parser emits a flat mapping whose keys depend on the producer. Fields the
core reads or writes by name get typed accessors; everything else is kept verbatim in
the pydantic extra side-table so the heuristics and templates can still see it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.utils.errors import UnsupportedRecordError

MSG_DATA_TYPE = "msg"
APPOINTMENT_MESSAGE_CLASS = "IPM.Appointment"


class InviteRecord(BaseModel):
    """One parsed meeting invite with known fields plus passthrough extras."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, validate_assignment=True)

    data_type: str | None = Field(default=None, alias="dataType")
    message_class: str | None = Field(default=None, alias="messageClass")
    subject: str | None = None
    body: str | None = None
    body_text: Any = Field(default=None, alias="bodyText")
    body_plain_text: Any = Field(default=None, alias="bodyPlainText")
    body_html: Any = Field(default=None, alias="bodyHtml")
    rtf_compressed: Any = Field(default=None, alias="rtfCompressed")
    appt_start_whole: str | None = Field(default=None, alias="apptStartWhole")
    appt_end_whole: str | None = Field(default=None, alias="apptEndWhole")
    appt_start_whole_local: str | None = Field(default=None, alias="apptStartWholeLocal")
    appt_end_whole_local: str | None = Field(default=None, alias="apptEndWholeLocal")
    appt_end_text: str | None = Field(default=None, alias="apptEndText")
    helper_current_dt: str | None = Field(default=None, alias="helper_currentDT")
    helper_selected_occurrence_date: str | None = Field(
        default=None, alias="helper_selectedOccurrenceDate"
    )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> InviteRecord:
        """Validate a raw parser mapping; schema violations count as unsupported input."""

        if not isinstance(data, Mapping):
            raise UnsupportedRecordError("Invite record must be a mapping of field names to values.")
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise UnsupportedRecordError(f"Invite record has invalid fields: {exc}") from exc

    def keys(self) -> list[str]:
        """Return present keys: known fields that are set, then passthrough extras."""

        present = [key for key, name in _FIELD_BY_KEY.items() if getattr(self, name) is not None]
        return present + list(self.model_extra or {})

    def get(self, key: str, default: Any = None) -> Any:
        name = _FIELD_BY_KEY.get(key)
        if name is not None:
            value = getattr(self, name)
            return default if value is None else value
        return (self.model_extra or {}).get(key, default)

    def set(self, key: str, value: Any) -> None:
        name = _FIELD_BY_KEY.get(key)
        if name is not None:
            setattr(self, name, value)
            return
        # Extras are written to the side-table directly so keys such as "get" cannot
        # shadow methods.
        self.__pydantic_extra__[key] = value

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def to_context(self) -> dict[str, Any]:
        """Plain mapping keyed by the parser's field names, for rendering."""

        return self.model_dump(by_alias=True, exclude_none=True)


_FIELD_BY_KEY: dict[str, str] = {
    (field.alias or name): name for name, field in InviteRecord.model_fields.items()
}


def ensure_appointment(record: InviteRecord) -> None:
    """Reject records that are not meeting or appointment invites."""

    if record.data_type != MSG_DATA_TYPE:
        raise UnsupportedRecordError(
            "Cannot process the invite. The parser did not read it as a valid msg record."
        )
    if record.message_class != APPOINTMENT_MESSAGE_CLASS:
        raise UnsupportedRecordError(
            "Cannot process the invite. It is a valid msg record but not an appointment or meeting."
        )
