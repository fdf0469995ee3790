"""Note settings model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.records.heuristics import RecurrenceClues

DEFAULT_FILE_NAME_PATTERN = (
    "{{#helper_dateFormat}}{{apptStartWhole}}|YYYY-MM-DD HH.mm{{/helper_dateFormat}} {{subject}}"
)

DEFAULT_NOTES_TEMPLATE = """---
title: {{subject}}
subtitle: meeting notes
date: {{#helper_dateFormat}}{{apptStartWhole}}|L LT{{/helper_dateFormat}}
meeting: 'true'
meeting-location: {{apptLocation}}
meeting-recipients:
{{#recipients}}
  - {{name}}
{{/recipients}}
meeting-invite: {{body}}
---
"""


class NoteSettings(BaseModel):
    """User settings for note creation."""

    model_config = ConfigDict(extra="forbid")

    notes_folder: str = ""
    invalid_filename_char_replacement: str = ""
    file_name_pattern: str = DEFAULT_FILE_NAME_PATTERN
    notes_template: str = DEFAULT_NOTES_TEMPLATE
    recurrence: RecurrenceClues = Field(default_factory=RecurrenceClues)

    @field_validator("file_name_pattern", mode="before")
    @classmethod
    def _default_empty_pattern(cls, value: object) -> object:
        if value is None or value == "":
            return DEFAULT_FILE_NAME_PATTERN
        return value

    @field_validator("notes_folder", "invalid_filename_char_replacement", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return "" if value is None else value
