"""Orchestration pipeline for meeting note creation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from core.records.body import ensure_body
from core.records.models import InviteRecord, ensure_appointment
from core.recurrence.detector import is_recurring
from core.recurrence.occurrence import apply_occurrence
from core.recurrence.prompt import Notify, OccurrencePrompt
from core.render.models import NoteOutput
from core.render.note_renderer import render_filename, render_template
from core.settings.models import NoteSettings
from core.utils.dates import format_instant
from core.utils.paths import normalize_notes_folder, normalize_path

logger = logging.getLogger("meetnotes.pipeline")

CANCELLED_NOTICE = "Meeting note creation cancelled."
NOTE_EXTENSION = ".md"


async def create_meeting_note(
    record_data: Mapping[str, Any],
    settings: NoteSettings,
    prompt: OccurrencePrompt,
    notify: Notify,
    now: datetime | None = None,
) -> NoteOutput | None:
    """Execute validate -> recurrence -> render for one parsed invite.

    Returns None when the user cancels the occurrence prompt. Every failure emits one
    error notice and is re-raised for the caller to log.
    """

    try:
        return await _create(record_data, settings, prompt, notify, now)
    except Exception as exc:
        notify(f"Error ({type(exc).__name__}):\n{exc}")
        raise


async def _create(
    record_data: Mapping[str, Any],
    settings: NoteSettings,
    prompt: OccurrencePrompt,
    notify: Notify,
    now: datetime | None,
) -> NoteOutput | None:
    record = InviteRecord.from_mapping(record_data)
    ensure_appointment(record)

    current = now or datetime.now().astimezone()
    record.helper_current_dt = format_instant(current)
    ensure_body(record)

    recurring = is_recurring(record, settings.recurrence)
    occurrence_date: str | None = None
    if recurring:
        logger.info("recurring invite detected; asking for occurrence date")
        occurrence_date = await prompt.resolve(today=current.date())
        if occurrence_date is None:
            notify(CANCELLED_NOTICE)
            logger.info("note creation cancelled at occurrence prompt")
            return None
        apply_occurrence(record, occurrence_date)

    folder = normalize_notes_folder(settings.notes_folder)
    file_name = render_filename(
        settings.file_name_pattern, record, settings.invalid_filename_char_replacement
    )
    content = render_template(settings.notes_template, record)
    relative_path = normalize_path(f"{folder}/{file_name}{NOTE_EXTENSION}")

    logger.debug("rendered note %s (%d chars)", relative_path, len(content))
    return NoteOutput(
        folder=folder,
        file_name=file_name,
        relative_path=relative_path,
        content=content,
        recurring=recurring,
        occurrence_date=occurrence_date,
    )
