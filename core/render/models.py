"""Render pipeline output models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class NoteOutput(BaseModel):
    """Rendered meeting note, ready for the host to persist (no I/O done here)."""

    model_config = ConfigDict(extra="forbid")

    folder: str
    file_name: str
    relative_path: str
    content: str
    recurring: bool
    occurrence_date: str | None = None
