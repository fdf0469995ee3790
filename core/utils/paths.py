"""Vault-relative path normalization."""

from __future__ import annotations

import re
import unicodedata

_SLASH_RUN_RE = re.compile(r"/+")


def normalize_path(path: str) -> str:
    """Forward slashes only, no duplicate/leading/trailing slashes, NFC text."""

    normalized = path.replace("\\", "/").replace("\u00a0", " ").replace("\u202f", " ")
    normalized = _SLASH_RUN_RE.sub("/", normalized).strip("/")
    return unicodedata.normalize("NFC", normalized)


def normalize_notes_folder(folder: str | None) -> str:
    """Normalize the configured notes folder; empty text means the vault root."""

    trimmed = (folder or "").strip()
    if trimmed in {"", "/"}:
        return ""
    return normalize_path(trimmed)
