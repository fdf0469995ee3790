"""CLI I/O helpers for record loading and atomic note writing."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any


def load_record(path: Path) -> Any:
    """Read one parsed invite record from a JSON file.

    Shape checks are left to the core, which reports non-mapping records as unsupported.
    """

    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in record file: {path}") from exc


def note_target(vault: Path, relative_path: str) -> Path:
    """Resolve a vault-relative note path on disk."""

    return vault.joinpath(*relative_path.split("/"))


def write_note_atomic(path: Path, content: str) -> None:
    """Write a note using a temporary file + replace, creating parent folders."""

    path.parent.mkdir(parents=True, exist_ok=True)

    fd, raw_tmp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=f"{path.name}.",
        suffix=".tmp",
    )
    os.close(fd)
    tmp_path = Path(raw_tmp_path)

    try:
        with tmp_path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)
        tmp_path.replace(path)
    except Exception:
        if tmp_path.exists():
            tmp_path.unlink(missing_ok=True)
        raise
