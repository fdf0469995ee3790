from __future__ import annotations

from pathlib import Path

import pytest

from apps.cli.io import load_record, note_target, write_note_atomic


def test_write_note_atomic_creates_folders_and_cleans_tmp(tmp_path: Path) -> None:
    target = tmp_path / "Meetings" / "2024" / "Team Sync.md"

    write_note_atomic(target, "---\r\ntitle: x\r\n---\r\n")

    assert target.read_bytes() == b"---\r\ntitle: x\r\n---\r\n"
    assert list(target.parent.glob("*.tmp")) == []


def test_write_note_atomic_cleans_tmp_on_failure(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    target = tmp_path / "Team Sync.md"

    def fail_replace(self: Path, destination: Path) -> Path:
        raise OSError("disk full")

    monkeypatch.setattr(Path, "replace", fail_replace)

    with pytest.raises(OSError, match="disk full"):
        write_note_atomic(target, "content")

    assert not target.exists()
    assert list(tmp_path.glob("*.tmp")) == []


def test_note_target_splits_vault_relative_path(tmp_path: Path) -> None:
    assert note_target(tmp_path, "Meetings/Team Sync.md") == tmp_path / "Meetings" / "Team Sync.md"


def test_load_record_raises_for_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "record.json"
    path.write_text("[1,", encoding="utf-8")

    with pytest.raises(ValueError, match="Invalid JSON in record file"):
        load_record(path)
