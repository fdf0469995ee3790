from __future__ import annotations

from pathlib import Path

import pytest

from core.settings.loader import load_settings
from core.settings.models import DEFAULT_FILE_NAME_PATTERN, DEFAULT_NOTES_TEMPLATE, NoteSettings


def test_load_default_settings() -> None:
    settings = load_settings()

    assert settings.notes_folder == ""
    assert settings.invalid_filename_char_replacement == ""
    assert settings.file_name_pattern == DEFAULT_FILE_NAME_PATTERN
    assert settings.notes_template == DEFAULT_NOTES_TEMPLATE
    assert settings.recurrence.boolean_clues == []


def test_load_settings_from_file(tmp_path: Path) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text(
        """
notes_folder: Meetings
invalid_filename_char_replacement: "_"
file_name_pattern: ""
notes_template: "# {{subject}}"
recurrence:
  hint_substrings: [seriesId]
""",
        encoding="utf-8",
    )

    settings = load_settings(path)

    assert settings.notes_folder == "Meetings"
    assert settings.invalid_filename_char_replacement == "_"
    assert settings.file_name_pattern == DEFAULT_FILE_NAME_PATTERN
    assert settings.notes_template == "# {{subject}}"
    assert settings.recurrence.hint_substrings == ["seriesId"]


def test_empty_settings_file_uses_defaults(tmp_path: Path) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text("", encoding="utf-8")

    assert load_settings(path) == NoteSettings()


def test_null_values_become_empty_text() -> None:
    settings = NoteSettings.model_validate(
        {"notes_folder": None, "invalid_filename_char_replacement": None, "file_name_pattern": None}
    )

    assert settings.notes_folder == ""
    assert settings.invalid_filename_char_replacement == ""
    assert settings.file_name_pattern == DEFAULT_FILE_NAME_PATTERN


def test_load_settings_raises_for_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="Settings file not found"):
        load_settings(tmp_path / "missing.yaml")


def test_load_settings_raises_for_invalid_yaml(tmp_path: Path) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text("notes_folder: [unclosed\n", encoding="utf-8")

    with pytest.raises(ValueError, match="Invalid YAML in settings file"):
        load_settings(path)


def test_load_settings_raises_for_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text("- notes_folder\n", encoding="utf-8")

    with pytest.raises(ValueError, match="must contain a mapping"):
        load_settings(path)


def test_load_settings_raises_for_unknown_key(tmp_path: Path) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text("notes_folder: Meetings\nnote_folder: typo\n", encoding="utf-8")

    with pytest.raises(ValueError, match="Invalid settings schema"):
        load_settings(path)
