from __future__ import annotations

import pytest

from core.utils.paths import normalize_notes_folder, normalize_path


@pytest.mark.parametrize("folder", [None, "", "   ", "/", " / "])
def test_empty_folder_means_vault_root(folder: str | None) -> None:
    assert normalize_notes_folder(folder) == ""


def test_folder_is_normalized() -> None:
    assert normalize_notes_folder(" Meetings//2024/ ") == "Meetings/2024"
    assert normalize_notes_folder("Work\\Meetings") == "Work/Meetings"


def test_normalize_path_strips_outer_slashes() -> None:
    assert normalize_path("/Meetings//Team Sync.md") == "Meetings/Team Sync.md"
