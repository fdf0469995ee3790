"""Data models for note templates."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TemplateSections:
    """A note template split into its front-matter block and Markdown body.

    ``front_matter`` keeps both ``---`` marker lines; it is None when the template has
    no leading front-matter block.
    """

    front_matter: str | None
    body: str
