"""Mustache rendering of note templates and file names."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import chevron

from core.records.models import InviteRecord
from core.render.escaping import (
    escape_markdown,
    escape_yaml,
    make_filename_escape,
    replace_illegal_filename_chars,
)
from core.templates.front_matter import split_template
from core.templates.helpers import inject_helpers
from core.templates.scope import Escape, RenderScope, escaping, render_tokens
from core.utils.errors import TemplateRenderError, TemplateSection

RecordLike = InviteRecord | Mapping[str, Any]


def render_template(template: str, record: RecordLike) -> str:
    """Render a note template: front matter with YAML escaping, body with Markdown escaping."""

    sections = split_template(template)
    scope = inject_helpers(_context(record))

    output = ""
    if sections.front_matter is not None:
        output += _render_section(sections.front_matter, scope, escape_yaml, "front_matter")
    if sections.body:
        output += _render_section(sections.body, scope, escape_markdown, "body")
    return output


def render_filename(pattern: str, record: RecordLike, replacement: str) -> str:
    """Render a file name (without extension) that is safe as a single path segment."""

    scope = inject_helpers(_context(record))
    rendered = _render_section(pattern, scope, make_filename_escape(replacement), "filename")
    file_name = replace_illegal_filename_chars(rendered, replacement).strip()
    if not file_name:
        raise TemplateRenderError("Rendered file name is empty", section="filename")
    return file_name


def _render_section(
    template: str, scope: RenderScope, escape: Escape, section: TemplateSection
) -> str:
    try:
        tokens = render_tokens(template)
    except (chevron.ChevronError, IndexError) as exc:
        # IndexError: chevron's tokenizer on an empty tag ("{{}}")
        raise TemplateRenderError(f"Invalid {section} template: {exc}", section=section) from exc

    try:
        with escaping(escape):
            return chevron.render(tokens, scope, partials_path=None)
    except TemplateRenderError as exc:
        if exc.section is None:
            exc.section = section
        raise


def _context(record: RecordLike) -> Mapping[str, Any]:
    if isinstance(record, InviteRecord):
        return record.to_context()
    return record
