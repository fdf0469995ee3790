"""Named section helpers available to every template.

A helper is used as a mustache section, e.g.
``{{#helper_dateFormat}}{{apptStartWhole}}|YYYY-MM-DD{{/helper_dateFormat}}``. It receives
the raw section text plus a function rendering a template in the current scope.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from core.templates.scope import Helper, RenderScope, SectionRender
from core.utils.dates import format_instant, format_moment, parse_instant
from core.utils.errors import TemplateRenderError

_LEADING_WORD_RE = re.compile(r"\w*")


def first_word(text: str, render: SectionRender) -> str:
    """Leading run of word characters of the rendered section."""

    match = _LEADING_WORD_RE.match(render(text))
    return match.group(0) if match else ""


def date_format(text: str, render: SectionRender) -> str:
    """Render ``<template>|<pattern>`` and reformat the result as a date.

    Without a pattern the canonical instant form is used. A blank value renders as
    empty text; a value that is not a date is an error.
    """

    inner, _, pattern = text.partition("|")
    value = render(inner).strip()
    if not value:
        return ""
    instant = parse_instant(value)
    if instant is None:
        raise TemplateRenderError(f"Cannot format {value!r} as a date")
    return format_moment(instant, pattern) if pattern else format_instant(instant)


HELPERS: Mapping[str, Helper] = MappingProxyType(
    {
        "helper_firstWord": first_word,
        "helper_dateFormat": date_format,
    }
)


def inject_helpers(context: Mapping[str, Any]) -> RenderScope:
    """Expose the helper registry on the record and on every nested record in it."""

    return RenderScope(context, HELPERS)
