"""Front-matter detection for note templates."""

from __future__ import annotations

import re

from core.templates.models import TemplateSections

# "---" on the first line, the shortest span up to the next line that is exactly "---",
# then a line break or the end of the template. Line breaks may be \n, \r\n or \r.
_FRONT_MATTER_RE = re.compile(r"\A---(?:\r\n?|\n).*?(?:\r\n?|\n)---(?:\Z|\r\n?|\n)", re.DOTALL)


def split_template(template: str) -> TemplateSections:
    """Split ``template`` into front matter and body; without front matter it is all body."""

    match = _FRONT_MATTER_RE.match(template)
    if match is None:
        return TemplateSections(front_matter=None, body=template)
    return TemplateSections(front_matter=match.group(0), body=template[match.end() :])
