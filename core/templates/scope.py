"""Render scope handed to chevron.

Chevron always HTML-escapes ``{{name}}`` output, which is wrong for both YAML front
matter and Markdown. Templates are therefore tokenized up front with every escaped
variable turned into an unescaped one, and text values are wrapped so that they are
escaped when chevron stringifies them, using the escaper active for the section being
rendered. Triple-mustache lookups are routed to a raw view of the same data.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

from chevron.tokenizer import tokenize

Escape = Callable[[str], str]
SectionRender = Callable[[str], str]
Helper = Callable[[str, SectionRender], str]
Token = tuple[str, str]

RAW_PREFIX = "&"


def identity_escape(value: str) -> str:
    return value


_active_escape: ContextVar[Escape] = ContextVar("meetnotes_active_escape", default=identity_escape)


@contextmanager
def escaping(escape: Escape) -> Iterator[None]:
    """Make ``escape`` the escaper for text values stringified inside the block."""

    token = _active_escape.set(escape)
    try:
        yield
    finally:
        _active_escape.reset(token)


def render_tokens(template: str) -> list[Token]:
    """Tokenize ``template`` so chevron emits every variable without HTML escaping.

    Raises ``chevron.ChevronError`` for malformed templates.
    """

    tokens: list[Token] = []
    for tag, key in tokenize(template):
        if tag == "variable":
            tokens.append(("no escape", key))
        elif tag == "no escape" and key != "." and not key.startswith(RAW_PREFIX):
            tokens.append(("no escape", RAW_PREFIX + key))
        else:
            tokens.append((tag, key))
    return tokens


class _Text:
    """Text value escaped lazily with the active escaper."""

    __slots__ = ("value",)

    def __init__(self, value: str) -> None:
        self.value = value

    def __str__(self) -> str:
        return _active_escape.get()(self.value)

    def __bool__(self) -> bool:
        return bool(self.value)

    def __repr__(self) -> str:
        return f"_Text({self.value!r})"


class _Flag:
    """Boolean rendered as ``true``/``false``; falsy flags still skip sections."""

    __slots__ = ("_flag",)

    # chevron renders falsy values as empty text unless this is set
    _CHEVRON_return_scope_when_falsy = True

    def __init__(self, flag: bool) -> None:
        self._flag = flag

    def __str__(self) -> str:
        return "true" if self._flag else "false"

    def __bool__(self) -> bool:
        return self._flag

    def __repr__(self) -> str:
        return f"_Flag({self._flag!r})"


class RenderScope(Mapping[str, Any]):
    """Read-only view of record data with section helpers available at every level.

    Absent keys raise ``KeyError`` so chevron falls through to outer scopes and finally
    renders them as empty text.
    """

    def __init__(
        self, data: Mapping[str, Any], helpers: Mapping[str, Helper], *, raw: bool = False
    ) -> None:
        self._data = data
        self._helpers = helpers
        self._raw = raw

    def __getitem__(self, key: str) -> Any:
        if key.startswith(RAW_PREFIX):
            return self._as_raw()[key[len(RAW_PREFIX) :]]
        helper = self._helpers.get(key)
        if helper is not None:
            return _bind_helper(helper)
        return self._wrap(self._data[key])

    def __iter__(self) -> Iterator[str]:
        yield from self._data
        yield from (name for name in self._helpers if name not in self._data)

    def __len__(self) -> int:
        return len(set(self._data) | set(self._helpers))

    def _as_raw(self) -> RenderScope:
        if self._raw:
            return self
        return RenderScope(self._data, self._helpers, raw=True)

    def _wrap(self, value: Any) -> Any:
        if isinstance(value, bool):
            return _Flag(value)
        if isinstance(value, str):
            return value if self._raw else _Text(value)
        if isinstance(value, Mapping):
            return RenderScope(value, self._helpers, raw=self._raw)
        if isinstance(value, (list, tuple)):
            return [self._wrap(item) for item in value]
        return value


def _bind_helper(helper: Helper) -> Callable[[str, Callable[..., str]], str]:
    """Adapt a helper to chevron's lambda protocol.

    The inner template is rendered unescaped in the caller's scope chain; the helper
    result is escaped for the enclosing section.
    """

    def section(text: str, render: Callable[..., str]) -> str:
        escape = _active_escape.get()
        with escaping(identity_escape):
            value = helper(text, lambda template: render(render_tokens(template)))
        return escape(value)

    return section
