"""Interactive resolution of the occurrence date for a recurring invite."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import date

from core.utils.dates import (
    OCCURRENCE_DATE_PATTERN,
    format_occurrence_date,
    parse_occurrence_date,
)
from core.utils.errors import PromptInFlightError

AskUser = Callable[[str], Awaitable[str | None]]
Notify = Callable[[str], None]

INVALID_DATE_NOTICE = f"Please enter the date in {OCCURRENCE_DATE_PATTERN} format."


class OccurrencePrompt:
    """Single-shot prompt loop around an external ``ask`` capability.

    ``ask`` receives the value to pre-fill and resolves to the submitted text, or to
    None when the user cancels. Only one resolution may be pending at a time.
    """

    def __init__(self, ask: AskUser, notify: Notify) -> None:
        self._ask = ask
        self._notify = notify
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    async def resolve(self, today: date | None = None) -> str | None:
        """Return a canonical ``YYYY-MM-DD`` date, or None when the user cancels."""

        if self._in_flight:
            raise PromptInFlightError("An occurrence date prompt is already open.")
        self._in_flight = True
        try:
            return await self._loop(today or date.today())
        finally:
            self._in_flight = False

    async def _loop(self, today: date) -> str | None:
        current_value = format_occurrence_date(today)
        while True:
            answer = await self._ask(current_value)
            if answer is None:
                return None
            trimmed = answer.strip()
            if not trimmed:
                return None
            if parse_occurrence_date(trimmed) is not None:
                return trimmed
            self._notify(INVALID_DATE_NOTICE)
            current_value = trimmed


def single_answer(answer: str | None) -> AskUser:
    """Ask capability that submits ``answer`` once and cancels every later prompt."""

    pending = [answer]

    async def ask(_prefill: str) -> str | None:
        return pending.pop() if pending else None

    return ask


async def resolve_occurrence_date(
    ask: AskUser, notify: Notify, today: date | None = None
) -> str | None:
    """Run one occurrence prompt to completion."""

    return await OccurrencePrompt(ask, notify).resolve(today)
