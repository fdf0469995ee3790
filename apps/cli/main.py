"""Typer CLI entrypoint for meeting-notes."""

from __future__ import annotations

from functools import partial
from pathlib import Path
from typing import Annotated

import anyio
import typer
from anyio import to_thread

from apps.cli.io import load_record, note_target, write_note_atomic
from core.orchestrator.pipeline import create_meeting_note
from core.recurrence.prompt import OccurrencePrompt, single_answer
from core.settings.loader import load_settings
from core.utils.errors import TemplateRenderError, UnsupportedRecordError

app = typer.Typer(help="Meeting notes CLI", rich_markup_mode=None)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_UNSUPPORTED = 2
EXIT_TEMPLATE = 3
EXIT_CANCELLED = 5

OCCURRENCE_PROMPT_TEXT = "Occurrence date (YYYY-MM-DD)"


@app.callback()
def cli_callback() -> None:
    """CLI root callback to keep `meeting-notes create` as explicit command form."""


@app.command("create")
def create_command(
    record: Annotated[Path, typer.Option(..., exists=True, dir_okay=False, file_okay=True)],
    vault: Annotated[Path, typer.Option(file_okay=False, dir_okay=True)] = Path("."),
    settings: Annotated[
        Path | None, typer.Option(exists=True, dir_okay=False, file_okay=True)
    ] = None,
    occurrence_date: Annotated[
        str | None,
        typer.Option(
            "--occurrence-date",
            help="Answer the occurrence prompt of a recurring invite without asking.",
        ),
    ] = None,
) -> None:
    """Create a meeting note in the vault from one parsed invite record."""

    try:
        record_data = load_record(record)
        note_settings = load_settings(settings)
    except ValueError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_ERROR) from None

    ask = single_answer(occurrence_date) if occurrence_date is not None else _interactive_ask
    prompt = OccurrencePrompt(ask, _notify)

    try:
        output = anyio.run(create_meeting_note, record_data, note_settings, prompt, _notify)
    except UnsupportedRecordError:
        raise typer.Exit(code=EXIT_UNSUPPORTED) from None
    except TemplateRenderError:
        raise typer.Exit(code=EXIT_TEMPLATE) from None
    except Exception:  # noqa: BLE001
        # The pipeline already reported the error as a notice.
        raise typer.Exit(code=EXIT_ERROR) from None

    if output is None:
        raise typer.Exit(code=EXIT_CANCELLED)

    target = note_target(vault, output.relative_path)
    if target.exists():
        _notify(f"{target.name} already exists: opening it")
    else:
        try:
            write_note_atomic(target, output.content)
        except OSError as exc:
            typer.echo(f"ERROR: write note failed: {exc}", err=True)
            raise typer.Exit(code=EXIT_ERROR) from None
        _notify(f"New file created: {target.name}")

    typer.echo(str(target))
    raise typer.Exit(code=EXIT_OK)


async def _interactive_ask(prefill: str) -> str | None:
    try:
        return await to_thread.run_sync(
            partial(typer.prompt, OCCURRENCE_PROMPT_TEXT, default=prefill, err=True)
        )
    except typer.Abort:
        return None


def _notify(message: str) -> None:
    typer.echo(message, err=True)


def main() -> None:
    """Console script entrypoint."""

    app()


if __name__ == "__main__":
    main()
