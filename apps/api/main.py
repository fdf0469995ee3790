"""FastAPI wrapper for the meeting note pipeline."""

from __future__ import annotations

import json
import logging
import time
import uuid
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, ValidationError

from core.orchestrator.pipeline import create_meeting_note
from core.recurrence.prompt import OccurrencePrompt, single_answer
from core.settings.models import DEFAULT_FILE_NAME_PATTERN, DEFAULT_NOTES_TEMPLATE, NoteSettings
from core.templates.helpers import HELPERS
from core.utils.errors import TemplateRenderError, UnsupportedRecordError

app = FastAPI(title="meeting-notes API", version="0.1.0")
logger = logging.getLogger("meetnotes.api")

REQUEST_ID_HEADER = "X-Meetnotes-Request-Id"


class NoteRequest(BaseModel):
    """Body of ``POST /v1/notes``."""

    model_config = ConfigDict(extra="forbid")

    record: Any
    occurrence_date: str | None = None
    settings: dict[str, Any] | None = None


class ApiRequestError(Exception):
    def __init__(
        self,
        *,
        status_code: int,
        error_code: str,
        message: str,
        detail: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.detail = detail or {}


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    """Ensure every response has a request id header."""

    request_id = uuid.uuid4().hex
    request.state.request_id = request_id
    try:
        response = await call_next(request)
    except Exception:  # noqa: BLE001
        _log_event(
            logging.ERROR,
            "error",
            request_id,
            error_code="INTERNAL_ERROR",
            status_code=500,
            failure_stage="middleware",
        )
        response = _error_response(
            status_code=500,
            error_code="INTERNAL_ERROR",
            message="internal server error",
            request_id=request_id,
            detail={"path": request.url.path},
        )
    response.headers.setdefault(REQUEST_ID_HEADER, request_id)
    return response


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    """Liveness endpoint."""

    return {"status": "ok"}


@app.get("/v1/meta")
async def meta_v1(request: Request) -> JSONResponse:
    """Defaults and helper names for clients building their own templates."""

    request_id = _request_id_from_request(request)
    payload = {
        "default_file_name_pattern": DEFAULT_FILE_NAME_PATTERN,
        "default_notes_template": DEFAULT_NOTES_TEMPLATE,
        "helpers": sorted(HELPERS),
        "version": app.version,
    }
    return JSONResponse(
        status_code=200,
        headers={REQUEST_ID_HEADER: request_id},
        content=payload,
    )


@app.post("/v1/notes", response_model=None)
async def create_note_v1(request: Request, body: NoteRequest) -> JSONResponse:
    """Render one meeting note from a parsed invite record; nothing is written."""

    request_started = time.perf_counter()
    request_id = _request_id_from_request(request)
    failure_stage = "validate_settings"
    notices: list[str] = []

    try:
        settings = _note_settings(body.settings)

        _log_event(
            logging.INFO,
            "start",
            request_id,
            occurrence_date_provided=body.occurrence_date is not None,
            settings_provided=body.settings is not None,
        )

        failure_stage = "pipeline"
        prompt = OccurrencePrompt(single_answer(body.occurrence_date), notices.append)
        try:
            output = await create_meeting_note(body.record, settings, prompt, notices.append)
        except UnsupportedRecordError as exc:
            raise ApiRequestError(
                status_code=422,
                error_code="UNSUPPORTED_RECORD",
                message=str(exc),
                detail={"field": "record"},
            ) from exc
        except TemplateRenderError as exc:
            raise ApiRequestError(
                status_code=422,
                error_code="TEMPLATE_RENDER_FAILED",
                message=str(exc),
                detail={"section": exc.section},
            ) from exc

        if output is None:
            raise _missing_occurrence_error(body.occurrence_date, notices)

        _log_event(
            logging.INFO,
            "done",
            request_id,
            recurring=output.recurring,
            relative_path=output.relative_path,
            total_ms=_elapsed_ms(request_started),
        )
        return JSONResponse(
            status_code=200,
            headers={REQUEST_ID_HEADER: request_id},
            content={**output.model_dump(mode="json"), "notices": notices},
        )
    except ApiRequestError as exc:
        _log_event(
            logging.ERROR,
            "error",
            request_id,
            error_code=exc.error_code,
            status_code=exc.status_code,
            failure_stage=failure_stage,
        )
        return _error_response(
            status_code=exc.status_code,
            error_code=exc.error_code,
            message=exc.message,
            request_id=request_id,
            detail=exc.detail,
        )
    except Exception as exc:  # noqa: BLE001
        _log_event(
            logging.ERROR,
            "error",
            request_id,
            error_code="INTERNAL_ERROR",
            status_code=500,
            failure_stage=failure_stage,
            error_type=type(exc).__name__,
        )
        return _error_response(
            status_code=500,
            error_code="INTERNAL_ERROR",
            message="internal server error",
            request_id=request_id,
        )


def _note_settings(raw: dict[str, Any] | None) -> NoteSettings:
    try:
        return NoteSettings.model_validate(raw or {})
    except ValidationError as exc:
        raise ApiRequestError(
            status_code=400,
            error_code="INVALID_SETTINGS",
            message="settings schema validation failed",
            detail={"field": "settings", "error": str(exc)},
        ) from exc


def _missing_occurrence_error(occurrence_date: str | None, notices: list[str]) -> ApiRequestError:
    if occurrence_date is None or not occurrence_date.strip():
        return ApiRequestError(
            status_code=409,
            error_code="OCCURRENCE_DATE_REQUIRED",
            message="recurring invite requires occurrence_date (YYYY-MM-DD)",
            detail={"field": "occurrence_date"},
        )
    return ApiRequestError(
        status_code=422,
        error_code="INVALID_OCCURRENCE_DATE",
        message="occurrence_date must use YYYY-MM-DD format",
        detail={"field": "occurrence_date", "value": occurrence_date, "notices": notices},
    )


def _request_id_from_request(request: Request) -> str:
    request_id = getattr(request.state, "request_id", None)
    if isinstance(request_id, str) and request_id:
        return request_id
    generated = uuid.uuid4().hex
    request.state.request_id = generated
    return generated


def _error_response(
    *,
    status_code: int,
    error_code: str,
    message: str,
    request_id: str,
    detail: dict[str, Any] | None = None,
) -> JSONResponse:
    payload_detail = dict(detail or {})
    payload_detail["request_id"] = request_id

    return JSONResponse(
        status_code=status_code,
        headers={REQUEST_ID_HEADER: request_id},
        content={
            "error_code": error_code,
            "message": message,
            "detail": payload_detail,
        },
    )


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def _dump_json(payload: dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, sort_keys=True, separators=(",", ":"))


def _log_event(level: int, event: str, request_id: str, **fields: Any) -> None:
    payload = {
        "event": event,
        "request_id": request_id,
        **fields,
    }
    logger.log(level, _dump_json(payload))
