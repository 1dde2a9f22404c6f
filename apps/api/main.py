"""FastAPI wrapper for the codecheck pipeline."""

from __future__ import annotations

import importlib.metadata
import json
import logging
import os
import time
import uuid
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, ValidationError

from core.codes.grouper import DUPLICATE_MARKERS
from core.codes.validator import CODE_LENGTH
from core.orchestrator.pipeline import check_text
from core.render.messages import GREETING_MESSAGE, PING_MESSAGE, REPORT_PARSE_MODE

app = FastAPI(title="codecheck API", version="0.1.0")
logger = logging.getLogger("codecheck.api")

_DEFAULT_MAX_INPUT_CHARS = 200_000
_MAX_BYTES_PER_CHAR = 6
_BODY_ENVELOPE_BYTES = 1024
_REQUEST_ID_HEADER = "X-Codecheck-Request-Id"


class CheckRequest(BaseModel):
    """Body of one check request."""

    model_config = ConfigDict(extra="forbid")

    text: str


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
    response.headers.setdefault(_REQUEST_ID_HEADER, request_id)
    return response


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    """Liveness endpoint."""

    return {"status": "ok"}


@app.get("/v1/ping")
async def ping_v1() -> dict[str, str]:
    """Heartbeat reply for chat-style clients."""

    return {"message": PING_MESSAGE}


@app.get("/v1/start")
async def start_v1() -> dict[str, str]:
    """Greeting and usage help."""

    return {"message": GREETING_MESSAGE}


@app.get("/v1/meta")
async def meta_v1(request: Request) -> JSONResponse:
    """Metadata endpoint for bootstrap clients."""

    request_id = _request_id_from_request(request)
    if not _meta_enabled():
        return _error_response(
            status_code=404,
            error_code="NOT_FOUND",
            message="meta endpoint is disabled",
            request_id=request_id,
            detail={"path": request.url.path},
        )

    payload = {
        "code_length": CODE_LENGTH,
        "duplicate_markers": list(DUPLICATE_MARKERS),
        "max_input_chars": _max_input_chars(),
        "parse_mode": REPORT_PARSE_MODE,
        "version": app.version,
        "package_version": _package_version(),
        "commit": os.getenv("CODECHECK_COMMIT_SHA", "unknown"),
    }
    return JSONResponse(
        status_code=200,
        headers={_REQUEST_ID_HEADER: request_id},
        content=payload,
    )


@app.post("/v1/check", response_model=None)
async def check_v1(request: Request) -> JSONResponse:
    """Classify one submitted code list and return the formatted report."""

    request_started = time.perf_counter()
    request_id = _request_id_from_request(request)
    failure_stage = "init"

    try:
        failure_stage = "validate_inputs"
        max_input_chars = _max_input_chars()
        _check_declared_body_size(request, max_input_chars)
        check_request = _load_check_request(await request.body())

        input_chars = len(check_request.text)
        if input_chars > max_input_chars:
            raise ApiRequestError(
                status_code=413,
                error_code="INPUT_TOO_LARGE",
                message="text exceeds maximum size",
                detail={
                    "field": "text",
                    "input_chars": input_chars,
                    "max_input_chars": max_input_chars,
                },
            )

        _log_event(
            logging.INFO,
            "start",
            request_id,
            input_chars=input_chars,
            max_input_chars=max_input_chars,
        )

        failure_stage = "run_pipeline"
        reply = check_text(check_request.text)
        if not reply.ok or reply.output is None:
            raise ApiRequestError(
                status_code=503,
                error_code="PIPELINE_UNAVAILABLE",
                message=reply.text,
            )

        failure_stage = "respond"
        summary = reply.output.summary.model_dump(mode="json")
        _log_event(
            logging.INFO,
            "done",
            request_id,
            outcome="ok",
            http_status=200,
            summary=summary,
            timing={"total_ms": _elapsed_ms(request_started)},
        )
        return JSONResponse(
            status_code=200,
            headers={_REQUEST_ID_HEADER: request_id},
            content={
                "ok": True,
                "report": reply.text,
                "parse_mode": REPORT_PARSE_MODE,
                "summary": summary,
                "unique_codes": reply.output.grouping.unique_codes,
                "request_id": request_id,
            },
        )
    except ApiRequestError as exc:
        _log_event(
            logging.ERROR,
            "error",
            request_id,
            error_code=exc.error_code,
            status_code=exc.status_code,
            failure_stage=failure_stage,
            timing={"total_ms": _elapsed_ms(request_started)},
        )
        return _error_response(
            status_code=exc.status_code,
            error_code=exc.error_code,
            message=exc.message,
            request_id=request_id,
            detail=exc.detail,
        )


def _check_declared_body_size(request: Request, max_input_chars: int) -> None:
    raw = request.headers.get("content-length")
    if raw is None:
        return
    try:
        content_length = int(raw)
    except ValueError:
        return

    max_body_bytes = _max_body_bytes(max_input_chars)
    if content_length > max_body_bytes:
        raise ApiRequestError(
            status_code=413,
            error_code="INPUT_TOO_LARGE",
            message="request body exceeds maximum size",
            detail={
                "content_length": content_length,
                "max_body_bytes": max_body_bytes,
                "max_input_chars": max_input_chars,
            },
        )


def _load_check_request(body: bytes) -> CheckRequest:
    try:
        raw = json.loads(body.decode("utf-8"))
    except json.JSONDecodeError as exc:
        raise ApiRequestError(
            status_code=400,
            error_code="INVALID_JSON",
            message="request body must be valid JSON",
            detail={"error": str(exc)},
        ) from exc
    except UnicodeDecodeError as exc:
        raise ApiRequestError(
            status_code=400,
            error_code="INVALID_JSON",
            message="request body must be UTF-8 JSON",
        ) from exc

    if not isinstance(raw, dict):
        raise ApiRequestError(
            status_code=400,
            error_code="INVALID_JSON",
            message="request JSON must be an object",
        )

    try:
        return CheckRequest.model_validate(raw)
    except ValidationError as exc:
        raise ApiRequestError(
            status_code=400,
            error_code="INVALID_ARGUMENT",
            message="request JSON schema validation failed",
            detail={"field": "text", "error": str(exc)},
        ) from exc


def _request_id_from_request(request: Request) -> str:
    request_id = getattr(request.state, "request_id", None)
    if isinstance(request_id, str) and request_id:
        return request_id
    generated = uuid.uuid4().hex
    request.state.request_id = generated
    return generated


def _meta_enabled() -> bool:
    raw = os.getenv("CODECHECK_ENABLE_META", "1").strip().lower()
    return raw not in {"0", "false", "off", "no"}


def _max_input_chars() -> int:
    raw = os.getenv("CODECHECK_MAX_INPUT_CHARS")
    if raw is None:
        return _DEFAULT_MAX_INPUT_CHARS
    try:
        parsed = int(raw)
    except ValueError:
        return _DEFAULT_MAX_INPUT_CHARS
    return parsed if parsed > 0 else _DEFAULT_MAX_INPUT_CHARS


def _max_body_bytes(max_input_chars: int) -> int:
    # A JSON \uXXXX escape is the widest encoding of one character.
    return max_input_chars * _MAX_BYTES_PER_CHAR + _BODY_ENVELOPE_BYTES


def _package_version() -> str:
    try:
        return importlib.metadata.version("codecheck")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


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
        headers={_REQUEST_ID_HEADER: request_id},
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
