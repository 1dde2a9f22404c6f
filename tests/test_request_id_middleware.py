from __future__ import annotations

import json

import httpx
import pytest
from starlette.requests import Request

from apps.api.main import app, request_id_middleware


def _build_request(path: str) -> Request:
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "method": "GET",
        "path": path,
        "raw_path": path.encode("utf-8"),
        "query_string": b"",
        "headers": [],
        "client": ("testclient", 50000),
        "server": ("testserver", 80),
        "scheme": "http",
    }

    async def receive() -> dict[str, object]:
        return {"type": "http.request", "body": b"", "more_body": False}

    return Request(scope, receive)


@pytest.mark.anyio
async def test_request_id_header_present_for_404() -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.get("/__does_not_exist__")

    assert response.status_code == 404
    assert response.headers["X-Codecheck-Request-Id"]


@pytest.mark.anyio
async def test_request_id_header_present_for_405() -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.post("/healthz")

    assert response.status_code == 405
    assert response.headers["X-Codecheck-Request-Id"]


@pytest.mark.anyio
async def test_request_ids_differ_between_requests() -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        first = await client.get("/healthz")
        second = await client.get("/healthz")

    assert first.headers["X-Codecheck-Request-Id"] != second.headers["X-Codecheck-Request-Id"]


@pytest.mark.anyio
async def test_middleware_turns_unhandled_exception_into_internal_error() -> None:
    request = _build_request("/boom")

    async def call_next(_request: Request):
        raise RuntimeError("boom")

    response = await request_id_middleware(request, call_next)

    assert response.status_code == 500
    request_id = response.headers.get("X-Codecheck-Request-Id")
    assert request_id

    payload = json.loads(response.body.decode("utf-8"))
    assert payload["error_code"] == "INTERNAL_ERROR"
    assert payload["detail"]["request_id"] == request_id
    assert payload["detail"]["path"] == "/boom"
