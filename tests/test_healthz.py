from __future__ import annotations

import httpx
import pytest

from apps.api.main import app
from core.render.messages import GREETING_MESSAGE, PING_MESSAGE


@pytest.mark.anyio
async def test_healthz_returns_ok_and_request_id() -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert response.headers["X-Codecheck-Request-Id"]


@pytest.mark.anyio
async def test_ping_returns_heartbeat_message() -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.get("/v1/ping")

    assert response.status_code == 200
    assert response.json() == {"message": PING_MESSAGE}


@pytest.mark.anyio
async def test_start_returns_greeting() -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.get("/v1/start")

    assert response.status_code == 200
    assert response.json() == {"message": GREETING_MESSAGE}
    assert "Send me a list of codes." in response.json()["message"]
