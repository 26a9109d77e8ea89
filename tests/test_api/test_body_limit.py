"""Tests for the request body size limit middleware."""

from collections.abc import AsyncIterator

import pytest
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient

from property_listings.middleware import BodySizeLimitMiddleware

pytestmark = pytest.mark.asyncio


def _make_app(limit: int) -> FastAPI:
    small_app = FastAPI()
    small_app.add_middleware(BodySizeLimitMiddleware, max_body_size=limit)

    @small_app.post("/echo")
    async def echo(request: Request) -> dict[str, int]:
        body = await request.body()
        return {"size": len(body)}

    @small_app.get("/ping")
    async def ping() -> dict[str, str]:
        return {"status": "ok"}

    return small_app


@pytest.fixture
def small_app() -> FastAPI:
    return _make_app(limit=16)


async def _post(app: FastAPI, **kwargs) -> tuple[int, dict]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        response = await ac.post("/echo", **kwargs)
    return response.status_code, response.json()


async def test_body_within_limit(small_app: FastAPI) -> None:
    status_code, data = await _post(small_app, content=b"x" * 16)
    assert status_code == 200
    assert data == {"size": 16}


async def test_declared_length_over_limit(small_app: FastAPI) -> None:
    status_code, data = await _post(small_app, content=b"x" * 17)
    assert status_code == 413
    assert data == {"error": "Request body too large"}


async def test_streamed_body_over_limit(small_app: FastAPI) -> None:
    """Chunked bodies carry no Content-Length and are counted as they arrive."""

    async def chunks() -> AsyncIterator[bytes]:
        for _ in range(4):
            yield b"x" * 8

    status_code, _ = await _post(small_app, content=chunks())
    assert status_code == 413


async def test_streamed_body_within_limit(small_app: FastAPI) -> None:
    async def chunks() -> AsyncIterator[bytes]:
        for _ in range(2):
            yield b"x" * 8

    status_code, data = await _post(small_app, content=chunks())
    assert status_code == 200
    assert data == {"size": 16}


async def test_bodyless_request_passes(small_app: FastAPI) -> None:
    transport = ASGITransport(app=small_app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        response = await ac.get("/ping")
    assert response.status_code == 200
