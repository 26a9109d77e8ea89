"""Tests for application-level routes, lifespan, and error envelopes."""

import logging
from pathlib import Path

import pytest
from httpx import AsyncClient

from property_listings.config import settings
from property_listings.main import app
from property_listings.services.property_store import PropertyStore

pytestmark = pytest.mark.asyncio


async def test_root(client: AsyncClient) -> None:
    response = await client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["service"] == settings.app_name
    assert data["version"] == settings.app_version
    assert data["docs"] == "/docs"


async def test_health(client: AsyncClient) -> None:
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": settings.app_name}


async def test_unknown_route_uses_error_envelope(client: AsyncClient) -> None:
    response = await client.get("/api/unknown")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


async def test_oversized_body_rejected(client: AsyncClient) -> None:
    response = await client.post(
        "/api/properties",
        content=b"x" * (settings.max_request_body_bytes + 1),
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 413
    assert response.json() == {"error": "Request body too large"}

    # The handler never ran
    listing = await client.get("/api/properties")
    assert listing.json() == []


async def test_body_just_under_limit_accepted(client: AsyncClient) -> None:
    image = "data:image/png;base64," + "A" * (5 * 1024 * 1024)
    response = await client.post(
        "/api/properties",
        json={"name": "Big Image", "address": "1 Wide St", "price": 10, "images": [image]},
    )
    assert response.status_code == 200
    assert response.json()["images"] == [image]


async def test_lifespan_opens_and_closes_store(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    db_path = tmp_path / "lifespan.db"
    monkeypatch.setattr(settings, "database_url", f"sqlite:///{db_path}")

    async with app.router.lifespan_context(app):
        store = app.state.store
        assert isinstance(store, PropertyStore)
        assert await store.get_all() == []

    assert db_path.exists()


async def test_content_length_logged_only_for_property_posts(
    client: AsyncClient, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.INFO, logger="property_listings.middleware"):
        await client.post("/health", json={})
        assert "Content-Length" not in caplog.text

        await client.post(
            "/api/properties",
            json={"name": "Villa A", "address": "1 Lake Rd", "price": 100000},
        )
        assert "Incoming POST /api/properties Content-Length" in caplog.text
