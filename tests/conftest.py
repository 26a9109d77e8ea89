"""Shared test configuration and fixtures.

Every test gets its own SQLite file under ``tmp_path`` and a store bound to
it, so tests never share rows and never touch the configured database.
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from property_listings.api.deps import get_store
from property_listings.main import app
from property_listings.services.property_store import PropertyStore


def _sqlite_url(path: Path) -> str:
    return f"sqlite+aiosqlite:///{path}"


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def store(tmp_path: Path) -> AsyncGenerator[PropertyStore, None]:
    """Yield a store with the properties table already created."""
    property_store = PropertyStore.open(_sqlite_url(tmp_path / "properties.db"))
    await property_store.create_table()
    yield property_store
    await property_store.close()


@pytest_asyncio.fixture
async def broken_store(tmp_path: Path) -> AsyncGenerator[PropertyStore, None]:
    """Yield a store whose table was never created, so every query fails."""
    property_store = PropertyStore.open(_sqlite_url(tmp_path / "empty.db"))
    yield property_store
    await property_store.close()


# ---------------------------------------------------------------------------
# HTTP clients
# ---------------------------------------------------------------------------


async def _client_for(property_store: PropertyStore) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_store] = lambda: property_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(store: PropertyStore) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to the per-test store."""
    async for ac in _client_for(store):
        yield ac


@pytest_asyncio.fixture
async def broken_client(broken_store: PropertyStore) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient whose store fails on every query."""
    async for ac in _client_for(broken_store):
        yield ac


# ---------------------------------------------------------------------------
# Convenience fixtures
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_property(client: AsyncClient) -> dict:
    """Create and return a test property via the API."""
    response = await client.post(
        "/api/properties",
        json={
            "name": "Test Villa",
            "address": "5 Beach Rd, Byron Bay",
            "price": 950000,
            "description": "A test villa for automated tests.",
            "images": ["data:image/png;base64,iVBORw0KGgo=", "https://example.com/2.jpg"],
            "owner_name": "Olivia Chen",
            "owner_email": "olivia@example.com",
            "owner_phone": "+61 400 000 000",
            "documents": ["https://example.com/floorplan.pdf"],
            "available_for_visit": True,
        },
    )
    assert response.status_code == 200, f"Failed to create test property: {response.text}"
    return response.json()
