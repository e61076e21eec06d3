"""Shared fixtures: in-memory database, store and API client."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from lager.infra.database import Database
from lager.main import create_app
from lager.services.inventory_store import InventoryStore
from lager.services.product_lookup import ProductLookupClient


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Fresh in-memory SQLite database with the schema created."""
    db = Database(url="sqlite+aiosqlite://", echo=False)
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def store(database: Database) -> InventoryStore:
    """Store without default categories."""
    return InventoryStore(database, seed_defaults=False)


@pytest.fixture
def seeded_store(database: Database) -> InventoryStore:
    """Store that seeds the default categories on first use."""
    return InventoryStore(database, seed_defaults=True)


@pytest.fixture
def lookup() -> AsyncMock:
    """Lookup client that finds nothing unless a test says otherwise."""
    mock = AsyncMock(spec=ProductLookupClient)
    mock.lookup.return_value = None
    return mock


@pytest.fixture
async def client(database: Database, lookup: AsyncMock) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against an app without default categories."""
    app = create_app(database=database, lookup=lookup, seed_defaults=False)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
