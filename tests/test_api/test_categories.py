"""Tests for category endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from lager.core.messages import t
from lager.infra.database import Database
from lager.main import create_app


class TestCategoryEndpoints:
    """Tests for /api/categories."""

    @pytest.mark.asyncio
    async def test_list_empty(self, client: AsyncClient):
        response = await client.get("/api/categories")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_create_category(self, client: AsyncClient):
        response = await client.post(
            "/api/categories", json={"name": "Getränke", "slug": "getranke"}
        )
        assert response.status_code == 201

        data = response.json()
        assert data["name"] == "Getränke"
        assert data["slug"] == "getranke"
        assert isinstance(data["id"], int)

        listed = (await client.get("/api/categories")).json()
        assert listed == [data]

    @pytest.mark.asyncio
    async def test_duplicate_slug_conflicts(self, client: AsyncClient):
        await client.post("/api/categories", json={"name": "Haushalt", "slug": "haushalt"})
        response = await client.post(
            "/api/categories", json={"name": "Haushaltswaren", "slug": "haushalt"}
        )

        assert response.status_code == 409
        assert response.json() == {"message": t("slugExists")}
        assert len((await client.get("/api/categories")).json()) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "Getränke"},
            {"slug": "getranke"},
            {"name": "  ", "slug": "getranke"},
            {"name": "Getränke", "slug": "Getränke!"},
        ],
    )
    async def test_invalid_payload_rejected(self, client: AsyncClient, payload: dict):
        response = await client.post("/api/categories", json=payload)
        assert response.status_code == 400
        assert "message" in response.json()


class TestDefaultCategories:
    """Tests for seeding of the default categories."""

    @pytest.mark.asyncio
    async def test_defaults_listed_on_fresh_database(self, database: Database):
        app = create_app(database=database, seed_defaults=True)
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            response = await ac.get("/api/categories")

        slugs = [c["slug"] for c in response.json()]
        assert slugs == ["lebensmittel", "getranke", "haushalt", "sonstiges"]
