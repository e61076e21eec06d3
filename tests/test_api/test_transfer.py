"""Tests for export/import endpoints."""

import pytest
from httpx import AsyncClient

from lager.core.messages import t

SNAPSHOT = {
    "categories": [
        {"id": 7, "name": "Getränke", "slug": "getranke"},
        {"id": 9, "name": "Haushalt", "slug": "haushalt"},
    ],
    "products": [
        {
            "id": 42,
            "name": "Cola",
            "barcode": "4001",
            "image": None,
            "quantity": 6,
            "categoryId": 7,
        },
        {
            "id": 43,
            "name": "Seife",
            "barcode": "9001",
            "image": "http://img/seife.jpg",
            "quantity": 0,
            "categoryId": 9,
        },
    ],
}


class TestExport:
    """Tests for GET /api/export."""

    @pytest.mark.asyncio
    async def test_export_empty(self, client: AsyncClient):
        response = await client.get("/api/export")
        assert response.status_code == 200
        assert response.json() == {"categories": [], "products": []}

    @pytest.mark.asyncio
    async def test_export_contains_everything(self, client: AsyncClient):
        category = (
            await client.post("/api/categories", json={"name": "Getränke", "slug": "getranke"})
        ).json()
        product = (
            await client.post(
                "/api/products",
                json={"name": "Cola", "barcode": "4001", "categoryId": category["id"]},
            )
        ).json()

        data = (await client.get("/api/export")).json()
        assert data["categories"] == [category]
        assert data["products"] == [product]


class TestImport:
    """Tests for POST /api/import."""

    @pytest.mark.asyncio
    async def test_import_replaces_and_preserves_ids(self, client: AsyncClient):
        await client.post("/api/categories", json={"name": "Alt", "slug": "alt"})
        await client.post("/api/products", json={"name": "Alt", "barcode": "1111"})

        response = await client.post("/api/import", json=SNAPSHOT)
        assert response.status_code == 200
        assert response.json() == {"message": t("importSuccess")}

        exported = (await client.get("/api/export")).json()
        assert exported == SNAPSHOT

        product = (await client.get("/api/products/42")).json()
        assert product["barcode"] == "4001"

    @pytest.mark.asyncio
    async def test_export_import_roundtrip(self, client: AsyncClient):
        await client.post("/api/import", json=SNAPSHOT)
        exported = (await client.get("/api/export")).json()

        await client.post("/api/import", json=exported)
        assert (await client.get("/api/export")).json() == exported

    @pytest.mark.asyncio
    async def test_new_ids_continue_after_import(self, client: AsyncClient):
        await client.post("/api/import", json=SNAPSHOT)

        created = (
            await client.post("/api/products", json={"name": "Neu", "barcode": "5555"})
        ).json()
        assert created["id"] > 43

    @pytest.mark.asyncio
    async def test_missing_optional_fields_defaulted(self, client: AsyncClient):
        payload = {
            "categories": [],
            "products": [{"id": 1, "name": "Cola", "barcode": "4001", "quantity": None}],
        }
        response = await client.post("/api/import", json=payload)
        assert response.status_code == 200

        product = (await client.get("/api/products/1")).json()
        assert product["quantity"] == 1
        assert product["image"] is None
        assert product["categoryId"] is None

    @pytest.mark.asyncio
    async def test_duplicate_barcode_rejected_and_state_kept(self, client: AsyncClient):
        await client.post("/api/import", json=SNAPSHOT)
        payload = {
            "categories": [],
            "products": [
                {"id": 1, "name": "A", "barcode": "4001"},
                {"id": 2, "name": "B", "barcode": "4001"},
            ],
        }

        response = await client.post("/api/import", json=payload)
        assert response.status_code == 400
        assert (await client.get("/api/export")).json() == SNAPSHOT

    @pytest.mark.asyncio
    async def test_oversized_ids_rejected(self, client: AsyncClient):
        payload = {
            "categories": [{"id": 2**63, "name": "Haushalt", "slug": "haushalt"}],
            "products": [{"id": 2**31, "name": "Seife", "barcode": "9001"}],
        }
        response = await client.post("/api/import", json=payload)
        assert response.status_code == 400
        assert (await client.get("/api/export")).json() == {"categories": [], "products": []}

    @pytest.mark.asyncio
    async def test_malformed_payload_rejected(self, client: AsyncClient):
        response = await client.post("/api/import", json={"products": []})
        assert response.status_code == 400
        assert "message" in response.json()
