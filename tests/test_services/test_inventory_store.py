"""Tests for the inventory store."""

import pytest

from lager.core.errors import ConflictError, DuplicateBarcodeError, DuplicateSlugError
from lager.schemas.category import CategoryCreate
from lager.schemas.product import ProductCreate, ProductPatch
from lager.schemas.transfer import ImportPayload
from lager.services.inventory_store import DEFAULT_CATEGORIES, InventoryStore


class TestSeeding:
    """Tests for default category seeding."""

    @pytest.mark.asyncio
    async def test_seeds_empty_database(self, seeded_store: InventoryStore):
        categories = await seeded_store.list_categories()
        assert [(c.name, c.slug) for c in categories] == list(DEFAULT_CATEGORIES)

    @pytest.mark.asyncio
    async def test_seeds_only_once(self, seeded_store: InventoryStore):
        await seeded_store.ensure_seeded()
        await seeded_store.ensure_seeded()
        assert len(await seeded_store.list_categories()) == len(DEFAULT_CATEGORIES)

    @pytest.mark.asyncio
    async def test_does_not_seed_populated_database(self, store: InventoryStore, database):
        await store.create_category(CategoryCreate(name="Eigene", slug="eigene"))

        later = InventoryStore(database, seed_defaults=True)
        categories = await later.list_categories()
        assert [c.slug for c in categories] == ["eigene"]

    @pytest.mark.asyncio
    async def test_seeding_disabled(self, store: InventoryStore):
        assert await store.list_categories() == []


class TestCategories:
    """Tests for category operations."""

    @pytest.mark.asyncio
    async def test_create_and_find_by_slug(self, store: InventoryStore):
        created = await store.create_category(CategoryCreate(name="Getränke", slug="getranke"))

        found = await store.get_category_by_slug("getranke")
        assert found == created
        assert await store.get_category_by_slug("missing") is None

    @pytest.mark.asyncio
    async def test_duplicate_slug(self, store: InventoryStore):
        await store.create_category(CategoryCreate(name="Getränke", slug="getranke"))

        with pytest.raises(DuplicateSlugError) as exc_info:
            await store.create_category(CategoryCreate(name="Drinks", slug="getranke"))

        assert exc_info.value.status_code == 409
        assert len(await store.list_categories()) == 1


class TestProducts:
    """Tests for product CRUD."""

    @pytest.mark.asyncio
    async def test_create_assigns_id(self, store: InventoryStore):
        product = await store.create_product(ProductCreate(name="Cola", barcode="4001"))

        assert product.id is not None
        assert product.quantity == 1
        assert await store.get_product(product.id) == product
        assert await store.get_product_by_barcode("4001") == product

    @pytest.mark.asyncio
    async def test_duplicate_barcode(self, store: InventoryStore):
        await store.create_product(ProductCreate(name="Cola", barcode="4001"))

        with pytest.raises(DuplicateBarcodeError) as exc_info:
            await store.create_product(ProductCreate(name="Cola Zero", barcode="4001"))

        assert exc_info.value.barcode == "4001"
        assert len(await store.list_products()) == 1

    @pytest.mark.asyncio
    async def test_list_by_category(self, store: InventoryStore):
        drinks = await store.create_category(CategoryCreate(name="Getränke", slug="getranke"))
        await store.create_product(
            ProductCreate(name="Cola", barcode="4001", category_id=drinks.id)
        )
        await store.create_product(ProductCreate(name="Seife", barcode="9001"))

        listed = await store.list_products(category_id=drinks.id)
        assert [p.name for p in listed] == ["Cola"]

    @pytest.mark.asyncio
    async def test_update_applies_only_supplied_fields(self, store: InventoryStore):
        product = await store.create_product(
            ProductCreate(name="Cola", barcode="4001", image="http://img/cola.jpg")
        )

        updated = await store.update_product(product.id, ProductPatch(quantity=4))

        assert updated is not None
        assert updated.quantity == 4
        assert updated.name == "Cola"
        assert updated.image == "http://img/cola.jpg"

    @pytest.mark.asyncio
    async def test_update_barcode_collision(self, store: InventoryStore):
        await store.create_product(ProductCreate(name="Cola", barcode="4001"))
        fanta = await store.create_product(ProductCreate(name="Fanta", barcode="4002"))

        with pytest.raises(DuplicateBarcodeError):
            await store.update_product(fanta.id, ProductPatch(barcode="4001"))

        reloaded = await store.get_product(fanta.id)
        assert reloaded is not None
        assert reloaded.barcode == "4002"

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, store: InventoryStore):
        assert await store.update_product(999, ProductPatch(quantity=1)) is None

    @pytest.mark.asyncio
    async def test_delete(self, store: InventoryStore):
        product = await store.create_product(ProductCreate(name="Cola", barcode="4001"))

        assert await store.delete_product(product.id) is True
        assert await store.delete_product(product.id) is False
        assert await store.get_product(product.id) is None


class TestTransfer:
    """Tests for wholesale export and import."""

    @pytest.fixture
    def payload(self) -> ImportPayload:
        return ImportPayload.model_validate(
            {
                "categories": [{"id": 3, "name": "Haushalt", "slug": "haushalt"}],
                "products": [
                    {"id": 10, "name": "Seife", "barcode": "9001", "categoryId": 3},
                    {"id": 11, "name": "Schwamm", "barcode": "9002", "quantity": 0},
                ],
            }
        )

    @pytest.mark.asyncio
    async def test_import_then_export(self, store: InventoryStore, payload: ImportPayload):
        await store.create_product(ProductCreate(name="Alt", barcode="1111"))

        await store.import_data(payload)
        snapshot = await store.export_data()

        assert [c.id for c in snapshot.categories] == [3]
        assert [(p.id, p.barcode, p.quantity) for p in snapshot.products] == [
            (10, "9001", 1),
            (11, "9002", 0),
        ]
        assert await store.get_product_by_barcode("1111") is None

    @pytest.mark.asyncio
    async def test_failed_import_keeps_previous_state(
        self, store: InventoryStore, payload: ImportPayload
    ):
        await store.import_data(payload)
        before = await store.export_data()

        # Bypass payload validation to hit the database constraint
        clashing = ImportPayload.model_construct(
            categories=[],
            products=[
                payload.products[0].model_copy(update={"id": 20}),
                payload.products[0].model_copy(update={"id": 21}),
            ],
        )
        with pytest.raises(ConflictError):
            await store.import_data(clashing)

        assert await store.export_data() == before

    @pytest.mark.asyncio
    async def test_import_skips_seeding_afterwards(self, seeded_store: InventoryStore):
        await seeded_store.import_data(ImportPayload(categories=[], products=[]))
        assert await seeded_store.list_categories() == []
