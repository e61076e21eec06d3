"""Inventory store - the system of record for categories and products.

All reads and writes of persisted inventory state go through InventoryStore.
Each operation runs in its own transaction; import replaces everything in a
single transaction so a failure leaves the previous state untouched.
"""

from __future__ import annotations

import asyncio

from sqlalchemy import delete, func, select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from lager.config import settings
from lager.core.errors import (
    ConflictError,
    DuplicateBarcodeError,
    DuplicateSlugError,
    InternalError,
    LagerError,
    ValidationError,
)
from lager.infra.database import Database
from lager.infra.logging import get_logger
from lager.models import Category, Product
from lager.schemas.category import CategoryCreate, CategoryRead
from lager.schemas.product import ProductCreate, ProductPatch, ProductRead
from lager.schemas.transfer import ImportPayload, InventorySnapshot

logger = get_logger(__name__)

# (name, slug) seeded into an empty category table
DEFAULT_CATEGORIES: tuple[tuple[str, str], ...] = (
    ("Lebensmittel", "lebensmittel"),
    ("Getränke", "getranke"),
    ("Haushalt", "haushalt"),
    ("Sonstiges", "sonstiges"),
)


def _translate_integrity_error(exc: IntegrityError, barcode: str) -> LagerError:
    """Map a constraint failure on the products table to a typed error."""
    detail = str(exc.orig).lower()
    if "barcode" in detail:
        return DuplicateBarcodeError(barcode)
    if "category" in detail:
        return ValidationError(key="categoryNotFound")
    return InternalError(key="productSaveError")


class InventoryStore:
    """CRUD and import/export over categories and products.

    Read operations return detached pydantic models, never ORM instances.
    """

    def __init__(self, database: Database, seed_defaults: bool | None = None) -> None:
        """Initialize the store.

        Args:
            database: Database component providing transactional sessions
            seed_defaults: Seed DEFAULT_CATEGORIES into an empty category table
                (defaults to settings.seed_default_categories)
        """
        self._db = database
        self._seed_defaults = (
            settings.seed_default_categories if seed_defaults is None else seed_defaults
        )
        self._seeded = False
        self._seed_lock = asyncio.Lock()

    # =========================================================================
    # Bootstrap
    # =========================================================================

    async def ensure_seeded(self) -> None:
        """Seed the default categories once, if the category table is empty.

        Every public operation awaits this first, so seeding always happens
        before anything else touches the store.
        """
        if self._seeded:
            return

        async with self._seed_lock:
            if self._seeded:
                return

            if self._seed_defaults:
                async with self._db.session() as session:
                    count = await session.scalar(select(func.count()).select_from(Category))
                    if not count:
                        session.add_all(
                            Category(name=name, slug=slug) for name, slug in DEFAULT_CATEGORIES
                        )
                        logger.info(
                            "Seeded default categories",
                            slugs=[slug for _, slug in DEFAULT_CATEGORIES],
                        )

            self._seeded = True

    # =========================================================================
    # Categories
    # =========================================================================

    async def list_categories(self) -> list[CategoryRead]:
        await self.ensure_seeded()
        async with self._db.session() as session:
            rows = await session.scalars(select(Category).order_by(Category.id))
            return [CategoryRead.model_validate(row) for row in rows]

    async def get_category_by_slug(self, slug: str) -> CategoryRead | None:
        await self.ensure_seeded()
        async with self._db.session() as session:
            category = await session.scalar(select(Category).where(Category.slug == slug))
            return CategoryRead.model_validate(category) if category else None

    async def create_category(self, data: CategoryCreate) -> CategoryRead:
        """Insert a category.

        Slug uniqueness is left to the database constraint.

        Raises:
            DuplicateSlugError: If the slug is already taken
        """
        await self.ensure_seeded()
        try:
            async with self._db.session() as session:
                category = Category(name=data.name, slug=data.slug)
                session.add(category)
                await session.flush()
                created = CategoryRead.model_validate(category)
        except IntegrityError as e:
            logger.warning("Category slug already exists", slug=data.slug)
            raise DuplicateSlugError(data.slug) from e

        logger.info("Category created", category_id=created.id, slug=created.slug)
        return created

    # =========================================================================
    # Products
    # =========================================================================

    async def list_products(self, category_id: int | None = None) -> list[ProductRead]:
        """List products, optionally restricted to one category id."""
        await self.ensure_seeded()
        stmt = select(Product).order_by(Product.id)
        if category_id is not None:
            stmt = stmt.where(Product.category_id == category_id)

        async with self._db.session() as session:
            rows = await session.scalars(stmt)
            return [ProductRead.model_validate(row) for row in rows]

    async def get_product(self, product_id: int) -> ProductRead | None:
        await self.ensure_seeded()
        async with self._db.session() as session:
            product = await session.get(Product, product_id)
            return ProductRead.model_validate(product) if product else None

    async def get_product_by_barcode(self, barcode: str) -> ProductRead | None:
        await self.ensure_seeded()
        async with self._db.session() as session:
            product = await session.scalar(select(Product).where(Product.barcode == barcode))
            return ProductRead.model_validate(product) if product else None

    async def create_product(self, data: ProductCreate) -> ProductRead:
        """Insert a product after checking barcode uniqueness.

        Raises:
            DuplicateBarcodeError: If another product already has this barcode
        """
        await self.ensure_seeded()
        try:
            async with self._db.session() as session:
                existing = await session.scalar(
                    select(Product.id).where(Product.barcode == data.barcode)
                )
                if existing is not None:
                    logger.info(
                        "Rejected duplicate barcode",
                        barcode=data.barcode,
                        existing_id=existing,
                    )
                    raise DuplicateBarcodeError(data.barcode)

                product = Product(
                    name=data.name,
                    barcode=data.barcode,
                    image=data.image,
                    quantity=data.quantity,
                    category_id=data.category_id,
                )
                session.add(product)
                await session.flush()
                created = ProductRead.model_validate(product)
        except IntegrityError as e:
            raise _translate_integrity_error(e, data.barcode) from e

        logger.info("Product created", product_id=created.id, barcode=created.barcode)
        return created

    async def update_product(self, product_id: int, patch: ProductPatch) -> ProductRead | None:
        """Apply a partial update.

        Only fields present in the patch change. A changed barcode is
        re-checked against every other product.

        Returns:
            The updated product, or None if the id does not exist

        Raises:
            DuplicateBarcodeError: If the new barcode belongs to another product
        """
        await self.ensure_seeded()
        changes = patch.changes()
        barcode = changes.get("barcode")

        try:
            async with self._db.session() as session:
                product = await session.get(Product, product_id)
                if product is None:
                    logger.info("Product to update not found", product_id=product_id)
                    return None

                if barcode is not None and barcode != product.barcode:
                    clash = await session.scalar(
                        select(Product.id).where(
                            Product.barcode == barcode,
                            Product.id != product_id,
                        )
                    )
                    if clash is not None:
                        logger.info(
                            "Rejected barcode collision on update",
                            product_id=product_id,
                            barcode=barcode,
                            existing_id=clash,
                        )
                        raise DuplicateBarcodeError(barcode)

                for field, value in changes.items():
                    setattr(product, field, value)
                await session.flush()
                updated = ProductRead.model_validate(product)
        except IntegrityError as e:
            raise _translate_integrity_error(e, barcode or "") from e

        logger.info("Product updated", product_id=product_id, fields=sorted(changes))
        return updated

    async def delete_product(self, product_id: int) -> bool:
        """Delete a product.

        Returns:
            True if a product was deleted, False if the id did not exist
        """
        await self.ensure_seeded()
        async with self._db.session() as session:
            result = await session.execute(delete(Product).where(Product.id == product_id))
            deleted = (result.rowcount or 0) > 0

        logger.info("Product delete", product_id=product_id, found=deleted)
        return deleted

    # =========================================================================
    # Export / import
    # =========================================================================

    async def export_data(self) -> InventorySnapshot:
        """Return every category and product as one consistent snapshot."""
        await self.ensure_seeded()
        async with self._db.session() as session:
            categories = await session.scalars(select(Category).order_by(Category.id))
            products = await session.scalars(select(Product).order_by(Product.id))
            snapshot = InventorySnapshot(
                categories=[CategoryRead.model_validate(c) for c in categories],
                products=[ProductRead.model_validate(p) for p in products],
            )

        logger.info(
            "Inventory exported",
            categories=len(snapshot.categories),
            products=len(snapshot.products),
        )
        return snapshot

    async def import_data(self, payload: ImportPayload) -> None:
        """Replace all categories and products with the supplied sets.

        Ids are preserved. Runs in one transaction: on any failure the
        previous data stays in place.

        Raises:
            ConflictError: If the data violates a uniqueness constraint
            InternalError: On any other persistence failure
        """
        await self.ensure_seeded()
        try:
            async with self._db.session() as session:
                await session.execute(delete(Product))
                await session.execute(delete(Category))

                session.add_all(
                    Category(id=c.id, name=c.name, slug=c.slug) for c in payload.categories
                )
                await session.flush()

                session.add_all(
                    Product(
                        id=p.id,
                        name=p.name,
                        barcode=p.barcode,
                        image=p.image,
                        quantity=p.quantity,
                        category_id=p.category_id,
                    )
                    for p in payload.products
                )
                await session.flush()

                if self._db.dialect == "postgresql":
                    await self._sync_sequences(session)
        except IntegrityError as e:
            logger.warning("Import rejected by constraint", error=str(e.orig))
            raise ConflictError(key="importConflict") from e
        except SQLAlchemyError as e:
            logger.error("Import failed", error=str(e), exc_info=True)
            raise InternalError(key="importError") from e

        logger.info(
            "Inventory imported",
            categories=len(payload.categories),
            products=len(payload.products),
        )

    @staticmethod
    async def _sync_sequences(session: AsyncSession) -> None:
        """Move serial sequences past the largest imported id."""
        for table in (Category.__tablename__, Product.__tablename__):
            await session.execute(
                text(
                    f"SELECT setval(pg_get_serial_sequence('{table}', 'id'), "
                    f"COALESCE((SELECT MAX(id) FROM {table}), 0) + 1, false)"
                )
            )
