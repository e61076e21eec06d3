"""Product endpoints.

Listing accepts one filter at a time: `category=<slug>` or `search=<term>`.
If both are given, the category filter wins.
"""

from typing import Annotated

from fastapi import APIRouter, Path, Response, status

from lager.api.deps import Store
from lager.core.errors import NotFoundError
from lager.infra.logging import get_logger
from lager.schemas.common import MAX_DB_INT
from lager.schemas.product import ProductCreate, ProductPatch, ProductRead

router = APIRouter()
logger = get_logger(__name__)

ProductId = Annotated[int, Path(ge=1, le=MAX_DB_INT)]


def matches_search(product: ProductRead, term: str) -> bool:
    """Case-insensitive substring match against name or barcode."""
    needle = term.casefold()
    return needle in product.name.casefold() or needle in product.barcode.casefold()


@router.get("/products", response_model=list[ProductRead])
async def list_products(
    store: Store,
    category: str | None = None,
    search: str | None = None,
) -> list[ProductRead]:
    """List products, optionally filtered by category slug or search term.

    An unknown category slug yields an empty list.
    """
    if category:
        resolved = await store.get_category_by_slug(category)
        if resolved is None:
            logger.debug("Unknown category filter", slug=category)
            return []
        return await store.list_products(category_id=resolved.id)

    products = await store.list_products()
    if search and search.strip():
        return [p for p in products if matches_search(p, search)]
    return products


@router.get(
    "/products/barcode/{barcode:path}",
    response_model=ProductRead,
    responses={404: {"description": "No product with this barcode"}},
)
async def get_product_by_barcode(barcode: str, store: Store) -> ProductRead:
    product = await store.get_product_by_barcode(barcode)
    if product is None:
        raise NotFoundError(key="barcodeNotFound")
    return product


@router.get(
    "/products/{product_id}",
    response_model=ProductRead,
    responses={404: {"description": "Product not found"}},
)
async def get_product(product_id: ProductId, store: Store) -> ProductRead:
    product = await store.get_product(product_id)
    if product is None:
        raise NotFoundError()
    return product


@router.post(
    "/products",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "Barcode already exists"}},
)
async def create_product(data: ProductCreate, store: Store) -> ProductRead:
    return await store.create_product(data)


@router.patch(
    "/products/{product_id}",
    response_model=ProductRead,
    responses={
        404: {"description": "Product not found"},
        409: {"description": "Barcode belongs to another product"},
    },
)
async def update_product(
    product_id: ProductId, patch: ProductPatch, store: Store
) -> ProductRead:
    """Partially update a product. Unknown fields in the body are ignored."""
    product = await store.update_product(product_id, patch)
    if product is None:
        raise NotFoundError()
    return product


@router.delete(
    "/products/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Product not found"}},
)
async def delete_product(product_id: ProductId, store: Store) -> Response:
    if not await store.delete_product(product_id):
        raise NotFoundError()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
