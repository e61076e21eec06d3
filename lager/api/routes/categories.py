"""Category endpoints."""

from fastapi import APIRouter, status

from lager.api.deps import Store
from lager.schemas.category import CategoryCreate, CategoryRead

router = APIRouter()


@router.get("/categories", response_model=list[CategoryRead])
async def list_categories(store: Store) -> list[CategoryRead]:
    return await store.list_categories()


@router.post(
    "/categories",
    response_model=CategoryRead,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "Slug already exists"}},
)
async def create_category(data: CategoryCreate, store: Store) -> CategoryRead:
    """Create a category. Duplicate slugs answer 409."""
    return await store.create_category(data)
