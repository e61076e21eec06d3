"""Pydantic schemas for request/response validation."""

from lager.schemas.category import CategoryCreate, CategoryRead
from lager.schemas.common import HealthResponse, MessageResponse
from lager.schemas.lookup import LookupResult
from lager.schemas.product import ProductCreate, ProductPatch, ProductRead
from lager.schemas.transfer import (
    ImportCategory,
    ImportPayload,
    ImportProduct,
    InventorySnapshot,
)

__all__ = [
    "CategoryCreate",
    "CategoryRead",
    "HealthResponse",
    "MessageResponse",
    "LookupResult",
    "ProductCreate",
    "ProductPatch",
    "ProductRead",
    "ImportCategory",
    "ImportPayload",
    "ImportProduct",
    "InventorySnapshot",
]
