"""Export/import schemas.

The file shape is `{categories: [...], products: [...]}` with the same
field sets as the read models; optional product fields may be missing or null.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from lager.schemas.category import CategoryCreate, CategoryRead
from lager.schemas.common import MAX_DB_INT
from lager.schemas.product import ProductCreate, ProductRead


def _require_unique(label: str, values: list[Any]) -> None:
    seen: set[Any] = set()
    for value in values:
        if value in seen:
            raise ValueError(f"duplicate {label}: {value}")
        seen.add(value)


class ImportCategory(CategoryCreate):
    """Category with its original id."""

    id: int = Field(ge=1, le=MAX_DB_INT)


class ImportProduct(ProductCreate):
    """Product with its original id. Missing optional fields get defaults."""

    id: int = Field(ge=1, le=MAX_DB_INT)

    @field_validator("quantity", mode="before")
    @classmethod
    def default_quantity(cls, v: Any) -> Any:
        return 1 if v is None else v


class ImportPayload(BaseModel):
    """Full replacement data set."""

    categories: list[ImportCategory]
    products: list[ImportProduct]

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="after")
    def check_unique_keys(self) -> "ImportPayload":
        """Reject data sets that would break id, slug or barcode uniqueness."""
        _require_unique("category id", [c.id for c in self.categories])
        _require_unique("category slug", [c.slug for c in self.categories])
        _require_unique("product id", [p.id for p in self.products])
        _require_unique("product barcode", [p.barcode for p in self.products])
        return self


class InventorySnapshot(BaseModel):
    """Complete export of the inventory."""

    categories: list[CategoryRead] = Field(default_factory=list)
    products: list[ProductRead] = Field(default_factory=list)
