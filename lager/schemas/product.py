"""Product schemas.

External JSON uses `categoryId`; Python code uses `category_id`.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from lager.schemas.common import MAX_DB_INT

# Fields a patch may touch. Anything else in an update body is dropped.
UPDATABLE_FIELDS = ("name", "barcode", "image", "quantity", "category_id")


def _not_blank(v: str, field: str) -> str:
    if not v.strip():
        raise ValueError(f"{field} must not be blank")
    return v


class ProductCreate(BaseModel):
    """Payload for creating a product."""

    name: str = Field(min_length=1, description="Product name")
    barcode: str = Field(min_length=1, description="Unique barcode")
    image: str | None = Field(default=None, description="Image URL or data URL")
    quantity: int = Field(default=1, ge=0, le=MAX_DB_INT, description="Units in stock")
    category_id: int | None = Field(default=None, le=MAX_DB_INT, alias="categoryId")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _not_blank(v, "name")

    @field_validator("barcode")
    @classmethod
    def validate_barcode(cls, v: str) -> str:
        return _not_blank(v, "barcode")


class ProductPatch(BaseModel):
    """Partial update. Only fields present in the payload are applied.

    `image` and `categoryId` may be set to null to clear them; `name`,
    `barcode` and `quantity` may be omitted but not nulled.
    """

    name: str | None = Field(default=None, min_length=1)
    barcode: str | None = Field(default=None, min_length=1)
    image: str | None = None
    quantity: int | None = Field(default=None, ge=0, le=MAX_DB_INT)
    category_id: int | None = Field(default=None, le=MAX_DB_INT, alias="categoryId")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("name", "barcode", "quantity")
    @classmethod
    def reject_null(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            raise ValueError(f"{info.field_name} must not be null")
        if isinstance(v, str):
            return _not_blank(v, info.field_name)
        return v

    def changes(self) -> dict[str, Any]:
        """Return only the fields that were supplied, keyed by attribute name."""
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if key in UPDATABLE_FIELDS
        }


class ProductRead(BaseModel):
    """Persisted product."""

    id: int
    name: str
    barcode: str
    image: str | None = None
    quantity: int
    category_id: int | None = Field(default=None, alias="categoryId")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
