"""External product lookup schemas."""

from pydantic import BaseModel, Field


class LookupResult(BaseModel):
    """Best-effort product information for a barcode."""

    name: str | None = Field(default=None, description="Product name in the preferred locale")
    image: str | None = Field(default=None, description="Product image URL")
