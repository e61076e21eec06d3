"""Category schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

SLUG_PATTERN = r"^[a-z0-9]+(?:[-_][a-z0-9]+)*$"


class CategoryCreate(BaseModel):
    """Payload for creating a category."""

    name: str = Field(min_length=1, max_length=200, description="Display label")
    slug: str = Field(
        min_length=1,
        max_length=100,
        pattern=SLUG_PATTERN,
        description="URL-safe unique identifier",
    )

    model_config = ConfigDict(extra="ignore")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be blank")
        return v


class CategoryRead(BaseModel):
    """Persisted category."""

    id: int
    name: str
    slug: str

    model_config = ConfigDict(from_attributes=True)
