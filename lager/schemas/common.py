"""Common schemas for API requests and responses."""

from pydantic import BaseModel, Field

# Largest value of a 32-bit INTEGER column
MAX_DB_INT = 2**31 - 1


class MessageResponse(BaseModel):
    """Plain message body, used for errors and confirmations."""

    message: str = Field(description="Localized, user-facing message")

    model_config = {"extra": "forbid"}


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Health status (healthy, degraded)")
    version: str = Field(description="Service version")
    environment: str = Field(description="Environment name")
    checks: dict[str, bool] = Field(default_factory=dict, description="Individual health checks")

    model_config = {"extra": "forbid"}
