"""Application configuration using Pydantic Settings.

Reads configuration from environment variables with sensible defaults.
Database credentials should be provided via environment variables.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Application
    # =========================================================================
    environment: Literal["prod", "staging", "dev"] = Field(
        default="dev",
        description="Environment name",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    api_prefix: str = Field(
        default="/api",
        description="Path prefix for the inventory API",
    )
    locale: Literal["de", "en"] = Field(
        default="de",
        description="Locale for user-facing messages and product names",
    )
    seed_default_categories: bool = Field(
        default=True,
        description="Seed the default categories when none exist",
    )

    # =========================================================================
    # Database
    # =========================================================================
    db_backend: Literal["sqlite", "postgresql"] = Field(
        default="sqlite",
        description="Database backend",
    )
    sqlite_path: str = Field(
        default="./lager.db",
        description="SQLite database file (':memory:' for a throwaway database)",
    )
    db_user: str = Field(
        default="lager",
        description="Database user",
    )
    db_password: str = Field(
        default="",
        description="Database password",
    )
    db_name: str = Field(
        default="lager",
        description="Database name",
    )
    db_host: str = Field(
        default="localhost",
        description="Database host",
    )
    db_port: int = Field(
        default=5432,
        description="Database port",
    )
    db_pool_size: int = Field(
        default=5,
        description="Database connection pool size",
    )
    db_pool_max_overflow: int = Field(
        default=10,
        description="Max overflow connections beyond pool size",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        """Build the SQLAlchemy URL for the configured backend."""
        if self.db_backend == "sqlite":
            if self.sqlite_path == ":memory:":
                return "sqlite+aiosqlite://"
            return f"sqlite+aiosqlite:///{self.sqlite_path}"
        return (
            f"postgresql+asyncpg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    # =========================================================================
    # External product lookup (Open Food Facts)
    # =========================================================================
    lookup_base_url: str = Field(
        default="https://world.openfoodfacts.org",
        description="Base URL of the product catalog",
    )
    lookup_timeout: float = Field(
        default=10.0,
        description="Lookup request timeout in seconds",
    )
    lookup_user_agent: str = Field(
        default="lager-inventory/0.1.0",
        description="User-Agent sent to the product catalog",
    )

    # =========================================================================
    # Inventory API client (used by the scanner workflow and scripts)
    # =========================================================================
    inventory_api_url: str = Field(
        default="http://localhost:8080/api",
        description="Base URL of the inventory API",
    )
    inventory_api_timeout: float = Field(
        default=15.0,
        description="Inventory API request timeout in seconds",
    )

    # =========================================================================
    # Barcode scanner
    # =========================================================================
    camera_index: int = Field(
        default=0,
        description="OpenCV camera device index (rear camera on most phones/tablets)",
    )
    scan_frame_interval: float = Field(
        default=0.05,
        ge=0.0,
        description="Delay between sampled frames in seconds",
    )
    scan_formats: list[str] = Field(
        default=[
            "EAN13",
            "EAN8",
            "Code39",
            "Code128",
            "QRCode",
            "PDF417",
            "DataMatrix",
            "UPCA",
            "UPCE",
        ],
        description="Barcode symbologies the decoder looks for",
    )

    # =========================================================================
    # Logging
    # =========================================================================
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_json: bool = Field(
        default=True,
        description="Output logs as JSON outside of dev",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Singleton instance for convenience
settings = get_settings()
