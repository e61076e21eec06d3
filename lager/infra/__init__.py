"""Infrastructure - Database, logging."""

from lager.infra.database import Database
from lager.infra.logging import get_logger, setup_logging

__all__ = [
    "Database",
    "get_logger",
    "setup_logging",
]
