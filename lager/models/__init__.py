"""SQLAlchemy models for the inventory store."""

from lager.models.base import Base
from lager.models.category import Category
from lager.models.product import Product

__all__ = [
    "Base",
    "Category",
    "Product",
]
