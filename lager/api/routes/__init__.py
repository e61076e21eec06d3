"""API routes module."""

from lager.api.routes.categories import router as categories_router
from lager.api.routes.health import router as health_router
from lager.api.routes.lookup import router as lookup_router
from lager.api.routes.products import router as products_router
from lager.api.routes.transfer import router as transfer_router

__all__ = [
    "categories_router",
    "health_router",
    "lookup_router",
    "products_router",
    "transfer_router",
]
