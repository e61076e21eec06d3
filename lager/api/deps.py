"""FastAPI dependencies for dependency injection.

The store and the lookup client are built once per application and kept
on `app.state`; routes receive them through the aliases below.
"""

from typing import Annotated

from fastapi import Depends, Request

from lager.infra.database import Database
from lager.services.inventory_store import InventoryStore
from lager.services.product_lookup import ProductLookupClient


def get_store(request: Request) -> InventoryStore:
    """Get the inventory store of this application."""
    return request.app.state.store


def get_lookup(request: Request) -> ProductLookupClient:
    """Get the product lookup client of this application."""
    return request.app.state.lookup


def get_database(request: Request) -> Database:
    return request.app.state.database


# Type aliases for cleaner annotations
Store = Annotated[InventoryStore, Depends(get_store)]
Lookup = Annotated[ProductLookupClient, Depends(get_lookup)]
Db = Annotated[Database, Depends(get_database)]
