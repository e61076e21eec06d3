"""Business logic services."""

from lager.services.inventory_client import InventoryApiClient
from lager.services.inventory_store import InventoryStore
from lager.services.product_lookup import ProductLookupClient

__all__ = [
    "InventoryApiClient",
    "InventoryStore",
    "ProductLookupClient",
]
