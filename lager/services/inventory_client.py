"""Inventory API Client - HTTP client for the inventory request surface.

Used by the scanner workflow and the operator scripts. Error responses are
mapped back onto the application error taxonomy, carrying the server's
localized message.
"""

from typing import Any
from urllib.parse import quote

import httpx

from lager.config import settings
from lager.core.errors import (
    ConflictError,
    DuplicateBarcodeError,
    InternalError,
    LagerError,
    NotFoundError,
    ValidationError,
)
from lager.infra.logging import get_logger
from lager.schemas.category import CategoryCreate, CategoryRead
from lager.schemas.product import ProductCreate, ProductPatch, ProductRead
from lager.schemas.transfer import ImportPayload, InventorySnapshot

logger = get_logger(__name__)


class InventoryApiClient:
    """HTTP client for the inventory API."""

    def __init__(self, base_url: str | None = None, timeout: float | None = None) -> None:
        """Initialize inventory API client.

        Args:
            base_url: API root including the prefix (defaults to settings)
            timeout: Request timeout in seconds (defaults to settings)
        """
        self.base_url = (base_url or settings.inventory_api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.inventory_api_timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"Content-Type": "application/json"},
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        client = await self._get_client()
        try:
            response = await client.request(method, path, json=json, params=params)
        except httpx.HTTPError as e:
            logger.error("Inventory API unreachable", method=method, path=path, error=str(e))
            raise InternalError() from e

        if response.is_error:
            raise self._error_from_response(response, json)
        return response

    @staticmethod
    def _error_from_response(response: httpx.Response, body: Any) -> LagerError:
        try:
            message = response.json().get("message")
        except (ValueError, AttributeError):
            message = None

        status_code = response.status_code
        logger.warning(
            "Inventory API returned error",
            status_code=status_code,
            path=response.request.url.path,
            message=message,
        )

        if status_code == 400:
            return ValidationError(message)
        if status_code == 404:
            return NotFoundError(message)
        if status_code == 409:
            if isinstance(body, dict) and body.get("barcode"):
                return DuplicateBarcodeError(body["barcode"], message)
            return ConflictError(message)
        return InternalError(message)

    # =========================================================================
    # Categories
    # =========================================================================

    async def list_categories(self) -> list[CategoryRead]:
        response = await self._request("GET", "/categories")
        return [CategoryRead.model_validate(item) for item in response.json()]

    async def create_category(self, data: CategoryCreate) -> CategoryRead:
        response = await self._request("POST", "/categories", json=data.model_dump())
        return CategoryRead.model_validate(response.json())

    # =========================================================================
    # Products
    # =========================================================================

    async def list_products(
        self,
        category: str | None = None,
        search: str | None = None,
    ) -> list[ProductRead]:
        """List products, filtered by category slug or free-text search."""
        params: dict[str, str] = {}
        if category:
            params["category"] = category
        elif search:
            params["search"] = search
        response = await self._request("GET", "/products", params=params or None)
        return [ProductRead.model_validate(item) for item in response.json()]

    async def get_product(self, product_id: int) -> ProductRead | None:
        try:
            response = await self._request("GET", f"/products/{product_id}")
        except NotFoundError:
            return None
        return ProductRead.model_validate(response.json())

    async def get_product_by_barcode(self, barcode: str) -> ProductRead | None:
        try:
            response = await self._request("GET", f"/products/barcode/{quote(barcode, safe='')}")
        except NotFoundError:
            return None
        return ProductRead.model_validate(response.json())

    async def create_product(self, data: ProductCreate) -> ProductRead:
        response = await self._request(
            "POST",
            "/products",
            json=data.model_dump(by_alias=True),
        )
        product = ProductRead.model_validate(response.json())
        logger.info("Product created via API", product_id=product.id, barcode=product.barcode)
        return product

    async def update_product(self, product_id: int, patch: ProductPatch) -> ProductRead | None:
        try:
            response = await self._request(
                "PATCH",
                f"/products/{product_id}",
                json=patch.model_dump(by_alias=True, exclude_unset=True),
            )
        except NotFoundError:
            return None
        product = ProductRead.model_validate(response.json())
        logger.info("Product updated via API", product_id=product.id)
        return product

    async def delete_product(self, product_id: int) -> bool:
        try:
            await self._request("DELETE", f"/products/{product_id}")
        except NotFoundError:
            return False
        return True

    # =========================================================================
    # Export / import
    # =========================================================================

    async def export_data(self) -> InventorySnapshot:
        response = await self._request("GET", "/export")
        return InventorySnapshot.model_validate(response.json())

    async def import_data(self, payload: ImportPayload) -> str:
        """Replace all inventory data.

        Returns:
            The server's confirmation message
        """
        response = await self._request(
            "POST",
            "/import",
            json=payload.model_dump(by_alias=True),
        )
        return response.json().get("message", "")
