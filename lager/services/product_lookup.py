"""Product Lookup - best-effort barcode resolution via Open Food Facts.

Lookup is advisory. Transport errors, non-success responses and malformed
payloads all degrade to "nothing found" and never reach the caller.
"""

from typing import Any
from urllib.parse import quote

import httpx

from lager.config import settings
from lager.core.errors import LookupUnavailableError
from lager.infra.logging import get_logger
from lager.schemas.lookup import LookupResult

logger = get_logger(__name__)


class ProductLookupClient:
    """HTTP client for the external product catalog."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        locale: str | None = None,
    ) -> None:
        """Initialize lookup client.

        Args:
            base_url: Catalog base URL (defaults to settings)
            timeout: Request timeout in seconds (defaults to settings)
            locale: Preferred name locale (defaults to settings.locale)
        """
        self.base_url = base_url or settings.lookup_base_url
        self.timeout = timeout if timeout is not None else settings.lookup_timeout
        self.locale = locale or settings.locale
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"User-Agent": settings.lookup_user_agent},
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def lookup(self, barcode: str) -> LookupResult | None:
        """Resolve a barcode to a name and image.

        Args:
            barcode: Raw barcode string

        Returns:
            LookupResult if the catalog knows the product, None otherwise
        """
        try:
            payload = await self._fetch(barcode)
        except LookupUnavailableError as e:
            logger.warning("Product lookup unavailable", barcode=barcode, error=str(e))
            return None

        result = self._parse(payload)
        logger.info(
            "Product lookup finished",
            barcode=barcode,
            found=result is not None,
            has_image=bool(result and result.image),
        )
        return result

    async def _fetch(self, barcode: str) -> dict[str, Any]:
        client = await self._get_client()
        try:
            response = await client.get(f"/api/v0/product/{quote(barcode, safe='')}.json")
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise LookupUnavailableError(
                f"catalog returned {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise LookupUnavailableError(str(e) or type(e).__name__) from e

        if not isinstance(data, dict):
            raise LookupUnavailableError("unexpected payload type")
        return data

    def _parse(self, data: dict[str, Any]) -> LookupResult | None:
        """Extract name and image from a catalog response.

        The localized name (`product_name_<locale>`) wins over the generic
        `product_name`; the front image wins over the generic image.
        """
        product = data.get("product")
        if data.get("status") != 1 or not isinstance(product, dict):
            return None

        name = _first_text(product, f"product_name_{self.locale}", "product_name")
        image = _first_text(product, "image_front_url", "image_url")
        if name is None and image is None:
            return None
        return LookupResult(name=name, image=image)


def _first_text(product: dict[str, Any], *keys: str) -> str | None:
    for key in keys:
        value = product.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None

