"""Barcode lookup endpoint, proxying the external product catalog."""

from fastapi import APIRouter

from lager.api.deps import Lookup
from lager.core.errors import NotFoundError
from lager.schemas.lookup import LookupResult

router = APIRouter()


@router.get(
    "/lookup/{barcode:path}",
    response_model=LookupResult,
    responses={404: {"description": "Catalog has no usable data for this barcode"}},
)
async def lookup_barcode(barcode: str, lookup: Lookup) -> LookupResult:
    """Best-effort name and image for a barcode.

    Catalog outages are reported as 404, the same as unknown barcodes.
    """
    result = await lookup.lookup(barcode)
    if result is None:
        raise NotFoundError(key="noProductInfoFound")
    return result
