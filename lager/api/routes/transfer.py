"""Export/import endpoints."""

from fastapi import APIRouter

from lager.api.deps import Store
from lager.core.messages import t
from lager.schemas.common import MessageResponse
from lager.schemas.transfer import ImportPayload, InventorySnapshot

router = APIRouter()


@router.get("/export", response_model=InventorySnapshot)
async def export_data(store: Store) -> InventorySnapshot:
    """Return the complete inventory as `{categories, products}`."""
    return await store.export_data()


@router.post(
    "/import",
    response_model=MessageResponse,
    responses={409: {"description": "Data violates a uniqueness constraint"}},
)
async def import_data(payload: ImportPayload, store: Store) -> MessageResponse:
    """Replace the whole inventory with the supplied data set.

    All or nothing: on failure the previous data stays in place.
    """
    await store.import_data(payload)
    return MessageResponse(message=t("importSuccess"))
