"""Product resolution workflow.

Coordinates barcode entry (typed or scanned), the advisory catalog lookup
and submission of a product draft.

Every draft lives in a DraftSession identified by a token. Lookups run in
the background and are applied only while their session is still active
and the draft still carries the barcode that was looked up; anything else
is a stale response and is dropped.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol
from uuid import uuid4

from lager.core.draft import ProductDraft
from lager.core.errors import LagerError, NotFoundError
from lager.core.messages import t
from lager.infra.logging import get_logger
from lager.schemas.lookup import LookupResult
from lager.schemas.product import ProductCreate, ProductPatch, ProductRead

logger = get_logger(__name__)


class ProductGateway(Protocol):
    """Persistence used by the workflow (InventoryStore or InventoryApiClient)."""

    async def get_product(self, product_id: int) -> ProductRead | None: ...

    async def create_product(self, data: ProductCreate) -> ProductRead: ...

    async def update_product(self, product_id: int, patch: ProductPatch) -> ProductRead | None: ...


class BarcodeLookup(Protocol):
    """Advisory barcode lookup (ProductLookupClient)."""

    async def lookup(self, barcode: str) -> LookupResult | None: ...


class EditMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


@dataclass
class DraftSession:
    """One editing session over a product draft.

    Attributes:
        token: Identifies the session; lookups are tagged with it
        mode: CREATE for a new product, EDIT for an existing one
        draft: Current draft state
        product_id: Id of the edited product (EDIT mode only)
        notice: Last lookup outcome for the user
        error: Reason of the last failed submission
        active: False once submitted or cancelled
    """

    token: str
    mode: EditMode
    draft: ProductDraft
    product_id: int | None = None
    notice: str | None = None
    error: str | None = None
    active: bool = True
    lookup_task: asyncio.Task[None] | None = field(default=None, repr=False)


@dataclass(frozen=True)
class SubmitResult:
    """Outcome of a successful submission."""

    product: ProductRead
    message: str


class ProductResolutionWorkflow:
    """Drives create/edit sessions from barcode entry to persistence."""

    def __init__(self, gateway: ProductGateway, lookup: BarcodeLookup) -> None:
        self._gateway = gateway
        self._lookup = lookup
        self._sessions: dict[str, DraftSession] = {}
        self._pending: set[asyncio.Task[None]] = set()

    # =========================================================================
    # Session lifecycle
    # =========================================================================

    def begin_create(self, barcode: str | None = None) -> DraftSession:
        """Open a session for a new product, optionally with a scanned barcode."""
        session = DraftSession(token=uuid4().hex, mode=EditMode.CREATE, draft=ProductDraft())
        self._sessions[session.token] = session
        logger.info("Draft session opened", token=session.token, mode=session.mode.value)

        if barcode:
            self.enter_barcode(session, barcode)
        return session

    async def begin_edit(self, product_id: int) -> DraftSession:
        """Open a session pre-populated from an existing product.

        Raises:
            NotFoundError: If the product does not exist
        """
        product = await self._gateway.get_product(product_id)
        if product is None:
            raise NotFoundError()

        session = DraftSession(
            token=uuid4().hex,
            mode=EditMode.EDIT,
            draft=ProductDraft.from_product(product),
            product_id=product_id,
        )
        self._sessions[session.token] = session
        logger.info(
            "Draft session opened",
            token=session.token,
            mode=session.mode.value,
            product_id=product_id,
        )
        return session

    def cancel(self, session: DraftSession) -> None:
        """Discard the draft. A lookup still in flight is ignored when it lands."""
        if session.active:
            logger.info("Draft session cancelled", token=session.token)
        self._close(session)

    def is_active(self, session: DraftSession) -> bool:
        return session.active and self._sessions.get(session.token) is session

    async def aclose(self) -> None:
        """Close every open session and cancel lookups still in flight."""
        abandoned = len(self._sessions)
        for session in self._sessions.values():
            session.active = False
        self._sessions.clear()

        tasks = list(self._pending)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._pending.clear()

        logger.info("Workflow closed", abandoned_sessions=abandoned, cancelled_lookups=len(tasks))

    # =========================================================================
    # Draft edits
    # =========================================================================

    def enter_barcode(self, session: DraftSession, barcode: str) -> DraftSession:
        """Set the draft barcode, typed or scanned.

        The barcode is applied immediately. In CREATE mode a catalog lookup
        starts in the background; in EDIT mode the existing product identity
        stays authoritative and nothing is looked up.
        """
        self._require_active(session)
        session.draft = session.draft.with_barcode(barcode)
        session.notice = None

        if session.mode is EditMode.CREATE and barcode.strip():
            task = asyncio.create_task(self._resolve(session.token, barcode))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
            session.lookup_task = task
            logger.debug("Lookup scheduled", token=session.token, barcode=barcode)
        return session

    def set_name(self, session: DraftSession, name: str) -> DraftSession:
        self._require_active(session)
        session.draft = session.draft.with_name(name)
        return session

    def set_image(self, session: DraftSession, image: str | None) -> DraftSession:
        self._require_active(session)
        session.draft = session.draft.with_image(image)
        return session

    def set_category(self, session: DraftSession, category_id: int | None) -> DraftSession:
        self._require_active(session)
        session.draft = session.draft.with_category(category_id)
        return session

    def set_quantity(self, session: DraftSession, quantity: int) -> DraftSession:
        self._require_active(session)
        session.draft = session.draft.with_quantity(quantity)
        return session

    def increment_quantity(self, session: DraftSession) -> DraftSession:
        self._require_active(session)
        session.draft = session.draft.increment()
        return session

    def decrement_quantity(self, session: DraftSession) -> DraftSession:
        """Step quantity down; the draft never goes below zero."""
        self._require_active(session)
        session.draft = session.draft.decrement()
        return session

    # =========================================================================
    # Lookup
    # =========================================================================

    async def wait_for_lookup(self, session: DraftSession) -> None:
        """Wait until the latest lookup of this session has been handled."""
        if session.lookup_task is not None:
            await session.lookup_task

    async def _resolve(self, token: str, barcode: str) -> None:
        try:
            result = await self._lookup.lookup(barcode)
        except Exception as e:
            # Any lookup failure counts as no match
            logger.warning("Lookup raised, treated as no match", barcode=barcode, error=str(e))
            result = None
        self.apply_lookup(token, barcode, result)

    def apply_lookup(self, token: str, barcode: str, result: LookupResult | None) -> bool:
        """Merge a lookup result into its originating session.

        Returns:
            True if the draft was updated, False if the result was empty or stale
        """
        session = self._sessions.get(token)
        if session is None or not session.active:
            logger.info("Discarded lookup for closed session", token=token, barcode=barcode)
            return False
        if session.draft.barcode != barcode:
            logger.info(
                "Discarded lookup for outdated barcode",
                token=token,
                barcode=barcode,
                current=session.draft.barcode,
            )
            return False

        if result is None or not result.name:
            session.notice = t("noProductInfoFound")
            return False

        session.draft = session.draft.with_lookup(result)
        session.notice = t("productInfoFound")
        logger.info("Lookup applied to draft", token=token, barcode=barcode)
        return True

    # =========================================================================
    # Submission
    # =========================================================================

    async def submit(self, session: DraftSession) -> SubmitResult:
        """Validate and persist the draft.

        On success the session is closed. On failure the draft is kept,
        `session.error` holds the reason and the error is re-raised.

        Raises:
            DraftValidationError: On empty name or barcode
            DuplicateBarcodeError: If the barcode belongs to another product
            NotFoundError: If the edited product disappeared
        """
        self._require_active(session)
        try:
            session.draft.validate()
            if session.mode is EditMode.CREATE:
                product = await self._gateway.create_product(session.draft.to_create())
                message = t("productCreated")
            else:
                if session.product_id is None:
                    raise RuntimeError(f"draft session {session.token} has no product id")
                updated = await self._gateway.update_product(
                    session.product_id, session.draft.to_patch()
                )
                if updated is None:
                    raise NotFoundError()
                product = updated
                message = t("productUpdated")
        except LagerError as e:
            session.error = e.message
            logger.info(
                "Draft submission failed",
                token=session.token,
                error_type=type(e).__name__,
                error=e.message,
            )
            raise

        session.error = None
        self._close(session)
        logger.info(
            "Draft submitted",
            token=session.token,
            mode=session.mode.value,
            product_id=product.id,
        )
        return SubmitResult(product=product, message=message)

    def _close(self, session: DraftSession) -> None:
        session.active = False
        self._sessions.pop(session.token, None)

    @staticmethod
    def _require_active(session: DraftSession) -> None:
        if not session.active:
            raise RuntimeError(f"draft session {session.token} is closed")
