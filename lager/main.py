"""FastAPI application entry point.

Inventory API: categories, products, barcode lookup and export/import.
"""

import time
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lager import __version__
from lager.api.routes import (
    categories_router,
    health_router,
    lookup_router,
    products_router,
    transfer_router,
)
from lager.config import settings
from lager.core.errors import InternalError, LagerError
from lager.core.messages import t
from lager.infra.database import Database
from lager.infra.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
    setup_logging,
)
from lager.services.inventory_store import InventoryStore
from lager.services.product_lookup import ProductLookupClient

# Setup logging first
setup_logging()
logger = get_logger(__name__)

# Validation failures on these fields get a dedicated message
FIELD_MESSAGES = {
    "name": "nameRequired",
    "barcode": "barcodeRequired",
    "quantity": "invalidQuantity",
    "product_id": "invalidProductId",
}


def validation_message(errors: list[dict[str, Any]]) -> str:
    """Summarize request validation errors as one localized message."""
    if not errors:
        return t("invalidRequest")

    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    if loc and loc[-1] in FIELD_MESSAGES:
        return t(FIELD_MESSAGES[loc[-1]])

    where = ".".join(loc)
    detail = first.get("msg", "")
    return f"{t('invalidRequest')}: {where}: {detail}" if where else f"{t('invalidRequest')}: {detail}"


def create_app(
    database: Database | None = None,
    lookup: ProductLookupClient | None = None,
    seed_defaults: bool | None = None,
) -> FastAPI:
    """Build the inventory API.

    Args:
        database: Database component (defaults to one built from settings)
        lookup: Product lookup client (defaults to one built from settings)
        seed_defaults: Override settings.seed_default_categories

    Returns:
        Configured FastAPI application
    """
    database = database or Database()
    lookup = lookup or ProductLookupClient()
    store = InventoryStore(database, seed_defaults=seed_defaults)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Create the schema and seed on startup; release clients on shutdown."""
        logger.info(
            "Lager API starting",
            environment=settings.environment,
            database=database.dialect,
            locale=settings.locale,
        )

        await database.create_all()
        await store.ensure_seeded()

        if not await database.verify_connection():
            logger.warning("Database connection failed - will retry on first request")

        yield

        logger.info("Lager API shutting down")
        await lookup.close()
        await database.dispose()
        logger.info("Cleanup complete")

    app = FastAPI(
        title="Lager Inventory API",
        description="Inventory tracking with barcode lookup",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.environment == "dev" else None,
        redoc_url=None,
    )
    app.state.database = database
    app.state.store = store
    app.state.lookup = lookup

    # CORS middleware (mainly for local frontend development)
    if settings.environment == "dev":
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log every request with status and duration.

        The request id, method and path are bound to every log line emitted
        while the request is handled and echoed in `X-Request-ID`.
        """
        request_id = request.headers.get("X-Request-ID") or uuid4().hex[:12]
        bind_request_context(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        start = time.perf_counter()
        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            logger.info(
                "Request handled",
                status_code=response.status_code,
                duration_ms=int((time.perf_counter() - start) * 1000),
            )
            return response
        finally:
            clear_request_context()

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    @app.exception_handler(LagerError)
    async def lager_error_handler(request: Request, exc: LagerError) -> JSONResponse:
        if isinstance(exc, InternalError):
            logger.error("Request failed", error=exc.message, path=request.url.path)
        else:
            logger.info(
                "Request rejected",
                error_type=type(exc).__name__,
                status_code=exc.status_code,
                path=request.url.path,
            )
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = list(exc.errors())
        logger.info("Request validation failed", path=request.url.path, errors=len(errors))
        return JSONResponse(status_code=400, content={"message": validation_message(errors)})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle uncaught exceptions with a generic message."""
        logger.error(
            "Unhandled exception",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            exc_info=True,
        )
        return JSONResponse(status_code=500, content={"message": t("internalError")})

    # =========================================================================
    # Include Routers
    # =========================================================================

    app.include_router(health_router, tags=["Health"])
    app.include_router(categories_router, prefix=settings.api_prefix, tags=["Categories"])
    app.include_router(products_router, prefix=settings.api_prefix, tags=["Products"])
    app.include_router(transfer_router, prefix=settings.api_prefix, tags=["Export/Import"])
    app.include_router(lookup_router, prefix=settings.api_prefix, tags=["Lookup"])

    @app.get("/")
    async def root() -> dict:
        """Root endpoint - basic service info."""
        return {
            "service": "Lager Inventory API",
            "version": __version__,
            "environment": settings.environment,
        }

    return app


app = create_app()
