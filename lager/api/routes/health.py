"""Health check endpoints."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from lager import __version__
from lager.api.deps import Db
from lager.config import settings
from lager.infra.logging import get_logger
from lager.schemas.common import HealthResponse

router = APIRouter()
logger = get_logger(__name__)


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Basic health check. Returns 200 if the service is running."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.environment,
        checks={},
    )


@router.get("/health/ready", response_model=HealthResponse)
async def health_ready(database: Db) -> JSONResponse:
    """Readiness check.

    Verifies the database answers. Returns 503 when it does not.
    """
    checks = {"database": await database.verify_connection()}
    all_healthy = all(checks.values())
    if not all_healthy:
        logger.warning("Readiness check failed", checks=checks)

    body = HealthResponse(
        status="healthy" if all_healthy else "degraded",
        version=__version__,
        environment=settings.environment,
        checks=checks,
    )
    return JSONResponse(status_code=200 if all_healthy else 503, content=body.model_dump())


@router.get("/health/live", response_model=HealthResponse)
async def health_live() -> HealthResponse:
    """Liveness check."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.environment,
        checks={"alive": True},
    )
