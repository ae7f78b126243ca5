"""
Health Check Routes - System health and monitoring endpoints.

These endpoints are used for:
1. Load balancer health checks
2. Container liveness/readiness probes
3. Quick configuration verification
"""
from datetime import datetime

from fastapi import APIRouter

from src import __version__
from src.core.config import get_settings
from src.core.logging_config import get_logger
from src.models.chat import HealthResponse

logger = get_logger(__name__)

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check endpoint",
    description="Returns 200 OK while the API process is up and responsive."
)
async def health_check() -> HealthResponse:
    """Perform a basic liveness check."""
    logger.debug("Health check requested")

    return HealthResponse(
        status="healthy",
        version=__version__,
        timestamp=datetime.utcnow()
    )


@router.get(
    "/ready",
    response_model=HealthResponse,
    summary="Readiness check endpoint",
    description="""
    Reports whether the service can serve chat requests.

    Status is `ready` when the gateway API key is configured and
    `not_configured` otherwise. The gateway itself is not contacted.
    """
)
async def readiness_check() -> HealthResponse:
    """Report whether the gateway credential is present."""
    settings = get_settings()
    status = "ready" if settings.has_gateway_credentials() else "not_configured"

    logger.debug(f"Readiness check requested: {status}")

    return HealthResponse(
        status=status,
        version=__version__,
        timestamp=datetime.utcnow()
    )
