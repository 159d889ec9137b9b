"""
Liveness route. Public, no storage or model access.
"""

from fastapi import APIRouter

from scout import __version__
from scout.config import settings
from scout.schemas.health import HealthResponse
from scout.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["system"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service liveness probe",
    status_code=200,
)
async def health_check() -> HealthResponse:
    """
    Example response:
        {"status": "ok", "service": "global-gourmet-scout", "version": "0.1.0", "storage_backend": "file"}
    """
    logger.debug("GET /health")

    return HealthResponse(
        version=__version__,
        storage_backend=settings.STORAGE_BACKEND,
    )
