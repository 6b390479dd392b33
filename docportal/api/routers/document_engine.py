"""
Document Engine health endpoint.

Routes: GET /document-engine/health

Requires a session like every other non-liveness route. Reports engine
reachability as data; engine and configuration failures never surface
as 5xx here and never leak their text.

Dependencies: docportal.boundary.document_engine, docportal.api.deps
System role: External store health probe
"""

import logging

from fastapi import APIRouter, Depends

from docportal.api.deps import get_current_user
from docportal.api.deps.dependencies import ServiceCache, get_service_cache
from docportal.boundary.db.base import utcnow
from docportal.core.exceptions import ConfigurationError
from docportal.models.health import EngineHealthResponse
from docportal.models.user import SessionUser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/document-engine", tags=["document-engine"])

HEALTH_CHECK_FAILED = "Health check failed"


@router.get("/health", response_model=EngineHealthResponse)
async def document_engine_health(
    user: SessionUser = Depends(get_current_user),
    cache: ServiceCache = Depends(get_service_cache),
) -> EngineHealthResponse:
    """
    Check whether the Document Engine answers its health endpoint.

    Raises:
        HTTPException(401): No valid session
    """
    try:
        engine = cache.document_engine
    except ConfigurationError as e:
        logger.warning(
            "Document Engine not configured",
            extra={"user_id": str(user.id), "error": e.message, "missing": e.details.get("missing")},
        )
        return EngineHealthResponse(status="unhealthy", timestamp=utcnow(), error=HEALTH_CHECK_FAILED)

    healthy = await engine.health_check()
    if not healthy:
        logger.warning("Document Engine health check failed", extra={"base_url": engine.base_url})
    return EngineHealthResponse(
        status="healthy" if healthy else "unhealthy",
        timestamp=utcnow(),
    )
