"""
Health check API endpoints.

Routes: GET /health

Dependencies: docportal.models.health
System role: Liveness probe
"""

from fastapi import APIRouter

from docportal.models.health import HealthResponse

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")
