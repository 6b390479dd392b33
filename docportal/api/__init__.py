"""
API routes module.

FastAPI routers for all HTTP endpoints.
"""

from fastapi import APIRouter

from .routers import (
    document_engine_router,
    documents_router,
    health_router,
    users_router,
)

api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(users_router)
api_router.include_router(documents_router)
api_router.include_router(document_engine_router)

__all__ = ["api_router"]
