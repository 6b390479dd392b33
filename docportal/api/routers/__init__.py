"""API routers."""

from .document_engine import router as document_engine_router
from .documents import router as documents_router
from .health import router as health_router
from .users import router as users_router

__all__ = [
    "document_engine_router",
    "documents_router",
    "health_router",
    "users_router",
]
