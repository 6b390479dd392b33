"""
Documents router package.

Exports the router for document management endpoints.
"""

from .documents_router import router

__all__ = ["router"]
