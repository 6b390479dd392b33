"""API-specific dependencies."""

# Re-export common dependencies
from .auth import get_current_user
from .dependencies import (
    get_document_engine_client,
    get_document_service,
    get_service_cache,
    get_settings_dependency,
    get_signing_client,
    get_signing_service,
    get_user_service,
)

__all__ = [
    "get_current_user",
    "get_document_engine_client",
    "get_document_service",
    "get_service_cache",
    "get_settings_dependency",
    "get_signing_client",
    "get_signing_service",
    "get_user_service",
]
