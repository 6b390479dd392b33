"""Document Engine boundary: HTTP client and access token minting."""

from docportal.boundary.document_engine.client import DocumentEngineClient, UrlUploadOptions
from docportal.boundary.document_engine.tokens import (
    DEFAULT_PERMISSIONS,
    SIGNING_PERMISSIONS,
    VIEWER_PERMISSIONS,
    mint_access_token,
)

__all__ = [
    "DEFAULT_PERMISSIONS",
    "DocumentEngineClient",
    "SIGNING_PERMISSIONS",
    "UrlUploadOptions",
    "VIEWER_PERMISSIONS",
    "mint_access_token",
]
