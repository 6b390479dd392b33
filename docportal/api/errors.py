"""
Domain error to HTTP status mapping.

Routers translate service exceptions through ``status_for_exception``;
``register_exception_handlers`` covers errors raised while FastAPI
resolves dependencies (missing session, missing configuration).

Dependencies: fastapi, docportal.core.exceptions
System role: Error taxonomy to HTTP response translation
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from docportal.core.exceptions import (
    AuthenticationError,
    DocPortalException,
    DocumentEngineError,
    DocumentNotFoundError,
    PermissionDeniedError,
    UpstreamServiceError,
    ValidationError,
)
from docportal.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Internal server error"


def status_for_exception(exc: Exception, ingestion: bool = False) -> int:
    """
    Map a domain exception to an HTTP status code.

    Args:
        exc: Raised exception
        ingestion: True on upload paths, where engine failures report 503

    Returns:
        int: HTTP status code
    """
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, AuthenticationError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, PermissionDeniedError):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, DocumentNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, DocumentEngineError) and ingestion:
        return status.HTTP_503_SERVICE_UNAVAILABLE
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def public_message(exc: Exception) -> str:
    """Client-safe message; upstream and unexpected errors stay generic."""
    if isinstance(exc, UpstreamServiceError) or not isinstance(exc, DocPortalException):
        return GENERIC_ERROR
    return exc.message


def register_exception_handlers(app: FastAPI) -> None:
    """Install application-level handlers for domain exceptions."""

    @app.exception_handler(DocPortalException)
    async def _handle_domain_error(request: Request, exc: DocPortalException) -> JSONResponse:
        status_code = status_for_exception(exc)
        if status_code >= 500:
            log_with_context(
                logger,
                logging.ERROR,
                "Unhandled domain error",
                path=request.url.path,
                error_type=type(exc).__name__,
                error=str(exc),
            )
        headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
        return JSONResponse(
            status_code=status_code,
            content={"detail": public_message(exc)},
            headers=headers,
        )
