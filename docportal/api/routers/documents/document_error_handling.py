"""
Document error handling utilities.

Provides a decorator for consistent error handling across
document-related API endpoints.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from docportal.api.errors import public_message, status_for_exception
from docportal.core.exceptions import DocPortalException, SigningFailedError
from docportal.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])

SIGN_FAILURE_MESSAGE = "Failed to sign document"


def handle_document_errors(ingestion: bool = False) -> Callable[[F], F]:
    """
    Decorator factory translating domain exceptions into HTTPExceptions.

    This centralizes:
    - Logging of errors with context
    - Mapping domain exceptions to HTTP status codes
    - Keeping upstream and unexpected error text out of responses

    Args:
        ingestion: Report Document Engine failures as 503 instead of 500
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)

            except HTTPException:
                raise

            except SigningFailedError as e:
                logger.error(
                    "Document signing failed",
                    extra={"stage": e.stage, "error": e.message},
                )
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail={"error": SIGN_FAILURE_MESSAGE, "details": e.message},
                )

            except DocPortalException as e:
                status_code = status_for_exception(e, ingestion=ingestion)
                if status_code >= 500:
                    logger.error(
                        "Document operation failed",
                        extra={"error_type": type(e).__name__, "error": str(e)},
                    )
                else:
                    logger.warning(
                        "Document request rejected",
                        extra={"error_type": type(e).__name__, "status_code": status_code, "error": e.message},
                    )
                raise HTTPException(status_code=status_code, detail=public_message(e))

            except Exception as e:
                log_exception_with_context(
                    logger,
                    "Unexpected failure in document operation",
                    e,
                    operation=func.__name__,
                )
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail=public_message(e),
                )

        return wrapper  # type: ignore

    return decorator
