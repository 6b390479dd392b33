"""
Exception hierarchy for the document portal.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class DocPortalException(Exception):
    """Base exception for all document portal errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(DocPortalException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        self.field = field
        super().__init__(message, details)


class ConfigurationError(DocPortalException):
    """Raised when a required setting is missing or unusable."""


class AuthenticationError(DocPortalException):
    """Raised when a request carries no valid session."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class PermissionDeniedError(DocPortalException):
    """Raised when a valid session lacks rights for the operation."""


class DocumentNotFoundError(DocPortalException):
    """Raised when a document is absent or hidden by the access filter."""

    def __init__(self, document_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize document not found error.

        Args:
            document_id: ID of the requested document
            details: Additional context
        """
        details = details or {}
        details["document_id"] = document_id
        self.document_id = document_id
        super().__init__("Document not found", details)


class UpstreamServiceError(DocPortalException):
    """Base exception for failures reported by an external HTTP service."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        response_text: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize upstream error.

        Args:
            message: Error message
            status_code: Upstream HTTP status, or 503 when the service was unreachable
            response_text: Raw upstream body, kept for diagnostics only
            details: Additional context
        """
        details = details or {}
        details["status_code"] = status_code
        self.status_code = status_code
        self.response_text = response_text
        super().__init__(message, details)

    @property
    def is_unavailable(self) -> bool:
        """True when the failure was a transport error rather than an HTTP response."""
        return self.status_code == 503


class DocumentEngineError(UpstreamServiceError):
    """Raised when the Document Engine is unreachable or returns non-2xx."""


class SigningServiceError(UpstreamServiceError):
    """Raised when the digital-signature API is unreachable or returns non-2xx."""


class TokenGenerationError(DocPortalException):
    """Raised when a viewer/access token cannot be minted."""


class SigningFailedError(DocPortalException):
    """Raised when any stage of the sign orchestration fails."""

    def __init__(
        self,
        message: str,
        stage: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize signing failure.

        Args:
            message: Error message
            stage: Orchestration stage that failed (fetching, signing, ...)
            details: Additional context
        """
        details = details or {}
        details["stage"] = stage
        self.stage = stage
        super().__init__(message, details)
