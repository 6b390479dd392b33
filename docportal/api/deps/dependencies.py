"""
Dependency injection container.

Factory functions for FastAPI dependencies. External clients are built
once from the process settings and reused across requests.

Dependencies: docportal.configs, docportal.application, docportal.boundary
System role: DI container for service injection
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from docportal.application.services import DocumentService, SigningService, UserService
from docportal.boundary.db import get_async_db
from docportal.boundary.document_engine.client import DocumentEngineClient
from docportal.boundary.signing.client import SigningClient
from docportal.configs import Settings, get_settings


class ServiceCache:
    """Container for cached external client instances."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._document_engine: DocumentEngineClient | None = None
        self._signing: SigningClient | None = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def document_engine(self) -> DocumentEngineClient:
        """Get cached Document Engine client."""
        if self._document_engine is None:
            self._document_engine = DocumentEngineClient(self.settings.document_engine)
        return self._document_engine

    @property
    def signing(self) -> SigningClient:
        """Get cached signing API client."""
        if self._signing is None:
            self._signing = SigningClient(self.settings.signing)
        return self._signing

    async def aclose(self) -> None:
        """Close HTTP pools and drop cached instances."""
        if self._document_engine is not None:
            await self._document_engine.aclose()
        if self._signing is not None:
            await self._signing.aclose()
        self._document_engine = None
        self._signing = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_document_engine_client() -> DocumentEngineClient:
    """
    Get the shared Document Engine client.

    Raises:
        ConfigurationError: If the engine is not configured
    """
    return get_service_cache().document_engine


def get_signing_client() -> SigningClient:
    """
    Get the shared signing API client.

    Raises:
        ConfigurationError: If the signing API is not configured
    """
    return get_service_cache().signing


def get_document_service(
    db: AsyncSession = Depends(get_async_db),
    engine: DocumentEngineClient = Depends(get_document_engine_client),
) -> DocumentService:
    """
    Get document service instance.

    Args:
        db: Async database session (injected via Depends)
        engine: Document Engine client (injected via Depends)

    Returns:
        DocumentService: Document service instance
    """
    return DocumentService(db=db, engine=engine)


def get_signing_service(
    db: AsyncSession = Depends(get_async_db),
    engine: DocumentEngineClient = Depends(get_document_engine_client),
    signer: SigningClient = Depends(get_signing_client),
) -> SigningService:
    """
    Get signing service instance.

    Args:
        db: Async database session (injected via Depends)
        engine: Document Engine client (injected via Depends)
        signer: Signing API client (injected via Depends)

    Returns:
        SigningService: Sign orchestrator instance
    """
    return SigningService(db=db, engine=engine, signer=signer)


def get_user_service(db: AsyncSession = Depends(get_async_db)) -> UserService:
    """
    Get user service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        UserService: User service instance
    """
    return UserService(db=db)
