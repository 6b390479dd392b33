"""
Document service orchestrator.

Coordinates document upload, listing, viewing, editing and deletion.
Every lookup goes through the caller's access filter, so a document the
caller cannot see is reported exactly like a missing one.

Dependencies: docportal.boundary.db, docportal.boundary.document_engine, docportal.core
System role: Document management orchestration
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from docportal.boundary.db.CRUD.document_crud import document_crud
from docportal.boundary.db.models.document_model import DocumentModel
from docportal.boundary.document_engine.client import DocumentEngineClient
from docportal.boundary.document_engine.tokens import VIEWER_PERMISSIONS, token_expiry
from docportal.core.access_filter import get_effective_document_filter
from docportal.core.exceptions import DocumentNotFoundError
from docportal.models.user import SessionUser

logger = logging.getLogger(__name__)


@dataclass
class UploadedFile:
    """Validated upload ready to be sent to the engine."""

    filename: str
    content: bytes
    content_type: str | None

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass
class ViewerAccess:
    """Browser-facing URLs sharing one viewer token."""

    viewer_url: str
    thumbnail_url: str
    download_url: str
    jwt: str
    expires_at: datetime


class DocumentService:
    """Document service orchestrator."""

    def __init__(self, db: AsyncSession, engine: DocumentEngineClient) -> None:
        """
        Initialize document service.

        Args:
            db: AsyncSession for document metadata
            engine: Document Engine client for side effects
        """
        self.db = db
        self.engine = engine

    async def _get_visible_or_raise(self, user: SessionUser, document_id: UUID) -> DocumentModel:
        document_filter = get_effective_document_filter(user)
        document = await document_crud.get_visible(self.db, document_id, document_filter)
        if document is None:
            raise DocumentNotFoundError(str(document_id))
        return document

    async def list_documents(self, user: SessionUser) -> Sequence[DocumentModel]:
        """
        List documents visible to the user, newest first.

        Args:
            user: Authenticated session user

        Returns:
            Sequence[DocumentModel]: Visible documents with owners loaded
        """
        document_filter = get_effective_document_filter(user)
        return await document_crud.list_visible(self.db, document_filter)

    async def get_document(self, user: SessionUser, document_id: UUID) -> DocumentModel:
        """
        Get one visible document.

        Raises:
            DocumentNotFoundError: If absent or hidden by the access filter
        """
        return await self._get_visible_or_raise(user, document_id)

    async def create_document(
        self,
        user: SessionUser,
        upload: UploadedFile,
        title: str,
        author: str | None = None,
    ) -> DocumentModel:
        """
        Store a new document.

        Steps:
        1. Upload the bytes to the engine under the retry policy
        2. Insert the metadata row owned by the user and commit

        The row is only written once the engine accepted the file.

        Args:
            user: Authenticated session user (becomes owner)
            upload: Validated file
            title: Document title
            author: Optional author (defaults to the user's name or email)

        Returns:
            DocumentModel: Persisted document

        Raises:
            DocumentEngineError: If every upload attempt failed
        """
        external_id = await self.engine.with_retry(
            lambda: self.engine.upload(
                upload.content,
                upload.filename,
                upload.content_type or "application/octet-stream",
            )
        )

        try:
            document = await document_crud.create(
                self.db,
                document_engine_id=external_id,
                title=title,
                filename=upload.filename,
                file_type=upload.content_type,
                file_size=upload.size,
                author=author or user.display_name,
                owner_id=user.id,
            )
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            # TODO: delete the engine copy here once orphan cleanup is agreed on
            logger.error(
                "Metadata insert failed after engine upload; engine document is orphaned",
                extra={"document_engine_id": external_id, "owner_id": str(user.id), "error": str(e)},
            )
            raise

        logger.info(
            "Document created",
            extra={
                "document_id": str(document.id),
                "document_engine_id": external_id,
                "owner_id": str(user.id),
                "file_size": upload.size,
            },
        )
        return document

    async def update_document(
        self,
        user: SessionUser,
        document_id: UUID,
        title: str,
        author: str | None = None,
    ) -> DocumentModel:
        """
        Edit title and author of a visible document.

        Args:
            user: Authenticated session user
            document_id: Document UUID
            title: New title
            author: New author; the current author is kept when omitted

        Returns:
            DocumentModel: Updated document

        Raises:
            DocumentNotFoundError: If absent or hidden by the access filter
        """
        existing = await self._get_visible_or_raise(user, document_id)
        await document_crud.update_metadata(
            self.db,
            existing.id,
            title=title,
            author=author or existing.author,
        )
        await self.db.commit()
        return await self._get_visible_or_raise(user, document_id)

    async def delete_document(self, user: SessionUser, document_id: UUID) -> None:
        """
        Delete a visible document.

        The engine delete is best effort: any failure (after the retry policy
        is exhausted for engine errors) is logged and the metadata row is
        removed anyway.

        Raises:
            DocumentNotFoundError: If absent or hidden by the access filter
        """
        document = await self._get_visible_or_raise(user, document_id)
        external_id = document.document_engine_id

        try:
            await self.engine.with_retry(lambda: self.engine.delete(external_id))
        except Exception as e:
            logger.warning(
                "Failed to delete document from Document Engine",
                extra={
                    "document_id": str(document_id),
                    "document_engine_id": external_id,
                    "status_code": getattr(e, "status_code", None),
                    "error_type": type(e).__name__,
                    "error": str(e),
                },
            )

        await document_crud.delete_by_id(self.db, document.id)
        await self.db.commit()
        logger.info("Document deleted", extra={"document_id": str(document_id)})

    async def get_viewer_access(self, user: SessionUser, document_id: UUID) -> ViewerAccess:
        """
        Issue viewer, thumbnail and download URLs for a visible document.

        The token carries read-document, download and cover-image
        permissions, names the user as subject and lives for the viewer TTL.

        Raises:
            DocumentNotFoundError: If absent or hidden by the access filter
            TokenGenerationError: If the signing key is unusable
        """
        document = await self._get_visible_or_raise(user, document_id)
        external_id = document.document_engine_id
        ttl_hours = self.engine.settings.viewer_token_ttl_hours

        token = self.engine.issue_access_token(
            external_id,
            permissions=VIEWER_PERMISSIONS,
            subject=str(user.id),
            ttl_hours=ttl_hours,
        )
        return ViewerAccess(
            viewer_url=self.engine.viewer_url(external_id, token),
            thumbnail_url=self.engine.thumbnail_url(external_id, token),
            download_url=self.engine.download_url(external_id, token),
            jwt=token,
            expires_at=token_expiry(ttl_hours),
        )
