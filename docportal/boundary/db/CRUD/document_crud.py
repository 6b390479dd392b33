"""
Document CRUD operations.

Every read path takes a DocumentFilter so that rows outside the caller's
visibility look exactly like missing rows.

Dependencies: sqlalchemy, docportal.core.access_filter
System role: Document metadata persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from docportal.boundary.db.CRUD.base_crud import BaseCRUD
from docportal.boundary.db.models.document_model import DocumentModel
from docportal.core.access_filter import DocumentFilter, OwnerOnly


def apply_document_filter(stmt: Select, document_filter: DocumentFilter) -> Select:
    """
    Restrict a document SELECT to the rows visible under ``document_filter``.

    Args:
        stmt: SELECT over DocumentModel
        document_filter: Unrestricted or OwnerOnly predicate

    Returns:
        Select: Statement with the owner predicate applied when required
    """
    if isinstance(document_filter, OwnerOnly):
        return stmt.where(DocumentModel.owner_id == document_filter.owner_id)
    return stmt


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """
    CRUD operations for DocumentModel.

    Extends BaseCRUD with filtered lookups and the two permitted in-place
    mutations (metadata edit, size rewrite after signing).
    """

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def list_visible(
        self,
        session: AsyncSession,
        document_filter: DocumentFilter,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[DocumentModel]:
        """
        List documents visible under the filter, newest first, owners loaded.

        Args:
            session: Async database session
            document_filter: Visibility predicate
            limit: Maximum number of documents to return
            offset: Number of documents to skip

        Returns:
            Sequence of visible DocumentModels
        """
        stmt = (
            select(DocumentModel)
            .options(selectinload(DocumentModel.owner))
            .order_by(DocumentModel.created_at.desc())
            .offset(offset)
        )
        stmt = apply_document_filter(stmt, document_filter)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_visible(
        self,
        session: AsyncSession,
        id: UUID,
        document_filter: DocumentFilter,
    ) -> DocumentModel | None:
        """
        Retrieve a document by id if it is visible under the filter.

        Args:
            session: Async database session
            id: Document UUID
            document_filter: Visibility predicate

        Returns:
            DocumentModel with owner loaded, None if absent or filtered out
        """
        stmt = (
            select(DocumentModel)
            .options(selectinload(DocumentModel.owner))
            .where(DocumentModel.id == id)
        )
        stmt = apply_document_filter(stmt, document_filter)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def count_by_owner(self, session: AsyncSession, owner_id: UUID) -> int:
        """
        Count documents owned by a user.

        Args:
            session: Async database session
            owner_id: Owner UUID

        Returns:
            int: Number of owned documents
        """
        stmt = select(func.count()).select_from(DocumentModel).where(
            DocumentModel.owner_id == owner_id
        )
        result = await session.execute(stmt)
        return int(result.scalar_one())

    async def update_by_id(
        self,
        session: AsyncSession,
        id: UUID,
        **kwargs,
    ) -> DocumentModel | None:
        """Update a document; the engine id is never rewritten."""
        if "document_engine_id" in kwargs:
            raise ValueError("document_engine_id cannot be changed once set")
        return await super().update_by_id(session, id, **kwargs)

    async def update_metadata(
        self,
        session: AsyncSession,
        id: UUID,
        title: str,
        author: str | None,
    ) -> DocumentModel | None:
        """
        Update user-editable metadata.

        Args:
            session: Async database session
            id: Document UUID
            title: New title
            author: New author

        Returns:
            Updated DocumentModel if found, None otherwise
        """
        return await self.update_by_id(session, id, title=title, author=author)

    async def update_file_size(
        self,
        session: AsyncSession,
        id: UUID,
        file_size: int,
    ) -> DocumentModel | None:
        """
        Record the size of the bytes now stored in the engine.

        Args:
            session: Async database session
            id: Document UUID
            file_size: Stored byte count

        Returns:
            Updated DocumentModel if found, None otherwise
        """
        return await self.update_by_id(session, id, file_size=file_size)


document_crud = DocumentCRUD()
