"""
Document ORM model.

Metadata for a file stored in the external Document Engine. The row only
points at the engine's copy through ``document_engine_id``.

Dependencies: sqlalchemy, docportal.boundary.db.base
System role: Document metadata persistence
"""

import uuid

from sqlalchemy import BigInteger, ForeignKey, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from docportal.boundary.db.base import Base, TimestampMixin, UUIDMixin

TITLE_MAX_LENGTH = 512
AUTHOR_MAX_LENGTH = 255


class DocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Document ORM model.

    Lifecycle: inserted only after the Document Engine accepted the upload;
    title/author edited in place; file_size rewritten when a signed copy
    replaces the original; removed after a best-effort engine delete.

    Attributes:
        id: UUID primary key (auto-generated)
        document_engine_id: External engine id (immutable once set)
        title: User-facing title
        filename: Original filename
        file_type: Declared MIME type
        file_size: Bytes stored in the engine at the last successful write
        author: Optional author label
        owner_id: Foreign key to UserModel (cascade delete)
        created_at: Upload timestamp (UTC)
        updated_at: Last modification timestamp (UTC)

    Relationships:
        owner: Owning UserModel (back_populates=documents)
    """

    __tablename__ = "documents"

    document_engine_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        doc="Identifier assigned by the Document Engine",
    )

    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)

    filename: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Original filename",
    )

    file_type: Mapped[str | None] = mapped_column(String(255), nullable=True)

    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    author: Mapped[str | None] = mapped_column(String(AUTHOR_MAX_LENGTH), nullable=True)

    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    owner = relationship("UserModel", back_populates="documents")

    @validates("document_engine_id")
    def _validate_engine_id(self, key: str, value: str) -> str:
        current = self.__dict__.get(key)
        if current is not None and current != value:
            raise ValueError("document_engine_id cannot be changed once set")
        return value
