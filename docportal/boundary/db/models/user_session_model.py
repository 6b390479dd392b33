"""
User session ORM model.

Database-backed login sessions looked up by opaque token on every request.

Dependencies: sqlalchemy, docportal.boundary.db.base
System role: Session persistence for request authentication
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from docportal.boundary.db.base import Base, TimestampMixin, UUIDMixin


class UserSessionModel(Base, UUIDMixin, TimestampMixin):
    """
    Login session ORM model.

    Attributes:
        session_token: Opaque token presented by the client (unique)
        user_id: Foreign key to UserModel (cascade delete)
        expires_at: Session expiry (UTC); expired sessions never authenticate
    """

    __tablename__ = "user_sessions"

    session_token: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # Relationships
    user = relationship("UserModel", back_populates="sessions")
