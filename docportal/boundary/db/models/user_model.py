"""
User ORM model.

Represents an authenticated account with a role and the view mode an
administrator is currently using.

Dependencies: sqlalchemy, docportal.boundary.db.base
System role: Identity persistence for ownership and access control
"""

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from docportal.boundary.db.base import Base, TimestampMixin, UUIDMixin
from docportal.core.roles import UserRole


class UserModel(Base, UUIDMixin, TimestampMixin):
    """
    User ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        email: Unique login email
        name: Display name (optional)
        role: USER or ADMIN
        current_impersonation_mode: View mode; only meaningful for ADMIN accounts
        created_at: Account creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)

    Relationships:
        documents: Owned DocumentModel rows (cascade delete)
        sessions: UserSessionModel rows (cascade delete)
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, native_enum=False),
        nullable=False,
        default=UserRole.USER,
    )

    current_impersonation_mode: Mapped[UserRole] = mapped_column(
        Enum(UserRole, native_enum=False),
        nullable=False,
        default=UserRole.USER,
    )

    # Relationships
    documents = relationship(
        "DocumentModel",
        back_populates="owner",
        cascade="all, delete-orphan",
    )
    sessions = relationship(
        "UserSessionModel",
        back_populates="user",
        cascade="all, delete-orphan",
    )
