"""
User and login-session CRUD operations.

Dependencies: sqlalchemy, docportal.boundary.db.models
System role: Identity persistence operations
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from docportal.boundary.db.CRUD.base_crud import BaseCRUD
from docportal.boundary.db.models.user_model import UserModel, UserRole
from docportal.boundary.db.models.user_session_model import UserSessionModel


class UserCRUD(BaseCRUD[UserModel]):
    """CRUD operations for UserModel."""

    def __init__(self) -> None:
        """Initialize UserCRUD with UserModel."""
        super().__init__(UserModel)

    async def get_by_email(self, session: AsyncSession, email: str) -> UserModel | None:
        """
        Retrieve a user by login email.

        Args:
            session: Async database session
            email: Email address

        Returns:
            UserModel if found, None otherwise
        """
        stmt = select(UserModel).where(UserModel.email == email)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def set_impersonation_mode(
        self,
        session: AsyncSession,
        id: UUID,
        mode: UserRole,
    ) -> UserModel | None:
        """
        Persist the view mode for a user.

        Args:
            session: Async database session
            id: User UUID
            mode: USER or ADMIN

        Returns:
            Updated UserModel if found, None otherwise
        """
        return await self.update_by_id(session, id, current_impersonation_mode=mode)


class UserSessionCRUD(BaseCRUD[UserSessionModel]):
    """CRUD operations for UserSessionModel."""

    def __init__(self) -> None:
        """Initialize UserSessionCRUD with UserSessionModel."""
        super().__init__(UserSessionModel)

    async def get_active_by_token(
        self,
        session: AsyncSession,
        token: str,
        now: datetime,
    ) -> UserSessionModel | None:
        """
        Retrieve a non-expired session with its user loaded.

        Args:
            session: Async database session
            token: Opaque session token
            now: Reference time (UTC)

        Returns:
            UserSessionModel if active, None otherwise
        """
        stmt = (
            select(UserSessionModel)
            .options(selectinload(UserSessionModel.user))
            .where(
                UserSessionModel.session_token == token,
                UserSessionModel.expires_at > now,
            )
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


user_crud = UserCRUD()
user_session_crud = UserSessionCRUD()
