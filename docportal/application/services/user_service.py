"""
User service.

Resolves session tokens to session users and switches an administrator's
view mode.

Dependencies: docportal.boundary.db.CRUD, docportal.core
System role: Authentication and impersonation use cases
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from docportal.boundary.db.base import utcnow
from docportal.boundary.db.CRUD.user_crud import user_crud, user_session_crud
from docportal.boundary.db.models.user_model import UserModel
from docportal.core.exceptions import AuthenticationError, PermissionDeniedError
from docportal.core.roles import UserRole
from docportal.models.user import SessionUser

logger = logging.getLogger(__name__)


def to_session_user(user: UserModel) -> SessionUser:
    """Project a UserModel onto the identity carried by a request."""
    return SessionUser(
        id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        impersonation_mode=user.current_impersonation_mode,
    )


class UserService:
    """User and session orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize user service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def authenticate(self, token: str | None) -> SessionUser:
        """
        Resolve a session token.

        Args:
            token: Opaque session token from the request

        Returns:
            SessionUser: Identity of the session owner

        Raises:
            AuthenticationError: If the token is missing, unknown or expired
        """
        if not token:
            raise AuthenticationError()
        user_session = await user_session_crud.get_active_by_token(self.db, token, utcnow())
        if user_session is None or user_session.user is None:
            raise AuthenticationError()
        return to_session_user(user_session.user)

    async def set_impersonation_mode(self, user: SessionUser, mode: UserRole) -> SessionUser:
        """
        Switch an administrator between unrestricted and owner-only views.

        Args:
            user: Authenticated session user
            mode: ADMIN or USER

        Returns:
            SessionUser: Identity with the new mode

        Raises:
            PermissionDeniedError: If the user is not an administrator
        """
        if user.role != UserRole.ADMIN:
            raise PermissionDeniedError("Only administrators can change view mode")

        updated = await user_crud.set_impersonation_mode(self.db, user.id, mode)
        if updated is None:
            raise AuthenticationError()
        await self.db.commit()
        logger.info(
            "Impersonation mode changed",
            extra={"user_id": str(user.id), "mode": mode.value},
        )
        return to_session_user(updated)
