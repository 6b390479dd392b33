"""
Test suite for user and session CRUD operations.

System role: Verification of session lookup and impersonation persistence
"""

from datetime import timedelta

import pytest

from docportal.boundary.db.base import utcnow
from docportal.boundary.db.CRUD.user_crud import user_crud, user_session_crud
from docportal.core.roles import UserRole


class TestUserSessionCRUDGetActiveByToken:
    """Test suite for UserSessionCRUD.get_active_by_token()."""

    @pytest.mark.asyncio
    async def test_active_token_should_load_user(self, test_async_db, make_user, make_session) -> None:
        # Arrange
        user = await make_user(email="alice@example.com")
        await make_session(user, token="tok-1")

        # Act
        result = await user_session_crud.get_active_by_token(test_async_db, "tok-1", utcnow())

        # Assert
        assert result is not None
        assert result.user.email == "alice@example.com"

    @pytest.mark.asyncio
    async def test_expired_token_should_return_none(self, test_async_db, make_user, make_session) -> None:
        user = await make_user()
        await make_session(user, token="tok-old", expires_in=timedelta(minutes=-5))

        assert await user_session_crud.get_active_by_token(test_async_db, "tok-old", utcnow()) is None

    @pytest.mark.asyncio
    async def test_unknown_token_should_return_none(self, test_async_db) -> None:
        assert await user_session_crud.get_active_by_token(test_async_db, "nope", utcnow()) is None


class TestUserCRUD:
    """Test suite for UserCRUD."""

    @pytest.mark.asyncio
    async def test_get_by_email_should_find_user(self, test_async_db, make_user) -> None:
        user = await make_user(email="bob@example.com")

        found = await user_crud.get_by_email(test_async_db, "bob@example.com")

        assert found.id == user.id

    @pytest.mark.asyncio
    async def test_set_impersonation_mode_should_persist(self, test_async_db, make_user) -> None:
        admin = await make_user(role=UserRole.ADMIN, mode=UserRole.USER)

        updated = await user_crud.set_impersonation_mode(test_async_db, admin.id, UserRole.ADMIN)

        assert updated.current_impersonation_mode == UserRole.ADMIN
