"""
Session authentication dependency.

Accepts the session token as ``Authorization: Bearer <token>`` or as the
``session_token`` cookie.

Dependencies: fastapi, docportal.application.services
System role: Request authentication
"""

from fastapi import Cookie, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from docportal.application.services import UserService
from docportal.models.user import SessionUser

from .dependencies import get_user_service

SESSION_COOKIE = "session_token"

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    user_service: UserService = Depends(get_user_service),
) -> SessionUser:
    """
    Resolve the authenticated user for the request.

    Raises:
        AuthenticationError: No token, unknown token or expired session (401)
    """
    token = credentials.credentials if credentials else session_token
    return await user_service.authenticate(token)
