"""
Current user API endpoints.

Routes:
- GET /me - Session user
- PUT /me/impersonation-mode - Switch an administrator's view

Dependencies: docportal.application.services, docportal.api.deps
System role: Session identity HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from docportal.api.deps import get_current_user, get_user_service
from docportal.application.services import UserService
from docportal.core.exceptions import PermissionDeniedError
from docportal.models.user import ImpersonationModeRequest, SessionUser, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/me", tags=["users"])


def _to_response(user: SessionUser) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        impersonation_mode=user.impersonation_mode,
    )


@router.get("", response_model=UserResponse)
async def get_me(user: SessionUser = Depends(get_current_user)) -> UserResponse:
    """Return the authenticated user."""
    return _to_response(user)


@router.put("/impersonation-mode", response_model=UserResponse)
async def set_impersonation_mode(
    request: ImpersonationModeRequest,
    user: SessionUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    """
    Switch between unrestricted (ADMIN) and owner-only (USER) views.

    Raises:
        HTTPException(403): Caller is not an administrator
    """
    try:
        updated = await user_service.set_impersonation_mode(user, request.mode)
    except PermissionDeniedError as e:
        logger.warning(
            "Non-admin attempted to change view mode",
            extra={"user_id": str(user.id)},
        )
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)
    return _to_response(updated)
