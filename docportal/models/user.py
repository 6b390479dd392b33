"""
User domain models and schemas.

Dependencies: pydantic, docportal.core.roles
System role: Session identity and user API contracts
"""

import uuid

from pydantic import BaseModel, ConfigDict, Field

from docportal.core.roles import UserRole


class SessionUser(BaseModel):
    """Identity attached to an authenticated request."""

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID
    email: str
    name: str | None = None
    role: UserRole = UserRole.USER
    impersonation_mode: UserRole = UserRole.USER

    @property
    def display_name(self) -> str:
        """Name, then email; used as the default document author."""
        return self.name or self.email or "Unknown"


class UserResponse(BaseModel):
    """Response schema for the current user."""

    id: uuid.UUID
    email: str
    name: str | None
    role: UserRole
    impersonation_mode: UserRole


class ImpersonationModeRequest(BaseModel):
    """Request schema for switching an administrator's view mode."""

    mode: UserRole = Field(description="ADMIN for unrestricted view, USER for owner-only view")
