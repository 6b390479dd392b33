"""
Row-level visibility for documents.

Maps a session's (role, impersonation mode) pair to the predicate every
document query is restricted by. Administrators see everything only while
their impersonation mode is also ADMIN; everyone else sees only the rows
they own.

Dependencies: docportal.core.roles
System role: Authorization predicate shared by list/get/update/delete
"""

from dataclasses import dataclass
from uuid import UUID

from docportal.core.roles import UserRole
from docportal.models.user import SessionUser


@dataclass(frozen=True)
class Unrestricted:
    """No restriction: every document row is visible."""


@dataclass(frozen=True)
class OwnerOnly:
    """Only rows owned by ``owner_id`` are visible."""

    owner_id: UUID


DocumentFilter = Unrestricted | OwnerOnly


def get_effective_document_filter(user: SessionUser) -> DocumentFilter:
    """
    Derive the document visibility predicate for a session user.

    Args:
        user: Authenticated session user

    Returns:
        DocumentFilter: Unrestricted for ADMIN role in ADMIN mode, OwnerOnly otherwise
    """
    if user.role == UserRole.ADMIN and user.impersonation_mode == UserRole.ADMIN:
        return Unrestricted()
    return OwnerOnly(owner_id=user.id)
