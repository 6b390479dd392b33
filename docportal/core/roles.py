"""
Account roles.

Dependencies: None (pure domain layer)
System role: Role values shared by persistence and access control
"""

import enum


class UserRole(str, enum.Enum):
    """
    Account roles, also used as impersonation modes.

    USER: Ordinary account, sees only owned documents
    ADMIN: Administrative account, unrestricted while viewing as ADMIN
    """

    USER = "USER"
    ADMIN = "ADMIN"
