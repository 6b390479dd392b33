"""
Database models package.

Exports:
  - UserModel, UserRole: Account ORM model and role enum
  - UserSessionModel: Login session ORM model
  - DocumentModel: Document metadata ORM model

Dependencies: sqlalchemy, docportal.boundary.db.base
System role: Database model definitions for domain entities
"""

from docportal.boundary.db.models.user_model import UserModel, UserRole
from docportal.boundary.db.models.user_session_model import UserSessionModel
from docportal.boundary.db.models.document_model import DocumentModel

__all__ = [
    "DocumentModel",
    "UserModel",
    "UserRole",
    "UserSessionModel",
]
