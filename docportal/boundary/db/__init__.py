"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Connection management
  - UserModel, UserSessionModel, DocumentModel, UserRole: Domain entities
  - document_crud, user_crud, user_session_crud: CRUD operation singletons

Dependencies: sqlalchemy, docportal.configs
System role: Relational metadata store
"""

from docportal.boundary.db.base import Base, TimestampMixin, UUIDMixin
from docportal.boundary.db.connection import (
    dispose_engine,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from docportal.boundary.db.models import (
    DocumentModel,
    UserModel,
    UserRole,
    UserSessionModel,
)
from docportal.boundary.db.CRUD import (
    BaseCRUD,
    DocumentCRUD,
    UserCRUD,
    UserSessionCRUD,
    document_crud,
    user_crud,
    user_session_crud,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "dispose_engine",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "DocumentModel",
    "UserModel",
    "UserRole",
    "UserSessionModel",
    # CRUD classes
    "BaseCRUD",
    "DocumentCRUD",
    "UserCRUD",
    "UserSessionCRUD",
    # CRUD singletons
    "document_crud",
    "user_crud",
    "user_session_crud",
]
