"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from docportal.boundary.db.CRUD import document_crud, user_crud

    document = await document_crud.get_visible(db, doc_id, document_filter)
"""

from docportal.boundary.db.CRUD.base_crud import BaseCRUD
from docportal.boundary.db.CRUD.document_crud import (
    DocumentCRUD,
    apply_document_filter,
    document_crud,
)
from docportal.boundary.db.CRUD.user_crud import (
    UserCRUD,
    UserSessionCRUD,
    user_crud,
    user_session_crud,
)

__all__ = [
    "BaseCRUD",
    "DocumentCRUD",
    "UserCRUD",
    "UserSessionCRUD",
    "apply_document_filter",
    "document_crud",
    "user_crud",
    "user_session_crud",
]
