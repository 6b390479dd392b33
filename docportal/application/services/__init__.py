"""Service orchestrators."""

from .document_service import DocumentService, UploadedFile, ViewerAccess
from .signing_service import SignStage, SigningService
from .user_service import UserService

__all__ = [
    "DocumentService",
    "SignStage",
    "SigningService",
    "UploadedFile",
    "UserService",
    "ViewerAccess",
]
