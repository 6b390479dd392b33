"""
Document response mapping utilities.

Transforms ORM models into Pydantic response models.

Dependencies: docportal.models.document, docportal.boundary.db.models
System role: Document response transformation
"""

from typing import Sequence

from docportal.application.services import ViewerAccess
from docportal.boundary.db.models.document_model import DocumentModel
from docportal.models.document import (
    DocumentListResponse,
    DocumentResponse,
    OwnerSummary,
    ViewerUrlResponse,
)


def map_document_to_response(document: DocumentModel, include_owner: bool = False) -> DocumentResponse:
    """
    Transform a DocumentModel into DocumentResponse.

    Args:
        document: ORM row
        include_owner: Embed the owner summary (owner must be loaded)

    Returns:
        DocumentResponse: Pydantic model for API response
    """
    owner = None
    if include_owner and document.owner is not None:
        owner = OwnerSummary(
            id=document.owner.id,
            name=document.owner.name,
            email=document.owner.email,
        )
    return DocumentResponse(
        id=document.id,
        document_engine_id=document.document_engine_id,
        title=document.title,
        filename=document.filename,
        file_type=document.file_type,
        file_size=document.file_size,
        author=document.author,
        created_at=document.created_at,
        updated_at=document.updated_at,
        owner=owner,
    )


def map_documents_to_response(documents: Sequence[DocumentModel]) -> DocumentListResponse:
    """Transform a document list, embedding owner summaries."""
    items = [map_document_to_response(d, include_owner=True) for d in documents]
    return DocumentListResponse(documents=items, total=len(items))


def map_viewer_access_to_response(access: ViewerAccess) -> ViewerUrlResponse:
    return ViewerUrlResponse(
        viewer_url=access.viewer_url,
        thumbnail_url=access.thumbnail_url,
        download_url=access.download_url,
        jwt=access.jwt,
        expires_at=access.expires_at,
    )
