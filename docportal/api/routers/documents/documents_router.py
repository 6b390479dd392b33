"""
Document API endpoints.

Routes:
- GET /documents - List visible documents
- POST /documents - Upload a document (multipart)
- GET /documents/{id} - Get single document
- PUT /documents/{id} - Edit title and author
- DELETE /documents/{id} - Delete document
- GET /documents/{id}/viewer-url - Issue viewer, thumbnail and download URLs
- POST /documents/{id}/sign - Digitally sign a document

Every route requires a session. Lookups go through the caller's access
filter; signing is restricted to the document owner.

Dependencies: docportal.application.services, docportal.models, docportal.api.deps
System role: Document management HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from docportal.api.deps import (
    get_current_user,
    get_document_service,
    get_settings_dependency,
    get_signing_service,
)
from docportal.application.services import DocumentService, SigningService
from docportal.configs import Settings
from docportal.models.document import (
    DeleteDocumentResponse,
    DocumentEnvelope,
    DocumentListResponse,
    UpdateDocumentRequest,
    ViewerUrlResponse,
)
from docportal.models.signature import SignDocumentRequest, SignDocumentResponse
from docportal.models.user import SessionUser

from .document_error_handling import handle_document_errors
from .document_responses import (
    map_document_to_response,
    map_documents_to_response,
    map_viewer_access_to_response,
)
from .document_validators import validate_author, validate_title, validate_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.get("", response_model=DocumentListResponse)
@handle_document_errors()
async def list_documents(
    user: SessionUser = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentListResponse:
    """
    List documents visible to the caller, newest first.

    Returns:
        DocumentListResponse: Documents with owner summaries

    Raises:
        HTTPException(401): No valid session
        HTTPException(500): Retrieval failed
    """
    documents = await document_service.list_documents(user)
    logger.info(
        "Documents listed",
        extra={"user_id": str(user.id), "count": len(documents)},
    )
    return map_documents_to_response(documents)


@router.post("", response_model=DocumentEnvelope, status_code=status.HTTP_201_CREATED)
@handle_document_errors(ingestion=True)
async def upload_document(
    file: UploadFile | None = File(None),
    title: str | None = Form(None),
    author: str | None = Form(None),
    user: SessionUser = Depends(get_current_user),
    settings: Settings = Depends(get_settings_dependency),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentEnvelope:
    """
    Upload a document to the Document Engine and record its metadata.

    Args:
        file: Document file (multipart)
        title: Document title
        author: Optional author; defaults to the caller's name or email

    Returns:
        DocumentEnvelope: Created document

    Raises:
        HTTPException(400): Missing file, bad title or author, or file too large
        HTTPException(401): No valid session
        HTTPException(503): Document Engine unavailable after retries
    """
    upload, clean_title = await validate_upload(
        file,
        title,
        settings.uploads.max_file_size_bytes,
    )
    clean_author = validate_author(author)

    logger.info(
        "Uploading document",
        extra={
            "user_id": str(user.id),
            "upload_filename": upload.filename,
            "file_size": upload.size,
        },
    )

    document = await document_service.create_document(
        user,
        upload,
        title=clean_title,
        author=clean_author,
    )
    return DocumentEnvelope(document=map_document_to_response(document))


@router.get("/{document_id}", response_model=DocumentEnvelope)
@handle_document_errors()
async def get_document(
    document_id: UUID,
    user: SessionUser = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentEnvelope:
    """
    Get single document.

    Raises:
        HTTPException(404): Document not found or not visible
    """
    document = await document_service.get_document(user, document_id)
    return DocumentEnvelope(document=map_document_to_response(document))


@router.put("/{document_id}", response_model=DocumentEnvelope)
@handle_document_errors()
async def update_document(
    document_id: UUID,
    request: UpdateDocumentRequest,
    user: SessionUser = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentEnvelope:
    """
    Edit a document's title and author.

    Raises:
        HTTPException(400): Title missing or too long, author too long
        HTTPException(404): Document not found or not visible
    """
    title = validate_title(request.title)
    author = validate_author(request.author)

    document = await document_service.update_document(user, document_id, title=title, author=author)
    logger.info("Document updated", extra={"document_id": str(document_id)})
    return DocumentEnvelope(document=map_document_to_response(document))


@router.delete("/{document_id}", response_model=DeleteDocumentResponse)
@handle_document_errors()
async def delete_document(
    document_id: UUID,
    user: SessionUser = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service),
) -> DeleteDocumentResponse:
    """
    Delete a document.

    The engine copy is removed on a best-effort basis; the metadata row is
    always removed once the document is visible to the caller.

    Raises:
        HTTPException(404): Document not found or not visible
    """
    await document_service.delete_document(user, document_id)
    return DeleteDocumentResponse(success=True)


@router.get("/{document_id}/viewer-url", response_model=ViewerUrlResponse)
@handle_document_errors()
async def get_viewer_url(
    document_id: UUID,
    user: SessionUser = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service),
) -> ViewerUrlResponse:
    """
    Issue browser-facing engine URLs for a document.

    Raises:
        HTTPException(404): Document not found or not visible
        HTTPException(500): Token generation failed
    """
    access = await document_service.get_viewer_access(user, document_id)
    logger.info(
        "Viewer access issued",
        extra={"document_id": str(document_id), "user_id": str(user.id), "expires_at": access.expires_at.isoformat()},
    )
    return map_viewer_access_to_response(access)


@router.post("/{document_id}/sign", response_model=SignDocumentResponse)
@handle_document_errors()
async def sign_document(
    document_id: UUID,
    request: SignDocumentRequest,
    user: SessionUser = Depends(get_current_user),
    signing_service: SigningService = Depends(get_signing_service),
) -> SignDocumentResponse:
    """
    Digitally sign a document owned by the caller.

    With ``replace_original`` the signed bytes overwrite the engine copy
    under the same id; otherwise a new "(Signed)" document is created.

    Raises:
        HTTPException(403): Caller does not own the document
        HTTPException(404): Document not found
        HTTPException(500): A signing stage failed
    """
    logger.info(
        "Signing document",
        extra={
            "document_id": str(document_id),
            "user_id": str(user.id),
            "signature_type": request.signature_options.signature_type,
            "replace_original": request.replace_original,
        },
    )
    result_id = await signing_service.sign_document(user, document_id, request)
    return SignDocumentResponse(success=True, document_id=result_id)
