"""
Document domain models and schemas.

Request/response schemas for document operations.

Dependencies: pydantic
System role: Document API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class OwnerSummary(BaseModel):
    """Owner fields embedded in document responses."""

    id: uuid.UUID
    name: str | None = None
    email: str


class DocumentResponse(BaseModel):
    """Response schema for document metadata."""

    id: uuid.UUID
    document_engine_id: str
    title: str
    filename: str
    file_type: str | None = None
    file_size: int
    author: str | None = None
    created_at: datetime
    updated_at: datetime
    owner: OwnerSummary | None = None


class DocumentEnvelope(BaseModel):
    """Single-document response wrapper."""

    document: DocumentResponse


class DocumentListResponse(BaseModel):
    """Document list response."""

    documents: list[DocumentResponse]
    total: int


class UpdateDocumentRequest(BaseModel):
    """Request schema for editing document metadata."""

    title: str | None = Field(None, description="New title (required, at most 512 characters)")
    author: str | None = Field(None, description="New author; kept when omitted")


class DeleteDocumentResponse(BaseModel):
    """Response schema for document deletion."""

    success: bool = True


class ViewerUrlResponse(BaseModel):
    """Browser-facing engine URLs sharing one signed access token."""

    viewer_url: str
    thumbnail_url: str
    download_url: str
    jwt: str
    expires_at: datetime
