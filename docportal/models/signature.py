"""
Signature request schemas.

A signature is either invisible (cryptographic only, page index only) or
visible (page index, placement rectangle and appearance).

Dependencies: pydantic
System role: Sign endpoint API contracts
"""

import enum
import uuid
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class AppearanceMode(str, enum.Enum):
    """What a visible signature renders."""

    SIGNATURE_ONLY = "signatureOnly"
    DESCRIPTION_ONLY = "descriptionOnly"
    SIGNATURE_AND_DESCRIPTION = "signatureAndDescription"


class SignatureRect(BaseModel):
    """Placement in PDF points measured from the page's top-left corner."""

    x: float = Field(ge=0)
    y: float = Field(ge=0)
    width: float = Field(gt=0)
    height: float = Field(gt=0)


class SignatureAppearance(BaseModel):
    """Rendering options for a visible signature."""

    mode: AppearanceMode = AppearanceMode.SIGNATURE_ONLY
    show_watermark: bool = True
    show_sign_date: bool = True
    show_date_timezone: bool = False
    flatten: bool = False
    use_custom_image: bool = False


class InvisibleSignature(BaseModel):
    """Cryptographic-only signature."""

    signature_type: Literal["invisible"] = "invisible"
    page_index: int = Field(default=0, ge=0)


class VisibleSignature(BaseModel):
    """Signature drawn on a page."""

    signature_type: Literal["visible"] = "visible"
    page_index: int = Field(default=0, ge=0)
    rect: SignatureRect
    appearance: SignatureAppearance = Field(default_factory=SignatureAppearance)


SignatureSpec = Annotated[
    Union[InvisibleSignature, VisibleSignature],
    Field(discriminator="signature_type"),
]


class SignDocumentRequest(BaseModel):
    """Request schema for POST /documents/{id}/sign."""

    signer_name: str = Field(..., min_length=1, max_length=255)
    reason: str = Field(default="", max_length=1024)
    signature_options: SignatureSpec
    replace_original: bool = False


class SignDocumentResponse(BaseModel):
    """Response schema for a completed signing."""

    success: bool = True
    document_id: uuid.UUID
    message: str = "Document signed successfully"
