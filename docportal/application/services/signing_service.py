"""
Sign orchestrator.

Single-pass flow: authorize the owner, fetch the current PDF with a
narrowly scoped token, sign it, publish the signed bytes back to the
engine, then record the result.

    AUTHORIZING -> FETCHING -> SIGNING -> PUBLISHING -> RECORDING -> DONE

Any failure after authorization aborts with SigningFailedError naming the
stage. Side effects that already happened (a signed copy uploaded but
never recorded, for example) are not rolled back.

Dependencies: docportal.boundary, docportal.core
System role: Download -> sign -> re-upload -> persist orchestration
"""

import enum
import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from docportal.boundary.db.CRUD.document_crud import document_crud
from docportal.boundary.db.models.document_model import DocumentModel
from docportal.boundary.document_engine.client import DocumentEngineClient
from docportal.boundary.document_engine.tokens import SIGNING_PERMISSIONS
from docportal.boundary.signing.client import SigningClient
from docportal.core.exceptions import (
    DocumentNotFoundError,
    PermissionDeniedError,
    SigningFailedError,
)
from docportal.models.signature import SignDocumentRequest
from docportal.models.user import SessionUser

logger = logging.getLogger(__name__)

SIGNED_TITLE_SUFFIX = " (Signed)"
PDF_CONTENT_TYPE = "application/pdf"


class SignStage(str, enum.Enum):
    """Stages of one signing run."""

    AUTHORIZING = "authorizing"
    FETCHING = "fetching"
    SIGNING = "signing"
    PUBLISHING = "publishing"
    RECORDING = "recording"
    DONE = "done"
    FAILED = "failed"


class SigningService:
    """Composes the engine client, signing client and metadata store."""

    def __init__(
        self,
        db: AsyncSession,
        engine: DocumentEngineClient,
        signer: SigningClient,
    ) -> None:
        """
        Initialize signing service.

        Args:
            db: AsyncSession for document metadata
            engine: Document Engine client
            signer: Digital-signature API client
        """
        self.db = db
        self.engine = engine
        self.signer = signer

    async def _authorize(self, user: SessionUser, document_id: UUID) -> DocumentModel:
        # Ownership only; administrators in ADMIN mode cannot sign others' documents.
        document = await document_crud.get_by_id(self.db, document_id)
        if document is None:
            raise DocumentNotFoundError(str(document_id))
        if document.owner_id != user.id:
            logger.warning(
                "Sign attempt by non-owner",
                extra={"document_id": str(document_id), "user_id": str(user.id)},
            )
            raise PermissionDeniedError("Only the document owner can sign documents")
        return document

    async def _fetch(self, document: DocumentModel) -> bytes:
        token = self.engine.issue_access_token(
            document.document_engine_id,
            permissions=SIGNING_PERMISSIONS,
        )
        return await self.engine.download_pdf(document.document_engine_id, token)

    async def _publish(self, document: DocumentModel, signed: bytes, replace: bool) -> str:
        if replace:
            await self.engine.upload(
                signed,
                document.filename,
                PDF_CONTENT_TYPE,
                document_id=document.document_engine_id,
                overwrite=True,
            )
            return document.document_engine_id
        return await self.engine.upload(signed, document.filename, PDF_CONTENT_TYPE)

    async def _record(
        self,
        user: SessionUser,
        document: DocumentModel,
        external_id: str,
        signed_size: int,
        replace: bool,
    ) -> UUID:
        if replace:
            await document_crud.update_file_size(self.db, document.id, signed_size)
            await self.db.commit()
            return document.id

        signed_document = await document_crud.create(
            self.db,
            document_engine_id=external_id,
            title=f"{document.title}{SIGNED_TITLE_SUFFIX}",
            filename=document.filename,
            file_type=document.file_type,
            file_size=signed_size,
            author=document.author,
            owner_id=user.id,
        )
        await self.db.commit()
        return signed_document.id

    async def sign_document(
        self,
        user: SessionUser,
        document_id: UUID,
        request: SignDocumentRequest,
    ) -> UUID:
        """
        Sign a document owned by the user.

        Args:
            user: Authenticated session user
            document_id: Document UUID
            request: Signer, reason, signature spec and replace flag

        Returns:
            UUID: The updated document (replace) or the new signed copy

        Raises:
            DocumentNotFoundError: If the document does not exist
            PermissionDeniedError: If the user does not own the document
            SigningFailedError: If fetching, signing, publishing or recording fails
        """
        stage = SignStage.AUTHORIZING
        document = await self._authorize(user, document_id)
        replace = request.replace_original

        try:
            stage = SignStage.FETCHING
            pdf_bytes = await self._fetch(document)

            stage = SignStage.SIGNING
            signed = await self.signer.sign(
                pdf_bytes,
                request.signer_name,
                request.reason,
                request.signature_options,
            )

            stage = SignStage.PUBLISHING
            external_id = await self._publish(document, signed, replace)

            stage = SignStage.RECORDING
            result_id = await self._record(user, document, external_id, len(signed), replace)
        except Exception as e:
            await self.db.rollback()
            logger.exception(
                "Document signing failed",
                extra={
                    "document_id": str(document_id),
                    "stage": stage.value,
                    "replace_original": replace,
                    "error": str(e),
                },
            )
            raise SigningFailedError(
                f"Signing failed during {stage.value}: {getattr(e, 'message', str(e))}",
                stage=stage.value,
                details={"document_id": str(document_id)},
            ) from e

        stage = SignStage.DONE
        logger.info(
            "Document signed",
            extra={
                "document_id": str(document_id),
                "result_document_id": str(result_id),
                "replace_original": replace,
                "signed_size": len(signed),
                "stage": stage.value,
            },
        )
        return result_id
