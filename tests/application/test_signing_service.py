"""
Test suite for the sign orchestrator.

System role: Verification of download -> sign -> re-upload -> persist
"""

import uuid

import pytest

from docportal.application.services.signing_service import SigningService
from docportal.application.services.user_service import to_session_user
from docportal.boundary.db.CRUD.document_crud import document_crud
from docportal.boundary.document_engine.tokens import SIGNING_PERMISSIONS
from docportal.core.exceptions import DocumentNotFoundError, PermissionDeniedError, SigningFailedError
from docportal.core.roles import UserRole
from docportal.models.signature import InvisibleSignature, SignDocumentRequest

ORIGINAL_PDF = b"%PDF-1.4 original"


@pytest.fixture
def signing_service(test_async_db, fake_engine, fake_signer) -> SigningService:
    return SigningService(db=test_async_db, engine=fake_engine, signer=fake_signer)


@pytest.fixture
async def stored_document(fake_engine, make_user, make_document):
    """A document owned by a fresh user, with bytes held by the fake engine."""
    owner = await make_user()
    document = await make_document(owner, title="Lease", author="Landlord", file_size=len(ORIGINAL_PDF))
    fake_engine.documents[document.document_engine_id] = ORIGINAL_PDF
    return owner, document


def sign_request(replace: bool) -> SignDocumentRequest:
    return SignDocumentRequest(
        signer_name="Ada",
        reason="Agreed",
        signature_options=InvisibleSignature(page_index=0),
        replace_original=replace,
    )


class TestSignReplaceOriginal:
    """Test suite for signing with replace_original=True."""

    @pytest.mark.asyncio
    async def test_should_overwrite_in_place(
        self, signing_service, fake_engine, stored_document, test_async_db
    ) -> None:
        # Arrange
        owner, document = stored_document
        external_id = document.document_engine_id
        count_before = await document_crud.count_by_owner(test_async_db, owner.id)

        # Act
        result_id = await signing_service.sign_document(to_session_user(owner), document.id, sign_request(True))

        # Assert
        stored = await document_crud.get_by_id(test_async_db, document.id)
        signed_size = len(fake_engine.documents[external_id])
        assert result_id == document.id
        assert stored.document_engine_id == external_id
        assert stored.file_size == signed_size
        assert await document_crud.count_by_owner(test_async_db, owner.id) == count_before
        assert fake_engine.upload_calls[-1]["document_id"] == external_id
        assert fake_engine.upload_calls[-1]["overwrite"] is True

    @pytest.mark.asyncio
    async def test_fetch_token_should_be_narrow(self, signing_service, fake_engine, stored_document) -> None:
        owner, document = stored_document

        await signing_service.sign_document(to_session_user(owner), document.id, sign_request(True))

        assert fake_engine.issued_tokens[0]["permissions"] == SIGNING_PERMISSIONS


class TestSignAsCopy:
    """Test suite for signing with replace_original=False."""

    @pytest.mark.asyncio
    async def test_should_create_signed_copy(
        self, signing_service, fake_engine, stored_document, test_async_db
    ) -> None:
        # Arrange
        owner, document = stored_document

        # Act
        result_id = await signing_service.sign_document(to_session_user(owner), document.id, sign_request(False))

        # Assert
        copy = await document_crud.get_by_id(test_async_db, result_id)
        original = await document_crud.get_by_id(test_async_db, document.id)
        assert result_id != document.id
        assert copy.title == "Lease (Signed)"
        assert copy.owner_id == owner.id
        assert copy.author == "Landlord"
        assert copy.document_engine_id != document.document_engine_id
        assert fake_engine.documents[copy.document_engine_id].endswith(b"%signed")
        assert original.file_size == len(ORIGINAL_PDF)
        assert original.title == "Lease"


class TestSignAuthorization:
    """Test suite for ownership checks."""

    @pytest.mark.asyncio
    async def test_non_owner_should_be_forbidden(self, signing_service, fake_signer, stored_document, make_user) -> None:
        _, document = stored_document
        stranger = to_session_user(await make_user())

        with pytest.raises(PermissionDeniedError) as exc_info:
            await signing_service.sign_document(stranger, document.id, sign_request(False))

        assert exc_info.value.message == "Only the document owner can sign documents"
        assert fake_signer.calls == []

    @pytest.mark.asyncio
    async def test_admin_in_admin_mode_should_still_be_forbidden(
        self, signing_service, stored_document, make_user
    ) -> None:
        _, document = stored_document
        admin = to_session_user(await make_user(role=UserRole.ADMIN, mode=UserRole.ADMIN))

        with pytest.raises(PermissionDeniedError):
            await signing_service.sign_document(admin, document.id, sign_request(True))

    @pytest.mark.asyncio
    async def test_missing_document_should_be_not_found(self, signing_service, make_user) -> None:
        user = to_session_user(await make_user())

        with pytest.raises(DocumentNotFoundError):
            await signing_service.sign_document(user, uuid.uuid4(), sign_request(False))


class TestSignFailures:
    """Test suite for stage failures."""

    @pytest.mark.asyncio
    async def test_signer_failure_should_name_stage_and_write_nothing(
        self, signing_service, fake_engine, fake_signer, stored_document, signing_unavailable, test_async_db
    ) -> None:
        # Arrange
        owner, document = stored_document
        fake_signer.error = signing_unavailable

        # Act
        with pytest.raises(SigningFailedError) as exc_info:
            await signing_service.sign_document(to_session_user(owner), document.id, sign_request(False))

        # Assert
        assert exc_info.value.stage == "signing"
        assert fake_engine.upload_calls == []
        assert await document_crud.count_by_owner(test_async_db, owner.id) == 1

    @pytest.mark.asyncio
    async def test_publish_failure_should_not_be_retried(
        self, signing_service, fake_engine, stored_document
    ) -> None:
        owner, document = stored_document
        fake_engine.fail_uploads = 1

        with pytest.raises(SigningFailedError) as exc_info:
            await signing_service.sign_document(to_session_user(owner), document.id, sign_request(True))

        assert exc_info.value.stage == "publishing"
        assert len(fake_engine.upload_calls) == 1

    @pytest.mark.asyncio
    async def test_fetch_failure_should_report_fetching(self, signing_service, fake_engine, stored_document) -> None:
        owner, document = stored_document
        fake_engine.documents.clear()

        with pytest.raises(SigningFailedError) as exc_info:
            await signing_service.sign_document(to_session_user(owner), document.id, sign_request(True))

        assert exc_info.value.stage == "fetching"
