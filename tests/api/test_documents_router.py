"""
Test suite for the documents router with mocked services.

System role: Verification of HTTP status mapping and request validation
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from docportal.api.deps import (
    get_current_user,
    get_document_service,
    get_settings_dependency,
    get_signing_service,
    get_user_service,
)
from docportal.api.main import create_app
from docportal.application.services import UserService, ViewerAccess
from docportal.boundary.db.models.document_model import DocumentModel
from docportal.configs import Settings
from docportal.configs.uploads import UploadSettings
from docportal.core.exceptions import (
    DocumentEngineError,
    DocumentNotFoundError,
    PermissionDeniedError,
    SigningFailedError,
)
from docportal.models.user import SessionUser


@pytest.fixture
def session_user() -> SessionUser:
    return SessionUser(id=uuid.uuid4(), email="ada@example.com", name="Ada")


@pytest.fixture
def mock_document_service():
    return AsyncMock()


@pytest.fixture
def mock_signing_service():
    return AsyncMock()


@pytest.fixture
def client(session_user, mock_document_service, mock_signing_service):
    app = create_app()
    app.dependency_overrides[get_current_user] = lambda: session_user
    app.dependency_overrides[get_document_service] = lambda: mock_document_service
    app.dependency_overrides[get_signing_service] = lambda: mock_signing_service
    app.dependency_overrides[get_settings_dependency] = lambda: Settings(
        uploads=UploadSettings(max_file_size_bytes=64)
    )
    return TestClient(app)


def make_document_model(owner_id: uuid.UUID, **overrides) -> DocumentModel:
    now = datetime.now(timezone.utc)
    fields = {
        "id": uuid.uuid4(),
        "document_engine_id": "engine-1",
        "title": "Report",
        "filename": "report.pdf",
        "file_type": "application/pdf",
        "file_size": 12,
        "author": "Ada",
        "owner_id": owner_id,
        "created_at": now,
        "updated_at": now,
    }
    fields.update(overrides)
    return DocumentModel(**fields)


class TestAuthentication:
    """Requests without a session are rejected."""

    def test_missing_session_should_be_401(self, client):
        del client.app.dependency_overrides[get_current_user]
        client.app.dependency_overrides[get_user_service] = lambda: UserService(db=AsyncMock())

        response = client.get("/api/v1/documents")

        assert response.status_code == 401
        assert response.json() == {"detail": "Authentication required"}


class TestUploadDocument:
    """Test suite for POST /documents."""

    def test_upload_should_return_201(self, client, mock_document_service, session_user):
        # Arrange
        mock_document_service.create_document.return_value = make_document_model(session_user.id)

        # Act
        response = client.post(
            "/api/v1/documents",
            files={"file": ("report.pdf", b"%PDF-1.4", "application/pdf")},
            data={"title": "  Report  "},
        )

        # Assert
        assert response.status_code == 201
        assert response.json()["document"]["document_engine_id"] == "engine-1"
        args, kwargs = mock_document_service.create_document.call_args
        assert args[1].filename == "report.pdf"
        assert kwargs["title"] == "Report"
        assert kwargs["author"] is None

    def test_missing_file_should_be_400(self, client, mock_document_service):
        response = client.post("/api/v1/documents", data={"title": "Report"})

        assert response.status_code == 400
        assert response.json()["detail"] == "No file provided"
        mock_document_service.create_document.assert_not_called()

    def test_missing_title_should_be_400(self, client, mock_document_service):
        response = client.post(
            "/api/v1/documents",
            files={"file": ("report.pdf", b"%PDF", "application/pdf")},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Title is required"
        mock_document_service.create_document.assert_not_called()

    def test_oversized_file_should_be_400_before_engine_call(self, client, mock_document_service):
        response = client.post(
            "/api/v1/documents",
            files={"file": ("big.pdf", b"x" * 65, "application/pdf")},
            data={"title": "Big"},
        )

        assert response.status_code == 400
        assert "exceeds" in response.json()["detail"]
        mock_document_service.create_document.assert_not_called()

    def test_overlong_title_should_be_400_before_engine_call(self, client, mock_document_service):
        response = client.post(
            "/api/v1/documents",
            files={"file": ("report.pdf", b"%PDF", "application/pdf")},
            data={"title": "t" * 513},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Title must be at most 512 characters"
        mock_document_service.create_document.assert_not_called()

    def test_title_at_column_limit_should_be_accepted(self, client, mock_document_service, session_user):
        mock_document_service.create_document.return_value = make_document_model(session_user.id)

        response = client.post(
            "/api/v1/documents",
            files={"file": ("report.pdf", b"%PDF", "application/pdf")},
            data={"title": "t" * 512},
        )

        assert response.status_code == 201
        assert mock_document_service.create_document.call_args.kwargs["title"] == "t" * 512

    def test_overlong_author_should_be_400_before_engine_call(self, client, mock_document_service):
        response = client.post(
            "/api/v1/documents",
            files={"file": ("report.pdf", b"%PDF", "application/pdf")},
            data={"title": "Report", "author": "a" * 256},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Author must be at most 255 characters"
        mock_document_service.create_document.assert_not_called()

    def test_engine_failure_should_be_503(self, client, mock_document_service):
        mock_document_service.create_document.side_effect = DocumentEngineError(
            "Document Engine upload failed: 500",
            status_code=500,
            response_text="internal stack trace",
        )

        response = client.post(
            "/api/v1/documents",
            files={"file": ("report.pdf", b"%PDF", "application/pdf")},
            data={"title": "Report"},
        )

        assert response.status_code == 503
        assert "stack trace" not in response.text


class TestReadAndEdit:
    """Test suite for GET/PUT/DELETE /documents/{id}."""

    def test_list_should_embed_owner_summary(self, client, mock_document_service, session_user):
        # Arrange
        from docportal.boundary.db.models.user_model import UserModel

        document = make_document_model(session_user.id)
        document.owner = UserModel(id=session_user.id, email=session_user.email, name="Ada")
        mock_document_service.list_documents.return_value = [document]

        # Act
        response = client.get("/api/v1/documents")

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["documents"][0]["owner"]["email"] == "ada@example.com"

    def test_not_found_should_be_404(self, client, mock_document_service):
        document_id = uuid.uuid4()
        mock_document_service.get_document.side_effect = DocumentNotFoundError(str(document_id))

        response = client.get(f"/api/v1/documents/{document_id}")

        assert response.status_code == 404
        assert response.json() == {"detail": "Document not found"}

    def test_update_without_title_should_be_400(self, client, mock_document_service):
        response = client.put(f"/api/v1/documents/{uuid.uuid4()}", json={"author": "Someone"})

        assert response.status_code == 400
        mock_document_service.update_document.assert_not_called()

    def test_update_with_overlong_title_should_be_400_not_422(self, client, mock_document_service):
        response = client.put(f"/api/v1/documents/{uuid.uuid4()}", json={"title": "t" * 513})

        assert response.status_code == 400
        assert response.json()["detail"] == "Title must be at most 512 characters"
        mock_document_service.update_document.assert_not_called()

    def test_update_with_overlong_author_should_be_400(self, client, mock_document_service):
        response = client.put(
            f"/api/v1/documents/{uuid.uuid4()}",
            json={"title": "New", "author": "a" * 256},
        )

        assert response.status_code == 400
        mock_document_service.update_document.assert_not_called()

    def test_update_should_pass_title_and_author(self, client, mock_document_service, session_user):
        document_id = uuid.uuid4()
        mock_document_service.update_document.return_value = make_document_model(
            session_user.id, id=document_id, title="New"
        )

        response = client.put(f"/api/v1/documents/{document_id}", json={"title": "New"})

        assert response.status_code == 200
        assert response.json()["document"]["title"] == "New"
        mock_document_service.update_document.assert_awaited_once_with(
            session_user, document_id, title="New", author=None
        )

    def test_delete_should_return_success(self, client, mock_document_service):
        response = client.delete(f"/api/v1/documents/{uuid.uuid4()}")

        assert response.status_code == 200
        assert response.json() == {"success": True}

    def test_viewer_url_should_return_urls(self, client, mock_document_service):
        expires_at = datetime(2030, 1, 1, tzinfo=timezone.utc)
        mock_document_service.get_viewer_access.return_value = ViewerAccess(
            viewer_url="http://engine.test/viewer?document_id=e&jwt=t",
            thumbnail_url="http://engine.test/documents/e/cover?jwt=t&width=400",
            download_url="http://engine.test/documents/e/pdf?jwt=t",
            jwt="t",
            expires_at=expires_at,
        )

        response = client.get(f"/api/v1/documents/{uuid.uuid4()}/viewer-url")

        assert response.status_code == 200
        assert response.json()["jwt"] == "t"
        assert response.json()["viewer_url"].endswith("jwt=t")


class TestSignDocument:
    """Test suite for POST /documents/{id}/sign."""

    payload = {
        "signer_name": "Ada",
        "reason": "Approved",
        "signature_options": {"signature_type": "invisible", "page_index": 0},
        "replace_original": True,
    }

    def test_sign_should_return_result_id(self, client, mock_signing_service):
        result_id = uuid.uuid4()
        mock_signing_service.sign_document.return_value = result_id

        response = client.post(f"/api/v1/documents/{uuid.uuid4()}/sign", json=self.payload)

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "document_id": str(result_id),
            "message": "Document signed successfully",
        }

    def test_non_owner_should_be_403(self, client, mock_signing_service):
        mock_signing_service.sign_document.side_effect = PermissionDeniedError(
            "Only the document owner can sign documents"
        )

        response = client.post(f"/api/v1/documents/{uuid.uuid4()}/sign", json=self.payload)

        assert response.status_code == 403
        assert response.json()["detail"] == "Only the document owner can sign documents"

    def test_stage_failure_should_be_500_with_details(self, client, mock_signing_service):
        mock_signing_service.sign_document.side_effect = SigningFailedError(
            "Signing failed during signing: Signing service unreachable",
            stage="signing",
        )

        response = client.post(f"/api/v1/documents/{uuid.uuid4()}/sign", json=self.payload)

        assert response.status_code == 500
        assert response.json()["detail"] == {
            "error": "Failed to sign document",
            "details": "Signing failed during signing: Signing service unreachable",
        }
