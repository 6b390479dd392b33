"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory database, user/document factories, RSA signing key,
fake Document Engine and signing collaborators
Dependencies: pytest, sqlalchemy, aiosqlite, cryptography
System role: Test infrastructure and fixture management
"""

import uuid
from datetime import timedelta
from pathlib import Path
from typing import Sequence

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from docportal.configs.document_engine import DocumentEngineSettings
from docportal.core.exceptions import DocumentEngineError, SigningServiceError
from docportal.core.retry import with_retry
from docportal.core.roles import UserRole


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from docportal.boundary.db.base import Base
    import docportal.boundary.db.models  # noqa: F401

    # Use SQLite in-memory database for tests
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Create session factory
    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )

    # Create session for test
    async with async_session() as session:
        yield session
        await session.rollback()

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def make_user(test_async_db):
    """
    Factory persisting a UserModel.

    Returns:
        Callable: async (email, role, mode, name) -> UserModel
    """
    from docportal.boundary.db.CRUD.user_crud import user_crud

    async def _make_user(
        email: str | None = None,
        role: UserRole = UserRole.USER,
        mode: UserRole = UserRole.USER,
        name: str | None = "Test User",
    ):
        user = await user_crud.create(
            test_async_db,
            email=email or f"{uuid.uuid4().hex[:8]}@example.com",
            name=name,
            role=role,
            current_impersonation_mode=mode,
        )
        await test_async_db.commit()
        return user

    return _make_user


@pytest.fixture
def make_document(test_async_db):
    """
    Factory persisting a DocumentModel owned by ``owner``.

    Returns:
        Callable: async (owner, **overrides) -> DocumentModel
    """
    from docportal.boundary.db.CRUD.document_crud import document_crud

    async def _make_document(owner, **overrides):
        fields = {
            "document_engine_id": f"engine-{uuid.uuid4().hex[:12]}",
            "title": "Quarterly Report",
            "filename": "report.pdf",
            "file_type": "application/pdf",
            "file_size": 1024,
            "author": owner.name,
            "owner_id": owner.id,
        }
        fields.update(overrides)
        document = await document_crud.create(test_async_db, **fields)
        await test_async_db.commit()
        return document

    return _make_document


@pytest.fixture
def make_session(test_async_db):
    """
    Factory persisting a UserSessionModel for ``user``.

    Returns:
        Callable: async (user, token, expires_in) -> UserSessionModel
    """
    from docportal.boundary.db.base import utcnow
    from docportal.boundary.db.CRUD.user_crud import user_session_crud

    async def _make_session(user, token: str | None = None, expires_in: timedelta = timedelta(hours=1)):
        user_session = await user_session_crud.create(
            test_async_db,
            session_token=token or uuid.uuid4().hex,
            user_id=user.id,
            expires_at=utcnow() + expires_in,
        )
        await test_async_db.commit()
        return user_session

    return _make_session


@pytest.fixture(scope="session")
def rsa_private_key():
    """Generate one RSA key for the whole test session."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_key_pem(rsa_private_key) -> str:
    return rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")


@pytest.fixture(scope="session")
def public_key_pem(rsa_private_key) -> str:
    return rsa_private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("utf-8")


@pytest.fixture
def private_key_file(tmp_path: Path, private_key_pem: str) -> Path:
    """Write the signing key to a temp file."""
    path = tmp_path / "document-engine.pem"
    path.write_text(private_key_pem, encoding="utf-8")
    return path


@pytest.fixture
def engine_settings(private_key_file: Path) -> DocumentEngineSettings:
    """Document Engine settings pointing at a fake host, with no retry delay."""
    return DocumentEngineSettings(
        base_url="http://engine.test",
        api_key="engine-secret",
        private_key_path=str(private_key_file),
        retry_delay_ms=0,
    )


class FakeDocumentEngine:
    """
    In-memory stand-in for DocumentEngineClient.

    ``fail_uploads``/``fail_deletes`` count down the number of calls that
    raise before calls start succeeding.
    """

    def __init__(self, settings: DocumentEngineSettings) -> None:
        self.settings = settings
        self.documents: dict[str, bytes] = {}
        self.upload_calls: list[dict] = []
        self.delete_calls: list[str] = []
        self.issued_tokens: list[dict] = []
        self.fail_uploads = 0
        self.fail_deletes = 0
        self._counter = 0

    async def upload(
        self,
        content: bytes,
        filename: str,
        content_type: str = "application/pdf",
        document_id: str | None = None,
        overwrite: bool = False,
    ) -> str:
        self.upload_calls.append(
            {
                "size": len(content),
                "filename": filename,
                "content_type": content_type,
                "document_id": document_id,
                "overwrite": overwrite,
            }
        )
        if self.fail_uploads > 0:
            self.fail_uploads -= 1
            raise DocumentEngineError("Document Engine upload failed: 503", status_code=503)
        if document_id is None:
            self._counter += 1
            document_id = f"engine-new-{self._counter}"
        self.documents[document_id] = content
        return document_id

    async def delete(self, external_id: str) -> None:
        self.delete_calls.append(external_id)
        if self.fail_deletes > 0:
            self.fail_deletes -= 1
            raise DocumentEngineError("Document Engine delete failed: 500", status_code=500)
        self.documents.pop(external_id, None)

    async def download_pdf(self, external_id: str, token: str) -> bytes:
        if external_id not in self.documents:
            raise DocumentEngineError("Document Engine download failed: 404", status_code=404)
        return self.documents[external_id]

    def issue_access_token(
        self,
        external_id: str,
        permissions: Sequence[str] = ("read-document",),
        subject: str | None = None,
        ttl_hours: float | None = None,
    ) -> str:
        self.issued_tokens.append(
            {
                "document_id": external_id,
                "permissions": tuple(permissions),
                "subject": subject,
                "ttl_hours": ttl_hours,
            }
        )
        return f"token-for-{external_id}"

    def viewer_url(self, external_id: str, token: str) -> str:
        return f"{self.settings.base_url}/viewer?document_id={external_id}&jwt={token}"

    def thumbnail_url(self, external_id: str, token: str, width: int | None = None) -> str:
        width = width or self.settings.thumbnail_width
        return f"{self.settings.base_url}/documents/{external_id}/cover?jwt={token}&width={width}"

    def download_url(self, external_id: str, token: str) -> str:
        return f"{self.settings.base_url}/documents/{external_id}/pdf?jwt={token}"

    async def with_retry(self, operation):
        return await with_retry(
            operation,
            max_retries=self.settings.max_retries,
            delay_ms=0,
            retry_on=(DocumentEngineError,),
        )


class FakeSigner:
    """Stand-in for SigningClient that appends a marker to the PDF."""

    SIGNATURE_MARKER = b"\n%signed"

    def __init__(self) -> None:
        self.calls: list[dict] = []
        self.error: Exception | None = None

    async def sign(self, pdf_bytes: bytes, signer_name: str, reason: str, spec) -> bytes:
        self.calls.append({"size": len(pdf_bytes), "signer_name": signer_name, "reason": reason, "spec": spec})
        if self.error is not None:
            raise self.error
        return pdf_bytes + self.SIGNATURE_MARKER


@pytest.fixture
def fake_engine(engine_settings: DocumentEngineSettings) -> FakeDocumentEngine:
    return FakeDocumentEngine(engine_settings)


@pytest.fixture
def fake_signer() -> FakeSigner:
    return FakeSigner()


@pytest.fixture
def signing_unavailable() -> SigningServiceError:
    return SigningServiceError("Signing service unreachable", status_code=503)
