"""
Document Engine HTTP client.

Server-to-server calls authenticate with the static API key in an
``Authorization: Token token=...`` header. Browser-facing URLs embed a
locally minted RS256 token instead.

Any non-2xx response raises DocumentEngineError carrying the upstream
status; transport failures are reported as 503 (service unavailable).

Dependencies: httpx, docportal.configs, docportal.core
System role: External document store adapter
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Sequence, TypeVar
from urllib.parse import quote, urlencode

import httpx

from docportal.boundary.document_engine.tokens import (
    DEFAULT_PERMISSIONS,
    mint_access_token,
    read_private_key,
)
from docportal.configs.document_engine import DocumentEngineSettings
from docportal.core.exceptions import ConfigurationError, DocumentEngineError
from docportal.core.retry import with_retry
from docportal.observability.log_utils import safe_log_value

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class UrlUploadOptions:
    """Options for ingesting a remote file into the engine."""

    url: str
    document_id: str | None = None
    title: str | None = None
    copy_asset_to_storage_backend: bool = False
    keep_current_annotations: bool = True
    overwrite_existing_document: bool = True

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "url": self.url,
            "copy_asset_to_storage_backend": self.copy_asset_to_storage_backend,
            "keep_current_annotations": self.keep_current_annotations,
            "overwrite_existing_document": self.overwrite_existing_document,
        }
        if self.document_id:
            payload["document_id"] = self.document_id
        if self.title:
            payload["title"] = self.title
        return payload


class DocumentEngineClient:
    """Client for the hosted Document Engine."""

    def __init__(
        self,
        settings: DocumentEngineSettings,
        http_client: httpx.AsyncClient | None = None,
        require_signing_key: bool = True,
    ) -> None:
        """
        Initialize the client.

        Args:
            settings: Document Engine settings group
            http_client: Optional pre-built AsyncClient (tests inject a MockTransport)
            require_signing_key: Demand a private key path; tools that never
                mint tokens pass False

        Raises:
            ConfigurationError: If base URL, API key or private key path is missing
        """
        required = ["base_url", "api_key"]
        if require_signing_key:
            required.append("private_key_path")
        missing = [name for name in required if not getattr(settings, name)]
        if missing:
            raise ConfigurationError(
                "Missing Document Engine configuration",
                details={"missing": missing},
            )

        self._settings = settings
        self._base_url = settings.base_url.rstrip("/")
        if http_client is None:
            options: dict[str, Any] = {}
            if settings.request_timeout is not None:
                options["timeout"] = settings.request_timeout
            http_client = httpx.AsyncClient(**options)
        self._client = http_client

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def settings(self) -> DocumentEngineSettings:
        return self._settings

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.aclose()

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Token token={self._settings.api_key}"}

    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        authenticated: bool = True,
        **kwargs: Any,
    ) -> httpx.Response:
        headers = dict(kwargs.pop("headers", None) or {})
        if authenticated:
            headers.update(self._auth_headers())

        url = f"{self._base_url}{path}"
        try:
            response = await self._client.request(method, url, headers=headers, **kwargs)
        except httpx.RequestError as e:
            logger.error(
                "Document Engine unreachable",
                extra={"operation": operation, "error": str(e)},
            )
            raise DocumentEngineError(
                f"Document Engine {operation} failed: {e}",
                status_code=503,
            ) from e

        if not response.is_success:
            logger.error(
                "Document Engine returned an error",
                extra={
                    "operation": operation,
                    "status_code": response.status_code,
                    "response_text": safe_log_value(response.text),
                },
            )
            raise DocumentEngineError(
                f"Document Engine {operation} failed: {response.status_code}",
                status_code=response.status_code,
                response_text=response.text,
            )
        return response

    @staticmethod
    def _extract_document_id(response: httpx.Response, fallback: str | None = None) -> str:
        try:
            body = response.json()
        except ValueError:
            body = {}
        data = body.get("data") if isinstance(body, dict) else None
        document_id = (data or {}).get("document_id") or fallback
        if not document_id:
            raise DocumentEngineError(
                "Document Engine did not return a document ID",
                status_code=502,
                response_text=response.text,
            )
        return str(document_id)

    async def upload(
        self,
        content: bytes,
        filename: str,
        content_type: str = "application/pdf",
        document_id: str | None = None,
        overwrite: bool = False,
    ) -> str:
        """
        Upload file bytes.

        Args:
            content: File bytes
            filename: Filename reported to the engine
            content_type: MIME type of the file part
            document_id: Target engine id (with ``overwrite`` replaces that document)
            overwrite: Ask the engine to overwrite ``document_id``

        Returns:
            str: Engine document id
        """
        form: dict[str, str] = {}
        if document_id:
            form["document_id"] = document_id
            if overwrite:
                form["overwrite_existing_document"] = "true"

        response = await self._request(
            "POST",
            "/api/documents",
            operation="upload",
            files={"file": (filename, content, content_type)},
            data=form or None,
        )
        external_id = self._extract_document_id(response, fallback=document_id)
        logger.info(
            "Uploaded document to Document Engine",
            extra={"document_engine_id": external_id, "size": len(content), "overwrite": overwrite},
        )
        return external_id

    async def upload_from_url(self, options: UrlUploadOptions) -> str:
        """
        Ask the engine to ingest a remote file.

        Args:
            options: Source URL and ingestion flags

        Returns:
            str: Engine document id (the requested id when the engine omits one)
        """
        response = await self._request(
            "POST",
            "/api/documents",
            operation="URL upload",
            json=options.to_payload(),
        )
        return self._extract_document_id(response, fallback=options.document_id)

    async def delete(self, external_id: str) -> None:
        """Delete a document from the engine."""
        await self._request(
            "DELETE",
            f"/api/documents/{quote(external_id, safe='')}",
            operation="delete",
        )
        logger.info("Deleted document from Document Engine", extra={"document_engine_id": external_id})

    async def download_pdf(self, external_id: str, token: str) -> bytes:
        """
        Fetch the current PDF bytes through the token-gated endpoint.

        Args:
            external_id: Engine document id
            token: Access token with read-document and download permissions

        Returns:
            bytes: Raw PDF
        """
        response = await self._request(
            "GET",
            f"/documents/{quote(external_id, safe='')}/pdf",
            operation="download",
            authenticated=False,
            params={"jwt": token},
        )
        return response.content

    async def health_check(self) -> bool:
        """Return True when the engine answers its health endpoint with 2xx."""
        try:
            await self._request("GET", "/api/health", operation="health check")
        except DocumentEngineError:
            return False
        return True

    def issue_access_token(
        self,
        external_id: str,
        permissions: Sequence[str] = DEFAULT_PERMISSIONS,
        subject: str | None = None,
        ttl_hours: float | None = None,
    ) -> str:
        """
        Mint a signed, time-boxed token for one engine document.

        Args:
            external_id: Engine document id
            permissions: Permissions granted by the token
            subject: Optional user id claim
            ttl_hours: Lifetime (defaults to the generic access TTL)

        Returns:
            str: RS256 JWT

        Raises:
            ConfigurationError: If no private key path is configured
            TokenGenerationError: If the key cannot be read or used
        """
        if not self._settings.private_key_path:
            raise ConfigurationError("Missing Document Engine private key path")
        private_key = read_private_key(self._settings.private_key_path)
        return mint_access_token(
            private_key,
            document_id=external_id,
            permissions=permissions,
            subject=subject,
            ttl_hours=ttl_hours if ttl_hours is not None else self._settings.default_token_ttl_hours,
        )

    def viewer_url(self, external_id: str, token: str) -> str:
        query = urlencode({"document_id": external_id, "jwt": token})
        return f"{self._base_url}/viewer?{query}"

    def thumbnail_url(self, external_id: str, token: str, width: int | None = None) -> str:
        query = urlencode({"jwt": token, "width": width or self._settings.thumbnail_width})
        return f"{self._base_url}/documents/{quote(external_id, safe='')}/cover?{query}"

    def download_url(self, external_id: str, token: str) -> str:
        query = urlencode({"jwt": token})
        return f"{self._base_url}/documents/{quote(external_id, safe='')}/pdf?{query}"

    async def with_retry(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run ``operation`` under the configured fixed-interval retry policy."""
        return await with_retry(
            operation,
            max_retries=self._settings.max_retries,
            delay_ms=self._settings.retry_delay_ms,
            retry_on=(DocumentEngineError,),
        )
