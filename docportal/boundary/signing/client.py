"""
Digital signature API client.

Submits a PDF plus a JSON signature description as multipart form data
and returns the signed PDF bytes. Calls are never retried: each signing
is a billable, stateful remote operation.

Dependencies: httpx, docportal.configs, docportal.core
System role: External signing service adapter
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import httpx

from docportal.configs.signing import SigningSettings
from docportal.core.exceptions import ConfigurationError, SigningServiceError
from docportal.models.signature import InvisibleSignature, SignatureSpec, VisibleSignature
from docportal.observability.log_utils import safe_log_value

logger = logging.getLogger(__name__)

CUSTOM_IMAGE_FILENAME = "signature.png"


def build_signature_data(spec: SignatureSpec, cades_level: str = "b-lt") -> dict[str, Any]:
    """
    Translate a signature spec into the API's ``data`` JSON.

    Visible rectangles are sent as ``[left, top, width, height]`` in PDF points.

    Args:
        spec: Visible or invisible signature spec
        cades_level: CAdES level requested from the service

    Returns:
        dict: JSON-serializable signature description
    """
    data: dict[str, Any] = {"signatureType": "cades", "cadesLevel": cades_level}

    if isinstance(spec, VisibleSignature):
        appearance = spec.appearance
        data["position"] = {
            "pageIndex": spec.page_index,
            "rect": [spec.rect.x, spec.rect.y, spec.rect.width, spec.rect.height],
        }
        data["appearance"] = {
            "mode": appearance.mode.value,
            "showWatermark": appearance.show_watermark,
            "showSignDate": appearance.show_sign_date,
            "showDateTimezone": appearance.show_date_timezone,
        }
        if appearance.use_custom_image:
            data["appearance"]["contentType"] = "image/png"
        data["flatten"] = appearance.flatten
    elif isinstance(spec, InvisibleSignature):
        data["position"] = {"pageIndex": spec.page_index}
    else:
        raise TypeError(f"Unsupported signature spec: {type(spec).__name__}")

    return data


class SigningClient:
    """Client for the hosted digital-signature API."""

    def __init__(
        self,
        settings: SigningSettings,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            settings: Signing settings group
            http_client: Optional pre-built AsyncClient

        Raises:
            ConfigurationError: If the API key is missing
        """
        if not settings.api_key:
            raise ConfigurationError("Missing signing API configuration", details={"missing": ["api_key"]})

        self._settings = settings
        self._base_url = settings.base_url.rstrip("/") + "/"
        if http_client is None:
            options: dict[str, Any] = {}
            if settings.request_timeout is not None:
                options["timeout"] = settings.request_timeout
            http_client = httpx.AsyncClient(**options)
        self._client = http_client

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.aclose()

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._settings.api_key}"}

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason_phrase
        if isinstance(body, dict):
            return str(body.get("message") or body.get("error") or response.reason_phrase)
        return response.reason_phrase

    async def _load_custom_image(self) -> bytes | None:
        path = self._settings.custom_image_path
        if not path:
            logger.warning("Custom signature image requested but none is configured")
            return None
        try:
            return await asyncio.to_thread(Path(path).read_bytes)
        except OSError as e:
            logger.error(
                "Failed to read custom signature image",
                extra={"path": path, "error": str(e)},
            )
            return None

    async def _post(self, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.post(
                f"{self._base_url}{path}",
                headers=self._auth_headers(),
                **kwargs,
            )
        except httpx.RequestError as e:
            raise SigningServiceError(f"Signing service unreachable: {e}", status_code=503) from e

        if not response.is_success:
            message = self._error_message(response)
            logger.error(
                "Signing service returned an error",
                extra={
                    "path": path,
                    "status_code": response.status_code,
                    "response_text": safe_log_value(response.text),
                },
            )
            raise SigningServiceError(
                f"Failed to sign document: {response.status_code} {message}",
                status_code=response.status_code,
                response_text=response.text,
            )
        return response

    async def sign(
        self,
        pdf_bytes: bytes,
        signer_name: str,
        reason: str,
        spec: SignatureSpec,
    ) -> bytes:
        """
        Apply a digital signature to a PDF.

        Args:
            pdf_bytes: Document to sign
            signer_name: Name of the signer (logged only)
            reason: Signing reason (logged only)
            spec: Visible or invisible signature spec

        Returns:
            bytes: Signed PDF

        Raises:
            SigningServiceError: On transport failure or non-2xx response
        """
        data = build_signature_data(spec, cades_level=self._settings.cades_level)
        files: dict[str, tuple[str, bytes, str]] = {
            "file": ("document.pdf", pdf_bytes, "application/pdf"),
        }

        if isinstance(spec, VisibleSignature) and spec.appearance.use_custom_image:
            image = await self._load_custom_image()
            if image is not None:
                files["graphicImage"] = (CUSTOM_IMAGE_FILENAME, image, "image/png")

        logger.info(
            "Submitting document for signing",
            extra={
                "signature_type": spec.signature_type,
                "page_index": spec.page_index,
                "signer_name": signer_name,
                "reason": reason,
                "size": len(pdf_bytes),
            },
        )
        response = await self._post("sign", files=files, data={"data": json.dumps(data)})
        return response.content

    async def create_session_token(self) -> str:
        """
        Obtain a short-lived session token from the signing service.

        Returns:
            str: Session token
        """
        response = await self._post("dws/auth/session", json={})
        token = response.json().get("token")
        if not token:
            raise SigningServiceError("Signing service did not return a session token", status_code=502)
        return token
