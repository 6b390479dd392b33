"""
Document Engine access tokens.

Short-lived RS256 JWTs minted locally and handed to the browser (viewer,
thumbnail, download) or used server-side to fetch raw PDF bytes. Tokens
are never persisted.

Dependencies: jwt (PyJWT[crypto])
System role: Scoped credential issuance for the external document store
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Sequence

import jwt

from docportal.core.exceptions import TokenGenerationError

ALGORITHM = "RS256"

DEFAULT_PERMISSIONS = ("read-document",)
VIEWER_PERMISSIONS = ("read-document", "download", "cover-image")
SIGNING_PERMISSIONS = ("read-document", "download")


def token_expiry(ttl_hours: float, now: datetime | None = None) -> datetime:
    """Absolute expiry for a token issued at ``now`` (UTC)."""
    issued_at = now or datetime.now(timezone.utc)
    return issued_at + timedelta(hours=ttl_hours)


def mint_access_token(
    private_key: str,
    document_id: str,
    permissions: Sequence[str] = DEFAULT_PERMISSIONS,
    subject: str | None = None,
    ttl_hours: float = 1,
    now: datetime | None = None,
) -> str:
    """
    Sign an access token for one engine document.

    Args:
        private_key: PEM-encoded RSA private key
        document_id: External engine document id
        permissions: Engine permission names granted by the token
        subject: Optional user id recorded as ``user_id``
        ttl_hours: Lifetime in hours
        now: Issue time override (UTC)

    Returns:
        str: Encoded JWT

    Raises:
        TokenGenerationError: If the key cannot sign
    """
    payload: dict[str, Any] = {
        "document_id": document_id,
        "permissions": list(permissions),
        "exp": int(token_expiry(ttl_hours, now).timestamp()),
    }
    if subject:
        payload["user_id"] = subject

    try:
        return jwt.encode(payload, private_key, algorithm=ALGORITHM)
    except (jwt.PyJWTError, ValueError, TypeError) as e:
        raise TokenGenerationError(
            "Failed to generate viewer JWT",
            details={"document_id": document_id, "error": str(e)},
        ) from e


def read_private_key(path: str) -> str:
    """
    Read the PEM signing key from disk.

    Raises:
        TokenGenerationError: If the file is missing or unreadable
    """
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise TokenGenerationError(
            "Failed to generate viewer JWT",
            details={"private_key_path": path, "error": str(e)},
        ) from e
