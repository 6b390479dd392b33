"""
Document Engine configuration.

Connection, credential, retry and token-expiry settings for the hosted
document rendering/collaboration engine.

Dependencies: pydantic_settings
System role: External document store configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from docportal.configs.base import BaseSettings


class DocumentEngineSettings(BaseSettings):
    """Settings for the external Document Engine."""

    model_config = SettingsConfigDict(env_prefix="DOCUMENT_ENGINE_")

    base_url: str = Field(default="", description="Document Engine base URL")
    api_key: str = Field(default="", description="Server-to-server API key")
    private_key_path: str = Field(
        default="",
        description="Path to the PEM private key used to sign viewer tokens (RS256)",
    )

    max_retries: int = Field(default=2, ge=0, description="Additional attempts for upload/delete")
    retry_delay_ms: int = Field(default=1000, ge=0, description="Fixed delay between attempts")

    viewer_token_ttl_hours: int = Field(default=2, description="Viewer session token lifetime")
    default_token_ttl_hours: int = Field(default=1, description="Generic access token lifetime")
    thumbnail_width: int = Field(default=400, description="Default cover image width")

    request_timeout: float | None = Field(
        default=None,
        description="HTTP timeout in seconds (None keeps the HTTP client default)",
    )
