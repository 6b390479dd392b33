"""
Digital signature service configuration.

Dependencies: pydantic_settings
System role: External signing API configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from docportal.configs.base import BaseSettings


class SigningSettings(BaseSettings):
    """Settings for the hosted digital-signature API."""

    model_config = SettingsConfigDict(env_prefix="SIGNING_")

    base_url: str = Field(
        default="https://api.nutrient.io/",
        description="Signing API base URL (trailing slash expected)",
    )
    api_key: str = Field(default="", description="Bearer API key")
    custom_image_path: str | None = Field(
        default=None,
        description="PNG used as the signature graphic when a custom image is requested",
    )
    cades_level: str = Field(default="b-lt", description="CAdES signature level")
    request_timeout: float | None = Field(default=None, description="HTTP timeout in seconds")
