"""
Upload validation settings.

Dependencies: pydantic_settings
System role: Limits applied to incoming document uploads
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from docportal.configs.base import BaseSettings

MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024


class UploadSettings(BaseSettings):
    """Settings for multipart document uploads."""

    model_config = SettingsConfigDict(env_prefix="UPLOAD_")

    max_file_size_bytes: int = Field(
        default=MAX_FILE_SIZE_BYTES,
        description="Largest accepted upload in bytes (default 10 MiB)",
    )
