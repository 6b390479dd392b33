"""
Shared settings base.

Every settings group subclasses ``BaseSettings`` and sets only its
``env_prefix``; the ``.env`` file, encoding and tolerance of unknown keys
come from here so all groups read the same sources.

Dependencies: pydantic_settings
System role: Common source configuration for all settings groups
"""

from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Base class for every docportal settings group."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
