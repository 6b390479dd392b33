"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from docportal.configs.base import BaseSettings
from docportal.configs.database import DatabaseSettings
from docportal.configs.document_engine import DocumentEngineSettings
from docportal.configs.signing import SigningSettings
from docportal.configs.uploads import UploadSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    environment: str = Field(
        default="development",
        description="Application environment (development, staging, production)",
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Aggregated settings
    database: DatabaseSettings = DatabaseSettings()
    document_engine: DocumentEngineSettings = DocumentEngineSettings()
    signing: SigningSettings = SigningSettings()
    uploads: UploadSettings = UploadSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from docportal.configs import get_settings
        settings = get_settings()
    """
    return Settings()
