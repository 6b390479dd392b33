"""
Health check schemas.

Dependencies: pydantic
System role: Health API contracts
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


class EngineHealthResponse(BaseModel):
    """Document Engine reachability report."""

    status: Literal["healthy", "unhealthy"]
    timestamp: datetime
    service: str = "Document Engine"
    error: str | None = None
