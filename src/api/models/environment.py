"""
Response models for diagnostic endpoints.
"""
from datetime import datetime

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    timestamp: datetime
    version: str
    environment: str


class EnvCheckResponse(BaseModel):
    """Credential presence report. Never carries the credential itself."""

    has_api_key: bool
    api_key_length: int
    environment: str
    render: bool
