from typing import Any, Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str
    message: Optional[str] = None
    details: Optional[Any] = None
    reason: Optional[str] = None
    upstream_status: Optional[int] = None
    full_response: Optional[Any] = Field(default=None, alias="fullResponse")
