"""
Relay error taxonomy.

Each error knows the HTTP status and JSON body it is surfaced as; the
error handling middleware renders them.
"""
from typing import Any, Dict, Optional

from fastapi import status


class RelayError(Exception):
    """Base class for errors surfaced to the chat caller."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.error)

    def to_content(self) -> Dict[str, Any]:
        return {"error": self.error}


class MessageRequiredError(RelayError):
    """Inbound request carried no usable `message`."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Message is required"


class ConfigurationError(RelayError):
    """The upstream credential is not configured."""

    error = "Server configuration error"

    def __init__(self, details: str):
        super().__init__(details)
        self.details = details

    def to_content(self) -> Dict[str, Any]:
        return {"error": self.error, "details": self.details}


class UpstreamTransportError(RelayError):
    """Network failure, timeout or non-2xx status from the completion service."""

    error = "Failed to connect to Gemini API"

    def __init__(self, details: Any, upstream_status: Optional[int] = None):
        super().__init__(str(details))
        self.details = details
        self.upstream_status = upstream_status

    def to_content(self) -> Dict[str, Any]:
        return {
            "error": self.error,
            "details": self.details,
            "upstream_status": self.upstream_status,
        }


class UpstreamContractError(RelayError):
    """The completion service answered, but without a reply text where one belongs."""

    error = "Gemini API response invalid or empty"

    def __init__(self, reason: str, full_response: Any = None):
        super().__init__(reason)
        self.reason = reason
        self.full_response = full_response

    def to_content(self) -> Dict[str, Any]:
        return {
            "error": self.error,
            "reason": self.reason,
            "fullResponse": self.full_response,
        }
