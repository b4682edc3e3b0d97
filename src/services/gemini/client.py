"""
Client for the Gemini completion endpoint.

Sends the grounding prompt and the guest message as two user turns and
hands back the raw JSON payload. Reply extraction is separate so that an
empty answer is an explicit outcome rather than a falsy check.
"""
import asyncio
import logging
from typing import Any, Dict

import httpx
from pydantic import ValidationError

from src.api.errors import UpstreamContractError, UpstreamTransportError
from src.services.gemini.models import (
    ExtractedReply,
    GenerateContentResponse,
    MissingReply,
    ReplyExtraction,
)

logger = logging.getLogger(__name__)


def build_payload(system_prompt: str, message: str) -> Dict[str, Any]:
    """Build the request body: context turn first, then the guest message."""
    return {
        "contents": [
            {"role": "user", "parts": [{"text": system_prompt}]},
            {"role": "user", "parts": [{"text": message}]},
        ]
    }


def extract_reply(payload: Any) -> ReplyExtraction:
    """
    Locate the text of the first part of the first candidate.

    Args:
        payload: Decoded JSON body returned by the service

    Returns:
        ExtractedReply with the text, or MissingReply naming what was absent
    """
    try:
        response = GenerateContentResponse.model_validate(payload)
    except ValidationError:
        return MissingReply(reason="malformed")

    if not response.candidates:
        return MissingReply(reason="candidates")
    content = response.candidates[0].content
    if content is None:
        return MissingReply(reason="content")
    if not content.parts:
        return MissingReply(reason="parts")
    text = content.parts[0].text
    if not text:
        return MissingReply(reason="text")
    return ExtractedReply(text=text)


class GeminiClient:
    """Thin wrapper around a shared httpx.AsyncClient."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_url: str,
        api_key: str,
        timeout: float = 30.0,
    ):
        self.http_client = http_client
        self.api_url = api_url
        self.api_key = api_key
        self.timeout = timeout

    def _redact(self, text: str) -> str:
        if self.api_key:
            return text.replace(self.api_key, "***")
        return text

    async def generate_content(self, system_prompt: str, message: str) -> Any:
        """
        Perform exactly one completion request.

        Raises:
            UpstreamTransportError: On timeout, network failure or non-2xx status
            UpstreamContractError: If a 2xx body is not JSON
        """
        # httpx timeouts apply per phase; wait_for bounds the whole exchange
        try:
            response = await asyncio.wait_for(
                self.http_client.post(
                    self.api_url,
                    params={"key": self.api_key},
                    json=build_payload(system_prompt, message),
                    headers={"Content-Type": "application/json"},
                    timeout=self.timeout,
                ),
                timeout=self.timeout,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.error(f"Gemini API timed out after {self.timeout}s")
            raise UpstreamTransportError(
                f"Gemini API request timed out after {self.timeout} seconds"
            ) from e
        except httpx.RequestError as e:
            details = self._redact(str(e)) or type(e).__name__
            logger.error(f"Error calling Gemini API: {details}")
            raise UpstreamTransportError(details) from e

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not response.is_success:
            if response.status_code == 429:
                logger.error("Error calling Gemini API: 429 Too Many Requests (Quota Exceeded)")
            else:
                logger.error(
                    f"Error calling Gemini API: HTTP {response.status_code} "
                    f"{payload if payload is not None else self._redact(response.text)}"
                )
            raise UpstreamTransportError(
                payload if payload is not None else self._redact(response.text),
                upstream_status=response.status_code,
            )

        if payload is None:
            raise UpstreamContractError("malformed", self._redact(response.text))

        return payload
