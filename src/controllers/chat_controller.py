"""
Chat controller for the restaurant assistant.

Validates the guest message, relays it to Gemini together with the
restaurant context and returns the first candidate's text.
"""
import json
import logging
from typing import Optional

from src.api.errors import ConfigurationError, MessageRequiredError, UpstreamContractError
from src.api.models.chat import ChatRequest, ChatResponse
from src.services.gemini import ExtractedReply, GeminiClient, extract_reply

logger = logging.getLogger(__name__)


class ChatController:
    """Controller for chat relay operations."""

    def __init__(self, client: Optional[GeminiClient], system_prompt: str):
        """
        Args:
            client: Gemini client, None when the credential is not configured
            system_prompt: Rendered restaurant context
        """
        self.client = client
        self.system_prompt = system_prompt

    def _validate_request(self, request: Optional[ChatRequest]) -> str:
        """
        Validate chat request.

        Raises:
            MessageRequiredError: If message is absent, null or empty
        """
        if request is None or not request.message:
            raise MessageRequiredError()
        return request.message

    async def chat(self, request: Optional[ChatRequest]) -> ChatResponse:
        """
        Relay one guest message upstream and return the reply.

        Args:
            request: ChatRequest carrying the guest message

        Returns:
            ChatResponse with the extracted reply text

        Raises:
            MessageRequiredError: 400, no upstream call made
            ConfigurationError: 500, credential missing, no upstream call made
            UpstreamTransportError: 500, upstream unreachable or non-2xx
            UpstreamContractError: 500, upstream answered without reply text
        """
        message = self._validate_request(request)

        if self.client is None or not self.client.api_key:
            logger.error("Chat request rejected: GOOGLE_API_KEY is not configured")
            raise ConfigurationError("GOOGLE_API_KEY is not configured")

        logger.info(f"Sending request to Gemini API with message: {message}")
        payload = await self.client.generate_content(self.system_prompt, message)

        result = extract_reply(payload)
        if not isinstance(result, ExtractedReply):
            logger.error(
                f"Gemini API response missing text ({result.reason}). Full response: "
                f"{json.dumps(payload, ensure_ascii=False, indent=2)}"
            )
            raise UpstreamContractError(result.reason, payload)

        logger.info(f"Extracted reply: {result.text}")
        return ChatResponse(reply=result.text)
