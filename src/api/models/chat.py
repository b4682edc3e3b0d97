"""
Request and response models for the chat relay endpoint.
"""
from typing import Optional

from pydantic import BaseModel


class ChatRequest(BaseModel):
    """Payload for restaurant chat.

    - message: the guest's question, forwarded to the model unchanged
    """
    message: Optional[str] = None


class ChatResponse(BaseModel):
    """Reply text extracted from the first model candidate."""
    reply: str
