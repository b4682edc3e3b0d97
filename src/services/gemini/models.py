"""
Shape of the Gemini `generateContent` response.

Only the path down to the first candidate's first text part is modelled.
Every level is optional because the service omits fields freely (blocked
prompts come back without candidates, finished candidates without parts).
"""
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict


class Part(BaseModel):
    model_config = ConfigDict(extra="allow")

    text: Optional[str] = None


class Content(BaseModel):
    model_config = ConfigDict(extra="allow")

    role: Optional[str] = None
    parts: Optional[List[Part]] = None


class Candidate(BaseModel):
    model_config = ConfigDict(extra="allow")

    content: Optional[Content] = None
    finishReason: Optional[str] = None


class GenerateContentResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    candidates: Optional[List[Candidate]] = None


class ExtractedReply(BaseModel):
    """A reply text was found."""

    text: str


class MissingReply(BaseModel):
    """No reply text; `reason` names the level that was absent."""

    reason: str


ReplyExtraction = Union[ExtractedReply, MissingReply]
