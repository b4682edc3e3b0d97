from .client import GeminiClient, build_payload, extract_reply
from .models import ExtractedReply, MissingReply, ReplyExtraction

__all__ = [
    "GeminiClient",
    "build_payload",
    "extract_reply",
    "ExtractedReply",
    "MissingReply",
    "ReplyExtraction",
]
