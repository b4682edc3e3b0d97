from .chat import ChatRequest, ChatResponse
from .environment import EnvCheckResponse, HealthResponse
from .error import ErrorResponse

__all__ = [
    "ErrorResponse",
    "ChatRequest",
    "ChatResponse",
    "EnvCheckResponse",
    "HealthResponse",
]
