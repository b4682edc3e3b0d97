"""
Chat relay endpoints.

Forwards a guest question, grounded in the restaurant context, to Gemini.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Request, status

from src.api.models import ChatRequest, ChatResponse, ErrorResponse
from src.controllers.chat_controller import ChatController
from src.services.gemini import GeminiClient

# ============================================================================
# Dependency Injection
# ============================================================================


def get_gemini_client(request: Request) -> Optional[GeminiClient]:
    """Shared Gemini client created during app startup."""
    return getattr(request.app.state, "gemini_client", None)


def get_system_prompt(request: Request) -> str:
    """Restaurant context rendered once at app creation."""
    return request.app.state.system_prompt


def get_chat_controller(
    client: Optional[GeminiClient] = Depends(get_gemini_client),
    system_prompt: str = Depends(get_system_prompt),
) -> ChatController:
    """Dependency injection for ChatController."""
    return ChatController(client, system_prompt)


# ============================================================================
# Router
# ============================================================================

router = APIRouter()


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "/chat",
    status_code=status.HTTP_200_OK,
    response_model=ChatResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Message is required"},
        500: {"model": ErrorResponse, "description": "Configuration or upstream error"},
    },
)
async def chat(
    request: Optional[ChatRequest] = None,
    controller: ChatController = Depends(get_chat_controller),
) -> ChatResponse:
    """
    Restaurant chat endpoint.

    Sends the restaurant context followed by the guest message to Gemini and
    returns the first candidate's text as `reply`. Expects GOOGLE_API_KEY.
    """
    return await controller.chat(request)
