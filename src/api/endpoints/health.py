"""
Health check endpoints.
Simple endpoints for monitoring application health and configuration.
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request

from src.api.models import EnvCheckResponse, HealthResponse
from src.config.settings import Settings

router = APIRouter(tags=["health"])

VERSION = "1.0.0"


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was created with."""
    return request.app.state.settings


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_app_settings)):
    """Basic health check endpoint."""
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc),
        version=VERSION,
        environment=settings.environment,
    )


@router.get("/env-check", response_model=EnvCheckResponse)
async def env_check(settings: Settings = Depends(get_app_settings)):
    """Report whether GOOGLE_API_KEY is set and its length, never its value."""
    return EnvCheckResponse(
        has_api_key=settings.has_api_key,
        api_key_length=len(settings.google_api_key),
        environment=settings.environment,
        render=settings.render,
    )
