"""
Restaurant Chat Relay - Backend
FastAPI application relaying guest questions to Gemini.
"""
import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from src.config.settings import Settings, get_settings
from src.api.routers import api_router
from src.middleware.request_logging import RequestLoggingMiddleware
from src.middleware.error_handling import (
    ErrorHandlingMiddleware,
    request_validation_error_handler,
)
from src.services.gemini import GeminiClient
from src.services.prompts import DEFAULT_RESTAURANT_CONTEXT, build_system_prompt
from src.utils.spa import SPAStaticFiles


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager."""
    settings: Settings = app.state.settings

    # Startup
    logging.info(f"Starting {settings.app_name} (environment: {settings.environment})")
    if settings.render:
        logging.info(f"[INFO] Running on Render. PORT: {settings.port}")

    if not settings.has_api_key:
        # Keep serving; /api/chat answers with a configuration error per request
        logging.error("GOOGLE_API_KEY is not set. Check your .env file.")

    http_client = httpx.AsyncClient(timeout=settings.gemini_timeout_seconds)
    app.state.gemini_client = GeminiClient(
        http_client,
        api_url=settings.gemini_api_url,
        api_key=settings.google_api_key,
        timeout=settings.gemini_timeout_seconds,
    )

    yield

    # Shutdown
    logging.info("Shutting down...")
    await http_client.aclose()


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # httpx logs full request URLs, which carry the API key as a query parameter
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Restaurant assistant chat relay backed by Gemini",
        version="1.0.0",
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.settings = settings
    app.state.system_prompt = build_system_prompt(DEFAULT_RESTAURANT_CONTEXT)

    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

    app.add_middleware(ErrorHandlingMiddleware, is_production=settings.is_production)
    if settings.enable_request_logging:
        app.add_middleware(RequestLoggingMiddleware)

    # CORS is added last so it wraps every response, error bodies included
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API router
    app.include_router(api_router, prefix="/api")

    # Frontend bundle last so API routes always match first
    if os.path.isdir(settings.static_dir):
        app.mount(
            "/",
            SPAStaticFiles(directory=settings.static_dir, index_file=settings.spa_index_file),
            name="frontend",
        )
    else:
        logging.warning(f"Static directory {settings.static_dir!r} not found; frontend not served")

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
