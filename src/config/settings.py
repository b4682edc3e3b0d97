"""
Application configuration and settings.
Centralized configuration management using Pydantic Settings.
"""
from functools import lru_cache
from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_GEMINI_API_URL = (
    "https://generativelanguage.googleapis.com/v1/models/gemini-2.5-flash:generateContent"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Allow extra fields from .env files that aren't defined here
    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        env_file=[".env", ".env.local"],  # .env.local overrides .env
    )

    # Application settings
    app_name: str = "Restaurant Chat Relay"
    environment: str = Field(
        default="local",
        validation_alias=AliasChoices("SYSTEM_ENVIRONMENT", "ENVIRONMENT", "environment"),
    )
    render: bool = False
    debug: bool = False

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8080

    # Gemini settings
    google_api_key: str = ""
    gemini_api_url: str = DEFAULT_GEMINI_API_URL
    gemini_timeout_seconds: float = 30.0

    # Frontend bundle
    static_dir: str = "build"
    spa_index_file: str = "index.html"

    # CORS settings
    allowed_origins: List[str] = Field(default_factory=lambda: ["*"])

    # Logging settings
    log_level: str = "INFO"
    enable_request_logging: bool = True

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_local(self) -> bool:
        """Check if running in local development environment."""
        return self.environment == "local"

    @property
    def has_api_key(self) -> bool:
        return bool(self.google_api_key)


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
