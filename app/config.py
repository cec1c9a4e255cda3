# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.API_BASE_PATH)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# Everything here is read once at startup. Changing the CORS allow-list or the
# notification provider settings is a deployment, not a runtime operation.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Automatically load from .env file
    - Validate types and constraints
    - Provide sensible defaults for development

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=4000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    API_BASE_PATH: str = Field(
        default="/api",
        description="Prefix mounted in front of every route"
    )

    API_TITLE: str = Field(
        default="Mando.cx API Reference",
        description="Title shown in the OpenAPI document and Swagger UI"
    )

    API_VERSION: str = Field(
        default="1.0.0",
        description="Version shown in the OpenAPI document"
    )

    # -------------------------------------------------------------------------
    # CORS
    # -------------------------------------------------------------------------
    # The static domains document which origins are ours. Any well-formed
    # origin is still mirrored back (see lib/cors_origin.py).

    CORS_STATIC_DOMAINS: str = Field(
        default="mando.cx,mando.news,mando.bot,mando.chat,mando.help",
        description="Production hostnames (comma-separated, no scheme or port)"
    )

    CORS_ALLOW_HEADERS: str = Field(
        default="Content-Type,Authorization,Cookie,X-CSRF-Token,user-agent,origin,host",
        description="Headers allowed in CORS preflight requests (comma-separated)"
    )

    CORS_MAX_AGE: int | None = Field(
        default=None,
        ge=0,
        description="Seconds a browser may cache a preflight response"
    )

    # -------------------------------------------------------------------------
    # Request Logging
    # -------------------------------------------------------------------------

    REQUEST_ID_HEADER: str = Field(
        default="X-Request-Id",
        description="Header used to read and echo the request id"
    )

    LOG_REQUEST_BODIES: bool = Field(
        default=True,
        description="Include POST/PUT/PATCH bodies in the request log"
    )

    OUTBOUND_LOG_BODY_LIMIT: int = Field(
        default=200,
        ge=0,
        description="Max characters of an outbound request body written to the log"
    )

    # -------------------------------------------------------------------------
    # Outbound HTTP / Notification Provider
    # -------------------------------------------------------------------------

    HTTP_CLIENT_TIMEOUT: float = Field(
        default=10.0,
        gt=0,
        description="Timeout in seconds for outbound HTTP calls"
    )

    NOVU_SECRET_KEY: str | None = Field(
        default=None,
        description="Novu API secret key (notifications are disabled without it)"
    )

    NOVU_SERVER_URL: str = Field(
        default="https://eu.api.novu.co",
        description="Novu API base URL"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        # Load from .env file in project root
        env_file=".env",
        env_file_encoding="utf-8",
        # Treat empty env vars as unset
        env_ignore_empty=True,
        # Case-sensitive environment variable names
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_static_domains_list(self) -> list[str]:
        """
        Parse CORS_STATIC_DOMAINS into a list of lower-cased hostnames.

        Example: "mando.cx, Mando.bot" -> ["mando.cx", "mando.bot"]
        """
        return [d.strip().lower() for d in self.CORS_STATIC_DOMAINS.split(",") if d.strip()]

    @property
    def cors_allow_headers_list(self) -> list[str]:
        """Parse CORS_ALLOW_HEADERS into a list."""
        return [h.strip() for h in self.CORS_ALLOW_HEADERS.split(",") if h.strip()]

    @property
    def base_path(self) -> str:
        """API_BASE_PATH without a trailing slash ("" when mounted at root)."""
        return self.API_BASE_PATH.rstrip("/")

    @property
    def log_level(self) -> str:
        """Root logging level name, also passed to uvicorn."""
        return "DEBUG" if self.DEBUG else "INFO"

    @property
    def is_development(self) -> bool:
        """Development mode serves with auto-reload."""
        return self.ENVIRONMENT == "development"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
