# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.SUPABASE_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# SUPABASE_URL is optional: a missing data endpoint is
# reported by each dashboard fetch, not at startup.
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
    # Supabase Configuration
    # -------------------------------------------------------------------------

    SUPABASE_URL: str | None = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_ANON_KEY: str | None = Field(
        default=None,
        description="Supabase anon/public API key (used for auth operations)"
    )

    SUPABASE_JWT_SECRET: str = Field(
        default="",
        description="Legacy HS256 JWT secret for verifying access tokens"
    )

    VERIFY_ACCESS_TOKENS: bool = Field(
        default=True,
        description="Verify bearer token signatures before forwarding them to the data function"
    )

    # -------------------------------------------------------------------------
    # Data Endpoint
    # -------------------------------------------------------------------------
    # The relational data proxy is a Supabase edge function

    DATA_FUNCTION_PATH: str = Field(
        default="/functions/v1/mysql",
        description="Path of the data proxy function, appended to SUPABASE_URL"
    )

    DATA_REQUEST_TIMEOUT: float = Field(
        default=30.0,
        gt=0,
        description="Timeout in seconds for data proxy requests"
    )

    # -------------------------------------------------------------------------
    # Dashboard Settings
    # -------------------------------------------------------------------------

    DASHBOARD_TIMEZONE: str = Field(
        default="America/Los_Angeles",
        description="Timezone used to display workshop and expiration dates"
    )

    CALENDAR_URL: str = Field(
        default="https://schoolofranch.org/calendar",
        description="Link to the full workshop calendar"
    )

    JOIN_URL: str = Field(
        default="https://schoolofranch.org/join",
        description="Link to the membership sign-up page"
    )

    CONTACT_URL: str = Field(
        default="mailto:info@schoolofranch.org",
        description="Contact link shown in the dashboard"
    )

    PASSWORD_RESET_REDIRECT_URL: str = Field(
        default="https://schoolofranch.org/auth/reset",
        description="Where password reset emails send the user"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, auto-reload)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:8081",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        # Load from .env file in project root
        env_file=".env",
        env_file_encoding="utf-8",
        # Blank values count as unset, so SUPABASE_URL="" is "missing"
        env_ignore_empty=True,
        # Case-sensitive environment variable names
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:8081, https://myapp.com" -> ["http://localhost:8081", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


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
