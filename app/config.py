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
# The Supabase values accept both the VITE_-prefixed names shared with the
# frontend build and the plain server-side names. The VITE_ name wins when
# both are present.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Automatically load from .env file
    - Validate types and constraints
    - Provide sensible defaults for development

    The Supabase secrets default to empty strings rather than being required.
    The public pair is enforced at startup by SupabaseClient.get_client(),
    and the full set is re-checked on every update request so a missing
    service key becomes a 500 instead of a crash.
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------

    SUPABASE_URL: str = Field(
        default="",
        validation_alias=AliasChoices("VITE_SUPABASE_URL", "SUPABASE_URL"),
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_ANON_KEY: str = Field(
        default="",
        validation_alias=AliasChoices("VITE_SUPABASE_ANON_KEY", "SUPABASE_ANON_KEY"),
        description="Supabase anon/public API key"
    )

    SUPABASE_SERVICE_ROLE_KEY: str = Field(
        default="",
        description="Supabase service_role key (bypasses RLS, used for Storage)"
    )

    # -------------------------------------------------------------------------
    # Admin / Deploy
    # -------------------------------------------------------------------------

    ADMIN_EMAILS: str = Field(
        default="",
        description="Emails allowed to edit properties (comma-separated)"
    )

    VERCEL_DEPLOY_HOOK: str = Field(
        default="",
        description="Deploy hook URL POSTed after a successful update (optional)"
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
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        # Treat FOO= the same as an unset variable
        env_ignore_empty=True,
        case_sensitive=True,
        populate_by_name=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def admin_emails_list(self) -> list[str]:
        """
        Parse ADMIN_EMAILS into a list of normalized addresses.

        Example: " Admin@Example.com, ops@example.com" -> ["admin@example.com", "ops@example.com"]
        Empty entries are dropped so an unset list matches nobody.
        """
        emails = [email.strip().lower() for email in self.ADMIN_EMAILS.split(",")]
        return [email for email in emails if email]

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Handles comma-separated values and strips whitespace.
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def has_public_credentials(self) -> bool:
        """Check that the URL and anon key needed for token checks are set."""
        return bool(self.SUPABASE_URL and self.SUPABASE_ANON_KEY)

    @property
    def has_storage_credentials(self) -> bool:
        """Check that everything the update endpoint needs is set."""
        return self.has_public_credentials and bool(self.SUPABASE_SERVICE_ROLE_KEY)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access. Routes receive it through Depends(get_settings)
    so tests can swap it with app.dependency_overrides.

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
