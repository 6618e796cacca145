# =============================================================================
# lib/supabase_client.py - Supabase Client Factory
# =============================================================================
# This module builds Supabase client handles.
#
# - get_client(): process-wide public (anon) client. Raises if the URL or
#   anon key is missing; app.main calls it during startup so the service
#   refuses to boot without them.
# - create(): fresh client bound to explicit credentials. The update endpoint
#   builds one per request with the anon key (token checks) and one with the
#   service_role key (Storage reads/writes).
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   admin = SupabaseClient.create_admin_client(settings)
#   admin.storage.from_("properties").download("properties.json")
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import Client, ClientOptions, create_client

from app.config import Settings, settings

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(Exception):
    """
    Error while constructing a Supabase client.

    Carries a machine-readable code and a hint on how to fix it.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Factory for Supabase clients.

    The public client is a singleton; per-request clients are created with
    create() and never cached, since each may carry different credentials.

    Example:
        # Shared anon client
        client = SupabaseClient.get_client()

        # Privileged client for Storage
        admin = SupabaseClient.create_admin_client(settings)
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton public Supabase client.

        Uses the anon key, so Row Level Security applies.

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If the URL or anon key is missing, or
                client creation fails
        """
        if cls._instance is None:
            if not settings.has_public_credentials:
                raise SupabaseClientError(
                    message="Missing SUPABASE env vars",
                    code="MISSING_ENV",
                    suggestion="Set SUPABASE_URL and SUPABASE_ANON_KEY "
                               "(or their VITE_ variants) in your environment or .env file"
                )
            cls._instance = cls.create(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)
            logger.info("Supabase public client initialized successfully")
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the cached public client (used by tests)."""
        cls._instance = None

    @classmethod
    def create(cls, url: str, key: str, persist_session: bool = True) -> Client:
        """
        Create a new client bound to the given credentials.

        Args:
            url: Supabase project URL
            key: anon or service_role key
            persist_session: Keep auth sessions on the client. Disabled for
                privileged clients, which never sign in.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if not url or not key:
            raise SupabaseClientError(
                message="Missing SUPABASE env vars",
                code="MISSING_ENV",
                suggestion="Both a project URL and an API key are required"
            )

        try:
            if persist_session:
                return create_client(url, key)
            return create_client(
                url,
                key,
                options=ClientOptions(persist_session=False, auto_refresh_token=False),
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create Supabase client: {e}",
                code="CLIENT_INIT_FAILED",
                suggestion="Check SUPABASE_URL and the API key in your .env file",
                details={"url": url},
            )

    @classmethod
    def create_auth_client(cls, config: Settings) -> Client:
        """Client used to verify user access tokens (anon key)."""
        return cls.create(config.SUPABASE_URL, config.SUPABASE_ANON_KEY)

    @classmethod
    def create_admin_client(cls, config: Settings) -> Client:
        """Client used for Storage reads/writes (service_role key)."""
        return cls.create(
            config.SUPABASE_URL,
            config.SUPABASE_SERVICE_ROLE_KEY,
            persist_session=False,
        )
