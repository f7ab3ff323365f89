# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module owns creation of Supabase clients for the auth provider.
#
# Two ways to get a client:
# - SupabaseClient.get_client(): process-wide singleton. Used by the terminal
#   client, where one user signs in and the client keeps their session.
# - SupabaseClient.create_client(): fresh client per call. Used by the API so
#   one caller's sign-in never becomes another caller's session.
#
# Both use the anon key; the data endpoint is reached over plain HTTP with
# the user's access token (see core/services/data_proxy.py).
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   client = SupabaseClient.create_client()
#   client.auth.sign_in_with_password({"email": ..., "password": ...})
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import Client, ClientOptions, create_client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(Exception):
    """
    Error during Supabase client setup.

    Provides actionable error messages: what failed and how to fix it.
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
    Factory for Supabase auth clients.

    All methods are class methods for easy access without instantiation.

    Example:
        # Terminal client: one shared session
        client = SupabaseClient.get_client()

        # API request: isolated session that is never persisted
        client = SupabaseClient.create_client(persist_session=False)
    """

    _instance: Client | None = None

    @classmethod
    def create_client(cls, persist_session: bool = True) -> Client:
        """
        Create a new Supabase client with the anon key.

        Args:
            persist_session: Keep the session in the client's storage and
                refresh it automatically. The API passes False.

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If configuration is missing or creation fails
        """
        if not settings.SUPABASE_URL or not settings.SUPABASE_ANON_KEY:
            raise SupabaseClientError(
                message="SUPABASE_URL or SUPABASE_ANON_KEY missing",
                code="CLIENT_CONFIG_MISSING",
                suggestion="Set SUPABASE_URL and SUPABASE_ANON_KEY in your .env file"
            )

        try:
            client = create_client(
                settings.SUPABASE_URL,
                settings.SUPABASE_ANON_KEY,
                options=ClientOptions(
                    persist_session=persist_session,
                    auto_refresh_token=persist_session,
                ),
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create Supabase client: {e}",
                code="CLIENT_INIT_FAILED",
                suggestion="Check SUPABASE_URL and SUPABASE_ANON_KEY in your .env file"
            ) from e

        logger.debug("Supabase client created")
        return client

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            cls._instance = cls.create_client()
            logger.info("Supabase client initialized successfully")
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton (used after sign-out and in tests)."""
        cls._instance = None
