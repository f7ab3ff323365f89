# =============================================================================
# core/services/data_proxy.py - Data Endpoint Client
# =============================================================================
# Calls the relational data proxy (a Supabase edge function):
#
#   GET {SUPABASE_URL}/functions/v1/mysql
#   Authorization: Bearer <access token>
#
# The response is a JSON array of rows, or {"data": [...]}.
# No request body, no pagination, no retries.
# =============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from app.exceptions import ConfigurationError, DataEndpointError
from lib.rows import extract_rows, parse_body

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchConfig:
    """
    Explicit configuration shared by every dashboard fetch.

    Built once at application start and passed to the fetchers.
    `transport` lets tests swap in httpx.MockTransport.
    """
    base_url: str | None
    path: str = "/functions/v1/mysql"
    timeout: float = 30.0
    transport: httpx.AsyncBaseTransport | None = None

    @classmethod
    def from_settings(cls, settings: Any) -> "FetchConfig":
        return cls(
            base_url=settings.SUPABASE_URL,
            path=settings.DATA_FUNCTION_PATH,
            timeout=settings.DATA_REQUEST_TIMEOUT,
        )

    @property
    def endpoint(self) -> str:
        """
        Full URL of the data function.

        Raises:
            ConfigurationError: If no base URL is configured
        """
        if not self.base_url:
            raise ConfigurationError("SUPABASE_URL")
        return f"{self.base_url.rstrip('/')}/{self.path.lstrip('/')}"


class DataProxyClient:
    """Authenticated GET against the data function."""

    def __init__(self, config: FetchConfig):
        self.config = config

    async def fetch_rows(self, token: str) -> list[Any]:
        """
        Fetch and unwrap the row array for the given user.

        Args:
            token: The user's access token

        Returns:
            The raw (unclassified) rows

        Raises:
            ConfigurationError: If SUPABASE_URL is missing
            DataEndpointError: On network failure or a non-2xx status
            ResponseFormatError: If the body is not JSON or has an unexpected shape
        """
        endpoint = self.config.endpoint

        try:
            async with httpx.AsyncClient(
                timeout=self.config.timeout,
                transport=self.config.transport,
            ) as client:
                response = await client.get(
                    endpoint,
                    headers={"Authorization": f"Bearer {token}"},
                )
        except httpx.HTTPError as e:
            raise DataEndpointError(f"Request failed: {e}") from e

        raw = response.text

        if not response.is_success:
            raise DataEndpointError.from_response(response.status_code, raw)

        rows = extract_rows(parse_body(raw))
        logger.debug(f"Fetched {len(rows)} rows from {endpoint}")
        return rows
