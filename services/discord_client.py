"""
HTTP client for the Discord REST endpoints used to build guild stats.

Two calls are exposed:
- ``fetch_guild``: mandatory; any failure raises ``UpstreamError``.
- ``fetch_widget``: optional; any failure returns None and is never raised.
"""

from typing import Any

import httpx

from utils.errors import UpstreamError
from utils.logging import get_logger

logger = get_logger(__name__)

DISCORD_API_BASE = "https://discord.com/api/v10"
DEFAULT_TIMEOUT_SECONDS = 10.0


class DiscordGuildClient:
    """Thin async wrapper around the guild and widget endpoints."""

    def __init__(
        self,
        api_base: str = DISCORD_API_BASE,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.api_base,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @staticmethod
    def _auth_headers(token: str) -> dict[str, str]:
        return {"Authorization": f"Bot {token}"}

    async def fetch_guild(self, guild_id: str, token: str) -> dict[str, Any]:
        """
        Fetch guild data including approximate member and presence counts.

        Raises:
            UpstreamError: On a non-success status, transport error, timeout
                or an undecodable body.
        """
        client = await self._get_client()
        try:
            response = await client.get(
                f"/guilds/{guild_id}",
                params={"with_counts": "true"},
                headers=self._auth_headers(token),
            )
        except httpx.TimeoutException as e:
            raise UpstreamError(f"Discord API timeout: {e}") from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"Discord API request failed: {e}") from e

        if not response.is_success:
            raise UpstreamError(
                f"Discord API error: {response.status_code} - {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError(
                f"Discord API returned invalid JSON: {e}",
                status_code=response.status_code,
                body=response.text,
            ) from e

        if not isinstance(data, dict):
            raise UpstreamError(
                "Discord API returned an unexpected guild payload",
                status_code=response.status_code,
                body=response.text,
            )
        return data

    async def fetch_widget(self, guild_id: str, token: str) -> dict[str, Any] | None:
        """Fetch the guild widget; returns None when it is disabled or unreachable."""
        try:
            client = await self._get_client()
            response = await client.get(
                f"/guilds/{guild_id}/widget.json",
                headers=self._auth_headers(token),
            )
            if not response.is_success:
                logger.debug(
                    "Guild widget unavailable",
                    extra={"guild_id": guild_id, "status_code": response.status_code},
                )
                return None
            data = response.json()
        except Exception as e:
            logger.debug(f"Guild widget fetch failed: {e}", extra={"guild_id": guild_id})
            return None

        if not isinstance(data, dict):
            logger.debug("Guild widget payload is not an object", extra={"guild_id": guild_id})
            return None
        return data
