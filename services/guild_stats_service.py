"""
Guild stats service.

Implements the cache-aside flow behind the member count endpoint:

1. Serve from cache when an entry exists.
2. On a miss, fetch guild data and widget data concurrently, assemble the
   result and write it back to the cache.
3. If the guild fetch fails, fall back to whatever the cache still returns
   before giving up.
"""

import asyncio
from typing import Any

from services.cache import CacheStore
from services.discord_client import DiscordGuildClient
from utils.logging import get_logger

logger = get_logger(__name__)

CACHE_TTL_SECONDS = 300
DISCORD_CDN_BASE = "https://cdn.discordapp.com"
STALE_DATA_WARNING = "Serving potentially stale data"


def cache_key_for(guild_id: str) -> str:
    return f"guild-{guild_id}-stats"


def build_icon_url(
    guild_id: str, icon_hash: str | None, cdn_base: str = DISCORD_CDN_BASE
) -> str | None:
    if not icon_hash:
        return None
    return f"{cdn_base.rstrip('/')}/icons/{guild_id}/{icon_hash}.png"


def assemble_result(
    guild_id: str,
    guild_data: dict[str, Any],
    widget_data: dict[str, Any] | None,
    cdn_base: str = DISCORD_CDN_BASE,
) -> dict[str, Any]:
    """Build the member count payload from raw guild and widget responses."""
    presence = widget_data.get("presences") if widget_data is not None else None
    return {
        "success": True,
        "count": guild_data.get("approximate_member_count") or 0,
        "online": guild_data.get("approximate_presence_count") or 0,
        "name": guild_data.get("name"),
        "icon": build_icon_url(guild_id, guild_data.get("icon"), cdn_base),
        "premium_tier": guild_data.get("premium_tier"),
        "presence": presence,
    }


def _is_usable_entry(value: Any) -> bool:
    """Cached payloads must be objects with non-negative integer counts."""
    if not isinstance(value, dict):
        return False
    for field in ("count", "online"):
        count = value.get(field, 0)
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            return False
    return True


class GuildStatsService:
    """Cache-aside lookup of guild member and presence counts."""

    def __init__(
        self,
        cache: CacheStore,
        client: DiscordGuildClient,
        ttl_seconds: int = CACHE_TTL_SECONDS,
        cdn_base: str = DISCORD_CDN_BASE,
    ):
        self.cache = cache
        self.client = client
        self.ttl_seconds = ttl_seconds
        self.cdn_base = cdn_base

    async def get_stats(self, guild_id: str, token: str) -> dict[str, Any]:
        """
        Return the stats payload for a guild.

        Cached payloads are tagged ``cached: True``; payloads served after a
        failed guild fetch also carry ``warning``.

        Raises:
            UpstreamError: If the guild fetch failed and nothing is cached; other
                unexpected fetch errors propagate the same way.
        """
        key = cache_key_for(guild_id)

        cached = await self._read_cache(key)
        if cached is not None:
            logger.info("Serving from cache", extra={"guild_id": guild_id, "cache_key": key})
            return {"success": True, **cached, "cached": True}

        try:
            result = await self._fetch_fresh(guild_id, token)
        except Exception as e:
            logger.error(
                f"Guild stats fetch failed: {e}",
                extra={"guild_id": guild_id, "status_code": getattr(e, "status_code", None)},
            )
            # No expiry check here; whether expired entries survive is up to the store
            stale = await self._read_cache(key)
            if stale is None:
                raise
            logger.warning(
                "Serving stale cache after error",
                extra={"guild_id": guild_id, "cache_key": key},
            )
            return {
                "success": True,
                **stale,
                "cached": True,
                "warning": STALE_DATA_WARNING,
            }

        await self._write_cache(key, result)
        logger.info(
            f"Fetched fresh data: {result['count']} members", extra={"guild_id": guild_id}
        )
        return result

    async def _fetch_fresh(self, guild_id: str, token: str) -> dict[str, Any]:
        guild_data, widget_data = await asyncio.gather(
            self.client.fetch_guild(guild_id, token),
            self.client.fetch_widget(guild_id, token),
            return_exceptions=True,
        )
        if isinstance(guild_data, BaseException):
            raise guild_data
        if isinstance(widget_data, BaseException):
            widget_data = None
        return assemble_result(guild_id, guild_data, widget_data, self.cdn_base)

    async def _read_cache(self, key: str) -> dict[str, Any] | None:
        try:
            value = await self.cache.get(key)
        except Exception as e:
            logger.warning(f"Cache read failed: {e}", extra={"cache_key": key})
            return None
        if not _is_usable_entry(value):
            if value is not None:
                logger.warning("Ignoring malformed cache entry", extra={"cache_key": key})
            return None
        return value

    async def _write_cache(self, key: str, result: dict[str, Any]) -> None:
        try:
            stored = await self.cache.set(key, result, self.ttl_seconds)
        except Exception as e:
            logger.warning(f"Cache write failed: {e}", extra={"cache_key": key})
            return
        if not stored:
            logger.debug("Cache write skipped", extra={"cache_key": key})
