"""
Services package for the member count backend.

Contains the cache stores, the Discord client and the guild stats service
that ties them together.
"""

from .cache import CacheStore, MemoryCache, NullCache, RedisCache, build_cache_store
from .discord_client import DiscordGuildClient
from .guild_stats_service import GuildStatsService

__all__ = [
    "CacheStore",
    "DiscordGuildClient",
    "GuildStatsService",
    "MemoryCache",
    "NullCache",
    "RedisCache",
    "build_cache_store",
]
