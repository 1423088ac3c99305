"""
Shared dependencies for FastAPI routes.

Holds the process-wide cache store, Discord client and guild stats service.
They are built on startup by ``initialize_services`` or lazily on first use,
and tests may replace the module-level singletons directly.
"""

from config.config_loader import ConfigLoader
from services.cache import CacheStore, build_cache_store
from services.discord_client import DiscordGuildClient
from services.guild_stats_service import GuildStatsService
from utils.logging import get_logger
from web.backend.core.env_config import get_settings

logger = get_logger(__name__)

_cache_store: CacheStore | None = None
_discord_client: DiscordGuildClient | None = None
_guild_stats_service: GuildStatsService | None = None


def get_cache_store() -> CacheStore:
    """Return the configured cache store, building it on first use."""
    global _cache_store
    if _cache_store is None:
        _cache_store = build_cache_store(get_settings().cache_config)
    return _cache_store


def get_discord_client() -> DiscordGuildClient:
    """Return the shared DiscordGuildClient instance."""
    global _discord_client
    if _discord_client is None:
        settings = get_settings()
        _discord_client = DiscordGuildClient(
            api_base=settings.discord_api_base,
            timeout=settings.discord_timeout_seconds,
        )
    return _discord_client


def get_guild_stats_service() -> GuildStatsService:
    """Return the GuildStatsService wired to the shared cache and client."""
    global _guild_stats_service
    if _guild_stats_service is None:
        settings = get_settings()
        _guild_stats_service = GuildStatsService(
            cache=get_cache_store(),
            client=get_discord_client(),
            ttl_seconds=settings.cache_ttl_seconds,
            cdn_base=settings.discord_cdn_base,
        )
    return _guild_stats_service


async def initialize_services():
    """Initialize services on application startup.

    Observability:
        - Logs INFO with resolved config path and load status
        - Logs INFO with the selected cache backend
    """
    ConfigLoader.load_config()
    config_status = ConfigLoader.get_config_status()
    logger.info(
        "Config load status",
        extra={
            "config_path": config_status.get("config_path"),
            "config_status": config_status.get("config_status"),
        },
    )

    service = get_guild_stats_service()
    logger.info("Services initialized", extra={"cache_backend": service.cache.name})


async def shutdown_services():
    """Close the Discord client and cache store."""
    global _cache_store, _discord_client, _guild_stats_service

    if _discord_client is not None:
        await _discord_client.close()
    if _cache_store is not None:
        await _cache_store.close()

    _cache_store = None
    _discord_client = None
    _guild_stats_service = None
    logger.info("Services shut down")
