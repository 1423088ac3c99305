"""
Centralized environment configuration.

Credentials are read from the environment on every call so a running
process picks up changes without a restart; the remaining settings come from
``config/config.yaml`` through ``ConfigLoader``.

Usage:
    from web.backend.core.env_config import get_discord_credentials, get_settings
"""

import os
from dataclasses import dataclass
from typing import Any

from config.config_loader import ConfigLoader
from services.cache import DEFAULT_MAX_ENTRIES
from services.discord_client import DEFAULT_TIMEOUT_SECONDS, DISCORD_API_BASE
from services.guild_stats_service import CACHE_TTL_SECONDS, DISCORD_CDN_BASE
from utils.errors import ConfigError

# ---------------------------------------------------------------------------
# Required environment variables
# ---------------------------------------------------------------------------
GUILD_ID_ENV = "DISCORD_GUILD_ID"
BOT_TOKEN_ENV = "DISCORD_BOT_TOKEN"


@dataclass(frozen=True)
class DiscordCredentials:
    guild_id: str
    bot_token: str


def get_discord_credentials() -> DiscordCredentials:
    """
    Read the guild id and bot token from the environment.

    Raises:
        ConfigError: Naming the first missing variable (guild id is checked first).
    """
    guild_id = os.getenv(GUILD_ID_ENV, "")
    bot_token = os.getenv(BOT_TOKEN_ENV, "")

    if not guild_id:
        raise ConfigError.missing(GUILD_ID_ENV)
    if not bot_token:
        raise ConfigError.missing(BOT_TOKEN_ENV)

    return DiscordCredentials(guild_id=guild_id, bot_token=bot_token)


# ---------------------------------------------------------------------------
# YAML-backed settings
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Settings:
    discord_api_base: str
    discord_cdn_base: str
    discord_timeout_seconds: float
    cache_ttl_seconds: int
    cache_config: dict[str, Any]


def get_settings() -> Settings:
    """Build settings from the loaded YAML config, falling back to defaults."""
    discord_cfg = ConfigLoader.get_section("discord")
    cache_cfg = ConfigLoader.get_section("cache")

    return Settings(
        discord_api_base=discord_cfg.get("api_base") or DISCORD_API_BASE,
        discord_cdn_base=discord_cfg.get("cdn_base") or DISCORD_CDN_BASE,
        discord_timeout_seconds=float(
            discord_cfg.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)
        ),
        cache_ttl_seconds=int(cache_cfg.get("ttl_seconds", CACHE_TTL_SECONDS)),
        cache_config={"max_entries": DEFAULT_MAX_ENTRIES, **cache_cfg},
    )
