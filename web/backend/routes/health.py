"""
Health monitoring routes.

Lightweight probes reporting config load status and the active cache backend.
"""

from fastapi import APIRouter, Depends

from config.config_loader import ConfigLoader
from services.guild_stats_service import GuildStatsService
from web.backend.core.dependencies import get_guild_stats_service

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/")
async def health_check(service: GuildStatsService = Depends(get_guild_stats_service)):
    """
    Simple health check endpoint (public).

    Does not call Discord; reports only local state.
    """
    return {
        "status": "ok",
        "service": "guild-membercount",
        "config_loaded": bool(ConfigLoader._config),
        "cache_backend": service.cache.name,
    }


@router.get("/config-status")
async def get_config_status():
    """
    Get configuration loading status for observability.

    Returns:
        - config_status: "ok" | "degraded" | "error" | "not_loaded"
        - config_path: Path that was loaded
        - config_loaded: Boolean indicating if config has any values
    """
    return ConfigLoader.get_config_status()


@router.get("/liveness")
async def liveness_check():
    """
    Kubernetes-style liveness probe.

    Simple check that the application is running.
    """
    return {"alive": True}
