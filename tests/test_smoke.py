"""
Smoke test to verify pytest wiring and basic imports work.
"""


def test_smoke_import():
    """
    Basic smoke test that imports the core modules to verify pytest wiring
    and that the package structure can be imported without errors.
    """
    from config.config_loader import ConfigLoader
    from services.cache import MemoryCache
    from services.guild_stats_service import GuildStatsService
    from web.backend.routes.membercount import router

    assert ConfigLoader is not None
    assert MemoryCache is not None
    assert GuildStatsService is not None
    assert router is not None
