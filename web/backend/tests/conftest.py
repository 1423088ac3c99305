"""
Test configuration and fixtures for backend tests.
"""

import sys
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Add project root to path
project_root = Path(__file__).parent.parent.parent.parent
sys.path.insert(0, str(project_root))

from config.config_loader import ConfigLoader
from services.cache import MemoryCache
from services.discord_client import DiscordGuildClient
from services.guild_stats_service import GuildStatsService
from tests.factories import BOT_TOKEN, GUILD_ID, FakeDiscord
from web.backend.core import dependencies


@pytest.fixture(autouse=True)
def discord_env(monkeypatch):
    """Provide both required credentials unless a test removes them."""
    monkeypatch.setenv("DISCORD_GUILD_ID", GUILD_ID)
    monkeypatch.setenv("DISCORD_BOT_TOKEN", BOT_TOKEN)


@pytest.fixture
def fake_discord() -> FakeDiscord:
    return FakeDiscord()


@pytest.fixture
def memory_cache() -> MemoryCache:
    return MemoryCache()


@pytest_asyncio.fixture
async def stats_service(fake_discord, memory_cache):
    client = DiscordGuildClient(
        api_base="https://discord.test/api/v10", transport=fake_discord.transport()
    )
    yield GuildStatsService(cache=memory_cache, client=client)
    await client.close()


@pytest_asyncio.fixture
async def client(stats_service):
    """Create a test client for the FastAPI app."""
    # ASGITransport doesn't trigger lifespan, so the service is wired by override
    ConfigLoader.load_config()

    from web.backend.app import app

    app.dependency_overrides[dependencies.get_guild_stats_service] = lambda: stats_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
