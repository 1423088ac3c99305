import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Ensure project root is on sys.path for CI environments where
# Python might not automatically include it.
PROJECT_ROOT = Path(__file__).parent.parent.resolve()
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from config.config_loader import ConfigLoader
from services.cache import MemoryCache
from services.discord_client import DiscordGuildClient
from services.guild_stats_service import GuildStatsService
from tests.factories import FakeDiscord


@pytest.fixture(autouse=True)
def reset_config_loader():
    """Ensure ConfigLoader state does not leak between tests."""
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()


@pytest.fixture
def fake_discord() -> FakeDiscord:
    return FakeDiscord()


@pytest_asyncio.fixture
async def discord_client(fake_discord):
    client = DiscordGuildClient(
        api_base="https://discord.test/api/v10", transport=fake_discord.transport()
    )
    yield client
    await client.close()


@pytest.fixture
def memory_cache() -> MemoryCache:
    return MemoryCache(max_entries=10)


@pytest.fixture
def stats_service(memory_cache, discord_client) -> GuildStatsService:
    return GuildStatsService(cache=memory_cache, client=discord_client)
