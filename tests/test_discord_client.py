"""
Tests for the Discord guild/widget client.
"""

import httpx
import pytest

from tests.factories import BOT_TOKEN, GUILD_ID
from utils.errors import UpstreamError


@pytest.mark.asyncio
async def test_fetch_guild_requests_counts_with_bot_auth(discord_client, fake_discord):
    data = await discord_client.fetch_guild(GUILD_ID, BOT_TOKEN)

    assert data["approximate_member_count"] == 42
    request = fake_discord.guild_requests[0]
    assert request.url.path == f"/api/v10/guilds/{GUILD_ID}"
    assert request.url.params["with_counts"] == "true"
    assert request.headers["Authorization"] == f"Bot {BOT_TOKEN}"


@pytest.mark.asyncio
async def test_fetch_guild_non_success_raises_with_status_and_body(
    discord_client, fake_discord
):
    fake_discord.fail_guild(403, '{"message": "Missing Access"}')

    with pytest.raises(UpstreamError) as exc_info:
        await discord_client.fetch_guild(GUILD_ID, BOT_TOKEN)

    err = exc_info.value
    assert err.status_code == 403
    assert err.body == '{"message": "Missing Access"}'
    assert str(err) == 'Discord API error: 403 - {"message": "Missing Access"}'


@pytest.mark.asyncio
async def test_fetch_guild_transport_error_raises(discord_client, fake_discord):
    fake_discord.guild_response = httpx.ConnectError("connection refused")

    with pytest.raises(UpstreamError, match="connection refused"):
        await discord_client.fetch_guild(GUILD_ID, BOT_TOKEN)


@pytest.mark.asyncio
async def test_fetch_guild_timeout_raises(discord_client, fake_discord):
    fake_discord.guild_response = httpx.ReadTimeout("timed out")

    with pytest.raises(UpstreamError, match="timeout"):
        await discord_client.fetch_guild(GUILD_ID, BOT_TOKEN)


@pytest.mark.asyncio
async def test_fetch_guild_invalid_json_raises(discord_client, fake_discord):
    fake_discord.guild_response = httpx.Response(200, text="<html>oops</html>")

    with pytest.raises(UpstreamError, match="invalid JSON"):
        await discord_client.fetch_guild(GUILD_ID, BOT_TOKEN)


@pytest.mark.asyncio
async def test_fetch_widget_success(discord_client, fake_discord):
    fake_discord.set_widget()

    data = await discord_client.fetch_widget(GUILD_ID, BOT_TOKEN)

    assert data["presences"] == [{"status": "online"}]
    widget_request = fake_discord.requests[-1]
    assert widget_request.url.path == f"/api/v10/guilds/{GUILD_ID}/widget.json"
    assert widget_request.headers["Authorization"] == f"Bot {BOT_TOKEN}"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "outcome",
    [
        httpx.Response(404, json={"message": "Unknown Guild"}),
        httpx.Response(403, json={"message": "Widget Disabled"}),
        httpx.Response(200, text="not json"),
        httpx.Response(200, json=[]),
        httpx.Response(200, json="online"),
        httpx.ConnectError("connection refused"),
        httpx.ReadTimeout("timed out"),
    ],
)
async def test_fetch_widget_failures_return_none(discord_client, fake_discord, outcome):
    fake_discord.widget_response = outcome

    assert await discord_client.fetch_widget(GUILD_ID, BOT_TOKEN) is None


@pytest.mark.asyncio
async def test_fetch_guild_non_object_payload_raises(discord_client, fake_discord):
    fake_discord.guild_response = httpx.Response(200, json=[1, 2, 3])

    with pytest.raises(UpstreamError, match="unexpected guild payload"):
        await discord_client.fetch_guild(GUILD_ID, BOT_TOKEN)
