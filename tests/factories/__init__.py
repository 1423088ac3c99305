"""
Test Factories Module

Centralized fakes for the Discord REST API.
"""

from .discord_factories import (
    BOT_TOKEN,
    GUILD_ID,
    FakeDiscord,
    make_guild_payload,
    make_widget_payload,
)

__all__ = [
    "BOT_TOKEN",
    "GUILD_ID",
    "FakeDiscord",
    "make_guild_payload",
    "make_widget_payload",
]
