"""
Utilities Package

Common utilities shared by the services and the web backend.
"""

from .errors import ConfigError, GuildStatsError, UpstreamError
from .logging import get_logger, setup_logging

__all__ = [
    "ConfigError",
    "GuildStatsError",
    "UpstreamError",
    "get_logger",
    "setup_logging",
]
