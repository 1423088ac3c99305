"""
Custom exception classes for the member count service.

These provide a hierarchy of typed exceptions for better error handling.
"""


class GuildStatsError(Exception):
    """Base exception for guild stats errors."""

    pass


class ConfigError(GuildStatsError):
    """Exception raised when required configuration is missing or invalid."""

    def __init__(self, message: str, missing_key: str | None = None):
        super().__init__(message)
        self.missing_key = missing_key

    @classmethod
    def missing(cls, key: str) -> "ConfigError":
        return cls(f"Missing {key}", missing_key=key)


class UpstreamError(GuildStatsError):
    """Exception raised when the mandatory Discord guild fetch fails."""

    def __init__(
        self, message: str, status_code: int | None = None, body: str | None = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
