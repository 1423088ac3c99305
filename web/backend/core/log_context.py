"""
Utilities for building structured logging context for backend API requests.
"""

from typing import Any

from fastapi import Request

from web.backend.core.request_id import get_request_id


def get_api_log_extra(
    request: Request | None = None,
    guild_id: str | None = None,
    **additional: Any,
) -> dict[str, Any]:
    """
    Build a structured logging extra dict for API requests.

    Args:
        request: FastAPI Request object (supplies endpoint and method)
        guild_id: Discord guild ID
        **additional: Any additional key-value pairs to include

    Examples:
        logger.info("Request received", extra=get_api_log_extra(request))
        logger.error("Missing config", extra=get_api_log_extra(request, missing="DISCORD_GUILD_ID"))
    """
    extra: dict[str, Any] = {}

    request_id = get_request_id()
    if request_id:
        extra["request_id"] = request_id

    if request:
        extra["endpoint"] = request.url.path
        extra["method"] = request.method
    if guild_id:
        extra["guild_id"] = str(guild_id)

    extra.update(additional)

    return extra
