"""
Member count endpoint.

Returns approximate member and online counts for the configured guild,
served through the guild stats service (cache-aside with stale fallback).
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from services.guild_stats_service import GuildStatsService
from utils.errors import ConfigError
from utils.logging import get_logger
from web.backend.core.dependencies import get_guild_stats_service
from web.backend.core.env_config import get_discord_credentials
from web.backend.core.log_context import get_api_log_extra
from web.backend.core.schemas import (
    ConfigErrorResponse,
    GuildStatsResult,
    InternalErrorResponse,
    MethodNotAllowedResponse,
)

router = APIRouter(prefix="/api", tags=["membercount"])
logger = get_logger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET",
}

MEMBERCOUNT_PATH = "/api/membercount"

# Methods outside this list reach the app-level 405 handler
_ALL_METHODS = ["GET", "OPTIONS", "POST", "PUT", "PATCH", "DELETE", "HEAD"]


def _json(status_code: int, content: dict) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content, headers=CORS_HEADERS)


def method_not_allowed() -> JSONResponse:
    return _json(405, MethodNotAllowedResponse().model_dump())


@router.api_route("/membercount", methods=_ALL_METHODS)
async def membercount(
    request: Request,
    service: GuildStatsService = Depends(get_guild_stats_service),
):
    """
    Get member and online counts for the configured guild.

    - GET: 200 with the stats payload, or 500 on configuration/upstream failure
    - OPTIONS: 200 with an empty body (CORS preflight)
    - anything else: 405
    """
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)

    if request.method != "GET":
        return method_not_allowed()

    try:
        credentials = get_discord_credentials()
    except ConfigError as e:
        logger.error(
            "Missing environment variables",
            extra=get_api_log_extra(request, status_code=500),
        )
        return _json(500, ConfigErrorResponse(details=str(e)).model_dump())

    try:
        payload = await service.get_stats(credentials.guild_id, credentials.bot_token)
        result = GuildStatsResult.model_validate(payload)
    except Exception as e:
        logger.exception(
            "API handler error",
            extra=get_api_log_extra(request, guild_id=credentials.guild_id, status_code=500),
        )
        return _json(500, InternalErrorResponse(message=str(e)).model_dump())

    return _json(200, result.model_dump(exclude_unset=True))
