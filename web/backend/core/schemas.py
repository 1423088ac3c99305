"""
Pydantic schemas for API response models.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GuildStatsResult(BaseModel):
    """Member count payload; ``cached`` and ``warning`` are only set when served from cache."""

    model_config = ConfigDict(extra="allow")

    success: bool = True
    count: int = Field(default=0, ge=0)
    online: int = Field(default=0, ge=0)
    name: str | None = None
    icon: str | None = None
    premium_tier: int | None = None
    presence: Any = None
    cached: bool | None = None
    warning: str | None = None


class ConfigErrorResponse(BaseModel):
    success: bool = False
    error: str = "Server configuration error"
    details: str


class InternalErrorResponse(BaseModel):
    success: bool = False
    error: str = "Internal server error"
    message: str


class MethodNotAllowedResponse(BaseModel):
    success: bool = False
    error: str = "Method not allowed"
