"""
Tests for the structured JSON log formatter.
"""

import json
import logging

from utils.logging import CustomJsonFormatter
from web.backend.core.request_id import request_id_context


def _make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="services.guild_stats_service",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="Fetched fresh data: %s members",
        args=(42,),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formats_core_fields():
    payload = json.loads(CustomJsonFormatter().format(_make_record()))

    assert payload["level"] == "INFO"
    assert payload["module"] == "services.guild_stats_service"
    assert payload["message"] == "Fetched fresh data: 42 members"
    assert "request_id" not in payload


def test_includes_known_extra_fields_only():
    record = _make_record(guild_id="123", cache_key="guild-123-stats", unrelated="x")

    payload = json.loads(CustomJsonFormatter().format(record))

    assert payload["guild_id"] == "123"
    assert payload["cache_key"] == "guild-123-stats"
    assert "unrelated" not in payload


def test_includes_request_id_from_context():
    token = request_id_context.set("req-1")
    try:
        payload = json.loads(CustomJsonFormatter().format(_make_record()))
    finally:
        request_id_context.reset(token)

    assert payload["request_id"] == "req-1"
