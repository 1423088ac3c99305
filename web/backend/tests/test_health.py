"""
Tests for health monitoring endpoints.
"""

import pytest


@pytest.mark.asyncio
async def test_health_check(client):
    response = await client.get("/api/health/")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["cache_backend"] == "memory"


@pytest.mark.asyncio
async def test_liveness(client):
    response = await client.get("/api/health/liveness")

    assert response.status_code == 200
    assert response.json() == {"alive": True}


@pytest.mark.asyncio
async def test_config_status(client):
    response = await client.get("/api/health/config-status")

    assert response.status_code == 200
    assert response.json()["config_status"] in {"ok", "degraded"}


@pytest.mark.asyncio
async def test_root(client):
    response = await client.get("/")

    assert response.json() == {"status": "ok", "service": "guild-membercount"}
