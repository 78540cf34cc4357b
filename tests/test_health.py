"""Tests for health check endpoints."""

from unittest.mock import MagicMock

import pytest
from httpx import AsyncClient
from redis.exceptions import ConnectionError as RedisConnectionError


@pytest.mark.asyncio
async def test_liveness_endpoint(client: AsyncClient):
    """Test that liveness endpoint returns 200."""
    response = await client.get("/health/live")

    assert response.status_code == 200
    assert response.json()["status"] == "alive"


@pytest.mark.asyncio
async def test_readiness_endpoint(client: AsyncClient, redis_client: MagicMock):
    """Test that readiness endpoint returns 200 when the store answers."""
    response = await client.get("/health/ready")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["checks"]["store"] == "ok"
    redis_client.ping.assert_awaited_once()


@pytest.mark.asyncio
async def test_readiness_degraded_when_store_down(
    client: AsyncClient, redis_client: MagicMock
):
    """Test that readiness reports 503 when the store ping fails."""
    redis_client.ping.side_effect = RedisConnectionError("connection refused")

    response = await client.get("/health/ready")

    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "degraded"
    assert "connection refused" in data["checks"]["store"]


@pytest.mark.asyncio
async def test_health_checks_are_not_traced(client: AsyncClient, span_exporter):
    """Health checks never touch the order handler span."""
    await client.get("/health/live")
    await client.get("/health/ready")

    assert span_exporter.get_finished_spans() == ()
