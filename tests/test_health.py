"""
Tests for liveness, readiness and metrics endpoints.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["environment"] == "test"
    assert "timestamp" in data
    assert data["uptime_seconds"] >= 0


@pytest.mark.asyncio
async def test_health_ignores_store_outage(client: AsyncClient, store_outage):
    response = await client.get("/health")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_ready(client: AsyncClient):
    response = await client.get("/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready"}


@pytest.mark.asyncio
async def test_not_ready_when_store_down(client: AsyncClient, store_outage):
    response = await client.get("/health/ready")
    assert response.status_code == 503
    assert response.json() == {"status": "unavailable"}


@pytest.mark.asyncio
async def test_metrics_exposes_auth_counters(client: AsyncClient):
    await client.post("/login", json={"username": "bob", "password": "anything"})
    response = await client.get("/metrics")
    assert response.status_code == 200
    assert "login_attempts_total" in response.text
