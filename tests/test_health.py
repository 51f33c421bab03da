"""Tests for health check endpoints."""

import pytest
from httpx import AsyncClient


pytestmark = pytest.mark.integration


async def test_liveness_endpoint(client: AsyncClient):
    """Test that liveness endpoint returns 200."""
    response = await client.get("/health/live")

    assert response.status_code == 200
    assert response.json()["status"] == "alive"


async def test_readiness_endpoint(client: AsyncClient):
    """Test that readiness endpoint returns 200 with healthy checks."""
    response = await client.get("/health/ready")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["checks"]["database"] == "ok"


async def test_info_endpoint(client: AsyncClient):
    """Test that info endpoint returns application metadata."""
    response = await client.get("/info")

    assert response.status_code == 200
    data = response.json()
    assert data["app"] == "orgguard"
    assert "environment" in data
    assert "version" in data


async def test_request_id_is_echoed(client: AsyncClient):
    response = await client.get("/health/live", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


async def test_request_id_is_generated(client: AsyncClient):
    response = await client.get("/health/live")

    assert response.headers["X-Request-ID"]


async def test_readiness_reports_latency(client: AsyncClient):
    response = await client.get("/health/ready")

    assert response.json()["database_ms"] >= 0


async def test_unknown_route_is_problem_detail(client: AsyncClient):
    response = await client.get("/api/v1/nowhere")

    assert response.status_code == 404
    assert response.headers["content-type"].startswith("application/problem+json")
    assert response.json()["type"].endswith("/errors/not_found")
