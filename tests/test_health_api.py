"""Tests for health check and root endpoints"""

import pytest
from unittest.mock import AsyncMock
from httpx import AsyncClient
from fastapi import status


@pytest.mark.asyncio
class TestBasicHealthCheck:
    """Test basic health check endpoint"""

    async def test_basic_health_check(self, async_client: AsyncClient):
        """Test GET /health endpoint"""
        response = await async_client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data

    async def test_root_endpoint(self, async_client: AsyncClient):
        response = await async_client.get("/")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "running"


@pytest.mark.asyncio
class TestDetailedHealthCheck:
    """Test detailed health check endpoint"""

    async def test_all_services_connected(self, async_client: AsyncClient):
        response = await async_client.get("/api/v1/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert data["services"] == {"database": "connected", "redis": "connected"}

    async def test_redis_down_is_degraded(self, async_client: AsyncClient, mock_redis):
        mock_redis["client"].ping = AsyncMock(side_effect=ConnectionError("refused"))

        response = await async_client.get("/api/v1/health")

        data = response.json()
        assert response.status_code == status.HTTP_200_OK
        assert data["status"] == "degraded"
        assert data["services"]["redis"].startswith("disconnected")


@pytest.mark.asyncio
async def test_prometheus_endpoint(async_client: AsyncClient):
    response = await async_client.get("/metrics/")

    assert response.status_code == status.HTTP_200_OK
    assert "authorization_decisions_total" in response.text
