"""
HarborBot - Keep-alive Server Tests
===================================

Endpoints served through aiohttp's test client.
"""

import pytest
from aiohttp.test_utils import TestClient, TestServer

from src.core.health import HealthCheckServer


class TestEndpoints:
    """Tests for /, /health and /status."""

    @pytest.mark.asyncio
    async def test_health(self):
        server = HealthCheckServer()
        async with TestClient(TestServer(server.app)) as client:
            response = await client.get("/health")
            assert response.status == 200
            assert await response.text() == "OK"
            assert response.headers["X-Content-Type-Options"] == "nosniff"

    @pytest.mark.asyncio
    async def test_index(self):
        server = HealthCheckServer()
        async with TestClient(TestServer(server.app)) as client:
            response = await client.get("/")
            assert response.status == 200
            assert response.content_type == "text/html"
            assert "HarborBot" in await response.text()

    @pytest.mark.asyncio
    async def test_status_standalone(self):
        server = HealthCheckServer()
        async with TestClient(TestServer(server.app)) as client:
            response = await client.get("/status")
            data = await response.json()

        assert response.status == 200
        assert data["status"] == "online"
        assert data["uptime"] >= 0
        assert "rss_mb" in data["memory"]
        assert "connected" not in data

    @pytest.mark.asyncio
    async def test_status_with_bot(self, mock_bot):
        server = HealthCheckServer(mock_bot)
        async with TestClient(TestServer(server.app)) as client:
            response = await client.get("/status")
            data = await response.json()

        assert data["connected"] is True
        assert data["guilds"] == 0
        assert data["backend"] == "memory"

    @pytest.mark.asyncio
    async def test_stop_without_start(self):
        server = HealthCheckServer(port=0)
        await server.stop()
        assert server.runner is None
