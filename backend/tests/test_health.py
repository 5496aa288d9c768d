"""
Tests for GET /health.
"""

from unittest.mock import MagicMock

import pytest

from shopfront import __version__


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy_when_database_reachable(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["version"] == __version__
        assert body["uptime_seconds"] >= 0

    @pytest.mark.asyncio
    async def test_unhealthy_when_database_unreachable(self, test_app, test_client):
        engine = test_app.state.engine
        broken = MagicMock()
        broken.connect.side_effect = OSError("connection refused")
        test_app.state.engine = broken
        try:
            response = await test_client.get("/health")
        finally:
            test_app.state.engine = engine

        assert response.status_code == 200
        assert response.json()["status"] == "unhealthy"
        assert response.json()["database"] == "disconnected"

    @pytest.mark.asyncio
    async def test_health_is_not_under_api_prefix(self, test_client):
        assert (await test_client.get("/api/health")).status_code == 404
