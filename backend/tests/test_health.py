"""
Snippets API — Health Endpoint Tests
=====================================

The engine is patched so no database is needed.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from snippets_api import __version__


@pytest.mark.asyncio
async def test_health_connected(test_client):
    conn = MagicMock()
    conn.execute = AsyncMock()
    engine = MagicMock()
    engine.connect.return_value.__aenter__.return_value = conn

    with patch("snippets_api.routes.health.engine", engine):
        response = await test_client.get("/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "healthy"
    assert payload["database"] == "connected"
    assert payload["version"] == __version__
    assert payload["uptime_seconds"] >= 0
    conn.execute.assert_awaited_once()


@pytest.mark.asyncio
async def test_health_database_down(test_client):
    engine = MagicMock()
    engine.connect.side_effect = OSError("connection refused")

    with patch("snippets_api.routes.health.engine", engine):
        response = await test_client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "unhealthy"
    assert response.json()["database"] == "disconnected"
    assert response.headers["access-control-allow-origin"] == "*"
