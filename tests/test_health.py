"""Tests for health check endpoints."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from flowershop.api import health
from flowershop.infrastructure.config import settings
from flowershop.main import app


@pytest.fixture
def client() -> TestClient:
    """Create test client."""
    return TestClient(app)


def test_health_check(client: TestClient) -> None:
    """Test health endpoint returns healthy status."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "flowershop-api"
    assert data["version"] == settings.api_version


def test_ready_with_memory_catalog(client: TestClient, monkeypatch) -> None:
    monkeypatch.setattr(settings, "catalog_backend", "memory")

    response = client.get("/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ready", "catalog_backend": "memory"}


def test_not_ready_when_storage_fails(client: TestClient, monkeypatch) -> None:
    """Test readiness answers 503 while the storage check fails."""
    monkeypatch.setattr(settings, "catalog_backend", "database")
    monkeypatch.setattr(health, "check_storage", AsyncMock(return_value=False))

    response = client.get("/ready")

    assert response.status_code == 503
    assert response.json() == {"status": "unavailable", "catalog_backend": "database"}


def test_health_needs_no_api_key(client: TestClient) -> None:
    """Test health endpoints are public and still get a request ID."""
    response = client.get("/health")
    assert "X-Request-ID" in response.headers


class TestCheckStorage:
    """Tests for the storage check behind /ready."""

    @staticmethod
    def fake_engine(execute: AsyncMock) -> MagicMock:
        conn = MagicMock()
        conn.execute = execute
        engine = MagicMock()
        engine.connect.return_value.__aenter__ = AsyncMock(return_value=conn)
        engine.connect.return_value.__aexit__ = AsyncMock(return_value=False)
        return engine

    @pytest.mark.asyncio
    async def test_memory_backend_is_always_ready(self, monkeypatch) -> None:
        monkeypatch.setattr(settings, "catalog_backend", "memory")

        assert await health.check_storage() is True

    @pytest.mark.asyncio
    async def test_database_answers(self, monkeypatch) -> None:
        execute = AsyncMock()
        monkeypatch.setattr(settings, "catalog_backend", "database")
        monkeypatch.setattr(
            "flowershop.infrastructure.database.engine", self.fake_engine(execute)
        )

        assert await health.check_storage() is True
        execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_database_error_means_not_ready(self, monkeypatch) -> None:
        execute = AsyncMock(side_effect=OperationalError("SELECT 1", {}, Exception("down")))
        monkeypatch.setattr(settings, "catalog_backend", "database")
        monkeypatch.setattr(
            "flowershop.infrastructure.database.engine", self.fake_engine(execute)
        )

        assert await health.check_storage() is False
