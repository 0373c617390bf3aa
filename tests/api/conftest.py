"""Shared fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient

from flowershop.domain.entities import Administrator, Store
from flowershop.infrastructure.config import settings
from flowershop.infrastructure.memory import (
    InMemoryCatalog,
    get_memory_catalog,
    reset_memory_catalog,
)
from flowershop.main import app


@pytest.fixture(autouse=True)
def memory_catalog(monkeypatch) -> InMemoryCatalog:
    """Serve the API from a fresh in-memory catalog."""
    monkeypatch.setattr(settings, "catalog_backend", "memory")
    reset_memory_catalog()
    return get_memory_catalog()


@pytest.fixture
def store(memory_catalog) -> Store:
    return memory_catalog.add_store("Store A", store_id="store-a")


@pytest.fixture
def admin(memory_catalog, store) -> Administrator:
    return memory_catalog.add_admin(store, admin_id="admin-a")


@pytest.fixture
def client() -> TestClient:
    """Create test client without authentication."""
    return TestClient(app)


@pytest.fixture
def auth_client() -> TestClient:
    """Create test client with valid API key authentication."""
    return TestClient(
        app,
        headers={"Authorization": f"Bearer {settings.flowershop_api_key}"},
    )


@pytest.fixture
def admin_client(admin) -> TestClient:
    """Create authenticated test client acting as the store A admin."""
    return TestClient(
        app,
        headers={
            "Authorization": f"Bearer {settings.flowershop_api_key}",
            "X-Admin-ID": str(admin.id),
        },
    )
