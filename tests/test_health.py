"""Tests for health check endpoints."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine

from product_catalog.infrastructure import database


def test_health_check(client: TestClient) -> None:
    """Test health endpoint returns healthy status."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "product-catalog"
    assert "version" in data


def test_readiness_check(client: TestClient) -> None:
    """Test readiness endpoint returns ready when the database answers."""
    response = client.get("/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"


def test_readiness_check_database_down(
    client: TestClient,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Test readiness endpoint returns 503 when the database is unreachable."""
    unreachable = create_async_engine("sqlite+aiosqlite:////nonexistent-dir/catalog.db")
    monkeypatch.setattr(database, "engine", unreachable)

    response = client.get("/ready")

    assert response.status_code == 503
    assert response.json()["status"] == "unavailable"
