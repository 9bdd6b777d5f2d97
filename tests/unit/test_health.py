from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

from staffdb.main import app


def test_health_returns_status_and_services(client):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] in ("healthy", "degraded")
    assert "version" in data
    assert "mongodb" in data["services"]


def test_health_not_configured_is_healthy(client):
    response = client.get("/api/v1/health")
    data = response.json()
    assert data["status"] == "healthy"
    assert data["services"]["mongodb"] == "not_configured"


def test_health_ok_when_ping_succeeds(client):
    store = MagicMock()
    store.check_connection = AsyncMock(return_value=True)
    store.close = AsyncMock()
    app.state.profile_store = store

    data = client.get("/api/v1/health").json()

    assert data["status"] == "healthy"
    assert data["services"]["mongodb"] == "ok"


def test_health_degraded_when_ping_fails(client):
    store = MagicMock()
    store.check_connection = AsyncMock(return_value=False)
    store.close = AsyncMock()
    app.state.profile_store = store

    data = client.get("/api/v1/health").json()

    assert data["status"] == "degraded"
    assert data["services"]["mongodb"] == "error"


def test_health_reports_database_and_collections(client):
    data = client.get("/api/v1/health").json()

    assert data["database"] == "unified_demo"
    assert data["collections"] == ["Employee", "Department", "Developer", "Tester"]


def test_readiness_probe_without_store(client):
    response = client.get("/api/v1/health/ready")
    assert response.status_code == 503
    assert response.json()["ready"] is False


def test_readiness_probe_with_store(client):
    store = MagicMock()
    store.close = AsyncMock()
    app.state.profile_store = store

    response = client.get("/api/v1/health/ready")

    assert response.status_code == 200
    assert response.json()["ready"] is True
