"""Health Routes — liveness and readiness probes."""

from unittest.mock import AsyncMock

import task_controller.infrastructure.database as db_module


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_with_database(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_readiness_without_database(client, monkeypatch):
    monkeypatch.setattr(
        db_module.db_manager, "health_check", AsyncMock(return_value=False),
    )
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"


async def test_readiness_reports_pool(client):
    res = await client.get("/api/v1/health/ready")
    assert res.json()["checks"]["pool"]["class"] == "StaticPool"


async def test_readiness_before_database_init(client, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_not_initialized"
