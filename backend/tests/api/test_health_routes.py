"""Health & Readiness - liveness never depends on the store, readiness does."""

import userapi.infrastructure.database as db_module


async def test_health_returns_ok(client):
    res = await client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok", "message": "Service is running"}


async def test_health_ok_without_database(lenient_client, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    res = await lenient_client.get("/health")
    assert res.status_code == 200


async def test_ready_when_database_reachable(client):
    res = await client.get("/health/ready")
    assert res.status_code == 200
    assert res.json() == {"status": "ready", "checks": {"database": "healthy"}}


async def test_not_ready_without_database(lenient_client, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    res = await lenient_client.get("/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"


async def test_cors_allows_any_origin(client):
    res = await client.get("/health", headers={"Origin": "http://elsewhere.test"})
    assert res.headers["access-control-allow-origin"] == "*"
