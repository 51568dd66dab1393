"""Health Probes."""

import movie_catalog.infrastructure.database as db_module


async def test_liveness(client):
    res = await client.get("/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_reports_every_check(client):
    res = await client.get("/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"] == {"database": "healthy", "storage": "healthy"}


async def test_readiness_without_database(client, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    res = await client.get("/health/ready")
    assert res.status_code == 503
    assert res.json()["checks"]["database"] == "unavailable"
    assert res.json()["checks"]["storage"] == "healthy"
