"""Test HTTP endpoints: auth, health and the four reports."""
import pytest
from leasedash.config import Settings
from leasedash.services import auth_service
from tests.conftest import HARBOR_ID, TEST_PASSWORD, TEST_USER


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/api/v1/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"
    assert "timestamp" in data


@pytest.mark.asyncio
async def test_root(client):
    resp = await client.get("/")
    assert resp.status_code == 200
    data = resp.json()
    assert isinstance(data["name"], str)
    assert isinstance(data["version"], str)


@pytest.mark.asyncio
async def test_login_and_me(client, auth_token):
    resp = await client.post("/api/auth/login", json={"username": TEST_USER, "password": TEST_PASSWORD})
    assert resp.status_code == 200
    token = resp.json()["token"]

    resp = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
    assert resp.json()["user_id"] == TEST_USER


@pytest.mark.asyncio
async def test_login_wrong_password(client, auth_token):
    resp = await client.post("/api/auth/login", json={"username": TEST_USER, "password": "wrong"})
    assert resp.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize("path", [
    "/api/v1/reports/occupancy",
    "/api/v1/reports/opportunity-loss?timeframe=pm",
    "/api/v1/reports/property-performance",
    "/api/v1/reports/occupancy-stats",
])
async def test_reports_require_auth(client, path):
    resp = await client.get(path)
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Unauthorized"


@pytest.mark.asyncio
async def test_invalid_token_rejected(client):
    resp = await client.get("/api/v1/reports/occupancy", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_occupancy_report(client, auth_headers):
    resp = await client.get(
        "/api/v1/reports/occupancy",
        params={"start_date": "2025-01-01T00:00:00", "end_date": "2025-01-31T00:00:00"},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    names = [d["property"]["property_name"] for d in body["data"]]
    assert names == ["Cedar Court", "Harbor Point"]
    for record in body["data"]:
        assert 0 <= record["occupancy"]["occupancy_rate"] <= 100


@pytest.mark.asyncio
async def test_occupancy_report_type_filter(client, auth_headers):
    resp = await client.get(
        "/api/v1/reports/occupancy", params={"property_type": "COMMERCIAL"}, headers=auth_headers
    )
    assert resp.status_code == 200
    assert [d["property"]["id"] for d in resp.json()["data"]] == [HARBOR_ID]


@pytest.mark.asyncio
async def test_opportunity_loss_requires_window(client, auth_headers):
    resp = await client.get("/api/v1/reports/opportunity-loss", headers=auth_headers)
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_opportunity_loss_report(client, auth_headers):
    resp = await client.get(
        "/api/v1/reports/opportunity-loss",
        params={
            "start_date": "2025-01-01T00:00:00",
            "end_date": "2025-01-31T00:00:00",
            "property_id": HARBOR_ID,
        },
        headers=auth_headers,
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert len(data) == 1
    assert data[0]["period"]["total_days"] == 30
    assert data[0]["loss"]["vacant_days"] == 80


@pytest.mark.asyncio
async def test_opportunity_loss_with_timeframe(client, auth_headers):
    for tf in ("cm", "pm", "ytd", "l30", "l7"):
        resp = await client.get(f"/api/v1/reports/opportunity-loss?timeframe={tf}", headers=auth_headers)
        assert resp.status_code == 200


@pytest.mark.asyncio
async def test_property_performance_report(client, auth_headers):
    resp = await client.get("/api/v1/reports/property-performance", headers=auth_headers)
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert [d["property"]["property_name"] for d in data] == ["Cedar Court", "Harbor Point"]
    assert sorted(d["ranking"]["occupancy_rank"] for d in data) == [1, 2]


@pytest.mark.asyncio
async def test_occupancy_stats(client, auth_headers):
    resp = await client.get("/api/v1/reports/occupancy-stats", headers=auth_headers)
    assert resp.status_code == 200
    stats = resp.json()["data"]
    assert stats["total_properties"] == 2
    assert stats["best_performing_property"] == "Cedar Court"
    assert stats["worst_performing_property"] == "Harbor Point"


@pytest.mark.asyncio
async def test_opportunity_loss_accepts_utc_timestamps(client, auth_headers):
    resp = await client.get(
        "/api/v1/reports/opportunity-loss",
        params={
            "start_date": "2025-01-01T00:00:00Z",
            "end_date": "2025-01-31T00:00:00Z",
            "property_id": HARBOR_ID,
        },
        headers=auth_headers,
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data[0]["period"]["total_days"] == 30
    assert data[0]["loss"]["vacant_days"] == 80


@pytest.mark.asyncio
@pytest.mark.parametrize("params", [
    {"start_date": "2025-01-01T00:00:00"},
    {"end_date": "2025-01-31T00:00:00"},
])
async def test_half_window_is_bad_request(client, auth_headers, params):
    for path in ("/api/v1/reports/occupancy", "/api/v1/reports/opportunity-loss"):
        resp = await client.get(path, params=params, headers=auth_headers)
        assert resp.status_code == 400
        assert "together" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_login_with_configured_user(client, monkeypatch):
    monkeypatch.setattr(auth_service, "USERS", {})
    settings = Settings(users={
        "ops": {"password_hash": auth_service.hash_password("ops-pass"), "display_name": "Operations"},
    })
    assert auth_service.load_users(settings) == 1

    resp = await client.post("/api/auth/login", json={"username": "ops", "password": "ops-pass"})
    assert resp.status_code == 200
    assert resp.json()["display_name"] == "Operations"

    resp = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {resp.json()['token']}"})
    assert resp.json()["user_id"] == "ops"
