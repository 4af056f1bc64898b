"""API tests: partner endpoints using test DB (client fixture overrides get_db)."""
import pytest

from repositories.partner_repository import create_partner

pytestmark = pytest.mark.api


def test_create_partner_returns_api_key(client):
    """POST /api/partners returns 201 with id, name and api_key."""
    r = client.post("/api/partners", json={"name": "Acme Charging"})
    assert r.status_code == 201
    data = r.json()
    assert data["name"] == "Acme Charging"
    assert data["id"]
    assert data["api_key"]


def test_create_partner_empty_name_422(client):
    """POST /api/partners with empty name fails validation."""
    r = client.post("/api/partners", json={"name": ""})
    assert r.status_code == 422


def test_list_partners_hides_api_keys(client, db_session):
    """GET /api/partners lists partners without their keys."""
    create_partner(db_session, "Listed Partner")
    r = client.get("/api/partners")
    assert r.status_code == 200
    data = r.json()
    assert "Listed Partner" in [p["name"] for p in data]
    assert all("api_key" not in p for p in data)


def test_get_partner(client, db_session):
    """GET /api/partners/{id} returns the partner."""
    p = create_partner(db_session, "One Partner")
    r = client.get(f"/api/partners/{p.id}")
    assert r.status_code == 200
    assert r.json() == {"id": p.id, "name": "One Partner"}


def test_get_partner_404(client):
    """GET /api/partners/{id} returns 404 for unknown id."""
    r = client.get("/api/partners/unknown")
    assert r.status_code == 404
