"""Integration tests: charger and partner repositories with test DB session."""
import uuid

import pytest

from repositories.charger_repository import (
    create_charger,
    get_charger,
    list_chargers_by_partner,
    update_charger_status,
)
from repositories.partner_repository import create_partner, get_partner, get_partner_by_api_key, list_partners

pytestmark = pytest.mark.integration


@pytest.fixture
def partner(db_session):
    """Create a partner (unique name per test)."""
    return create_partner(db_session, f"Repo Partner {uuid.uuid4().hex[:8]}")


def test_create_partner_issues_api_key(db_session):
    """create_partner generates an id and a UUID API key."""
    p = create_partner(db_session, "Acme Charging")
    assert p.id
    assert uuid.UUID(p.api_key)
    assert get_partner(db_session, p.id).name == "Acme Charging"


def test_get_partner_by_api_key(db_session, partner):
    """get_partner_by_api_key finds the partner; unknown key returns None."""
    assert get_partner_by_api_key(db_session, partner.api_key).id == partner.id
    assert get_partner_by_api_key(db_session, "not-a-key") is None


def test_list_partners_sorted_by_name(db_session):
    """list_partners returns all partners ordered by name."""
    create_partner(db_session, "Zeta")
    create_partner(db_session, "Alpha")
    names = [p.name for p in list_partners(db_session)]
    assert names == sorted(names)
    assert {"Zeta", "Alpha"} <= set(names)


def test_create_charger_defaults(db_session, partner):
    """create_charger stores AVAILABLE / 0.0 and links the partner."""
    charger = create_charger(db_session, charger_id="CP-REPO-1", partner_id=partner.id)
    assert charger.status == "AVAILABLE"
    assert charger.meter_value == 0.0
    assert charger.last_update is not None
    found = get_charger(db_session, "CP-REPO-1")
    assert found is not None
    assert found.partner.name == partner.name


def test_get_charger_not_found(db_session):
    """get_charger returns None for unknown id."""
    assert get_charger(db_session, "CP-NONE") is None


def test_update_charger_status(db_session, partner):
    """update_charger_status sets status and meter and advances last_update."""
    charger = create_charger(db_session, charger_id="CP-UPD", partner_id=partner.id)
    before = charger.last_update
    updated = update_charger_status(db_session, "CP-UPD", status="CHARGING", meter_value=12.5)
    assert updated is not None
    assert updated.status == "CHARGING"
    assert updated.meter_value == 12.5
    assert updated.last_update >= before


def test_update_charger_status_not_found(db_session):
    """update_charger_status returns None for unknown id."""
    assert update_charger_status(db_session, "CP-NONE", status="CHARGING", meter_value=1.0) is None


def test_list_chargers_by_partner_pages(db_session, partner):
    """list_chargers_by_partner orders by id and applies limit/offset; other partners excluded."""
    other = create_partner(db_session, "Other Partner")
    for cid in ("CP-C", "CP-A", "CP-B"):
        create_charger(db_session, charger_id=cid, partner_id=partner.id)
    create_charger(db_session, charger_id="CP-OTHER", partner_id=other.id)
    assert [c.id for c in list_chargers_by_partner(db_session, partner.id)] == ["CP-A", "CP-B", "CP-C"]
    assert [c.id for c in list_chargers_by_partner(db_session, partner.id, limit=2, offset=1)] == ["CP-B", "CP-C"]
