"""Integration tests: ChargerStore (async facade) against the test DB."""
import pytest

from repositories.partner_repository import create_partner
from status_core.errors import ChargerConflictError, ChargerNotFoundError, PartnerNotFoundError
from status_core.snapshots import ChargerSnapshot, ChargerStatus, PartnerIdentity

pytestmark = pytest.mark.integration


@pytest.fixture
def partner(db_session):
    return create_partner(db_session, "Store Partner")


@pytest.mark.asyncio
async def test_create_then_find(store, partner):
    """create_charger returns an AVAILABLE snapshot that find_charger reads back."""
    created = await store.create_charger("CP-S1", partner.id)
    assert isinstance(created, ChargerSnapshot)
    assert created.status == ChargerStatus.AVAILABLE
    assert created.meter_value == 0.0
    assert created.partner_id == partner.id
    assert created.partner_name == "Store Partner"
    assert created.last_update.tzinfo is not None
    found = await store.find_charger("CP-S1")
    assert found.charger_id == "CP-S1"
    assert found.partner_id == partner.id


@pytest.mark.asyncio
async def test_find_missing_raises_not_found(store):
    """find_charger signals not-found distinctly."""
    with pytest.raises(ChargerNotFoundError):
        await store.find_charger("CP-NONE")


@pytest.mark.asyncio
async def test_create_for_unknown_partner(store):
    """create_charger for an unknown partner raises PartnerNotFoundError."""
    with pytest.raises(PartnerNotFoundError):
        await store.create_charger("CP-S2", "no-such-partner")


@pytest.mark.asyncio
async def test_create_duplicate_raises_conflict(store, partner):
    """A second create for the same id raises ChargerConflictError."""
    await store.create_charger("CP-DUP", partner.id)
    with pytest.raises(ChargerConflictError):
        await store.create_charger("CP-DUP", partner.id)


@pytest.mark.asyncio
async def test_update_charger(store, partner):
    """update_charger writes status/meter and returns the new snapshot."""
    await store.create_charger("CP-U", partner.id)
    updated = await store.update_charger("CP-U", ChargerStatus.CHARGING, 12.5)
    assert updated.status == ChargerStatus.CHARGING
    assert updated.meter_value == 12.5
    assert (await store.find_charger("CP-U")).status == ChargerStatus.CHARGING


@pytest.mark.asyncio
async def test_update_missing_raises_not_found(store):
    """update_charger on unknown id raises ChargerNotFoundError."""
    with pytest.raises(ChargerNotFoundError):
        await store.update_charger("CP-NONE", ChargerStatus.CHARGING, 1.0)


@pytest.mark.asyncio
async def test_list_chargers_by_partner(store, partner):
    """list_chargers_by_partner returns snapshots for one page."""
    for cid in ("CP-L1", "CP-L2", "CP-L3"):
        await store.create_charger(cid, partner.id)
    page = await store.list_chargers_by_partner(partner.id, 2, 0)
    assert [c.charger_id for c in page] == ["CP-L1", "CP-L2"]


@pytest.mark.asyncio
async def test_find_partner_by_api_key(store, partner):
    """find_partner_by_api_key returns a PartnerIdentity; unknown key raises PartnerNotFoundError."""
    identity = await store.find_partner_by_api_key(partner.api_key)
    assert identity == PartnerIdentity(partner_id=partner.id, name="Store Partner")
    with pytest.raises(PartnerNotFoundError):
        await store.find_partner_by_api_key("bogus")
