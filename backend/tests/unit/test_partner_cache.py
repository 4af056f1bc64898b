"""Unit tests: PartnerIdentityCache and its sweep loop; ChargerStatusCache defaults."""
import asyncio

import pytest

from status_core.partner_cache import PartnerIdentityCache
from status_core.snapshots import PartnerIdentity
from status_core.status_cache import ChargerStatusCache

pytestmark = pytest.mark.unit


class FakeClock:
    """Manually advanced clock in whole milliseconds."""

    def __init__(self):
        self.now_ms = 0

    def __call__(self) -> float:
        return self.now_ms / 1000.0


P1 = PartnerIdentity(partner_id="p-1", name="Partner One")


def test_status_cache_defaults():
    """Charger status cache: 5s TTL, 1000 entries."""
    cache = ChargerStatusCache()
    assert cache.ttl_ms == 5000
    assert cache.max_size == 1000


def test_partner_cache_defaults():
    """Partner cache: 5 minute TTL, generous bound."""
    cache = PartnerIdentityCache()
    assert cache.ttl_ms == 5 * 60 * 1000
    assert cache.max_size >= 10_000


def test_partner_entry_expires_after_five_minutes():
    """API key entry is served for five minutes after insertion."""
    clock = FakeClock()
    cache = PartnerIdentityCache(clock=clock)
    cache.set("key-1", P1)
    clock.now_ms = 5 * 60 * 1000 - 1
    assert cache.get("key-1") == P1
    clock.now_ms = 5 * 60 * 1000
    assert cache.get("key-1") is None


def test_revoke_drops_key():
    """revoke forgets the key before its TTL."""
    cache = PartnerIdentityCache()
    cache.set("key-1", P1)
    cache.revoke("key-1")
    assert cache.get("key-1") is None


@pytest.mark.asyncio
async def test_sweeper_purges_untouched_expired_entries():
    """The sweep removes expired keys nobody reads again."""
    clock = FakeClock()
    cache = PartnerIdentityCache(ttl_ms=1000, clock=clock)
    cache.set("stale", P1)
    cache.set("also-stale", P1)
    clock.now_ms = 2000
    assert len(cache) == 2
    task, stop_event = cache.start_sweeper(interval_s=0.01)
    await asyncio.sleep(0.05)
    stop_event.set()
    await asyncio.wait_for(task, timeout=1.0)
    assert len(cache) == 0


@pytest.mark.asyncio
async def test_sweeper_keeps_live_entries_and_stops_on_event():
    """Live entries survive sweeps; setting the stop event ends the task."""
    cache = PartnerIdentityCache(ttl_ms=60_000)
    cache.set("live", P1)
    task, stop_event = cache.start_sweeper(interval_s=0.01)
    await asyncio.sleep(0.03)
    assert cache.get("live") == P1
    stop_event.set()
    await asyncio.wait_for(task, timeout=1.0)
    assert task.done()
