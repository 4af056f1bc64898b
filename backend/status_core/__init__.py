# Status core: bounded TTL caches, store deadlines, cache-coherent status reads and writes
from status_core.coordinator import Authenticator, ChargerStatusService, StatusLookup, StoreTimeouts
from status_core.partner_cache import PartnerIdentityCache
from status_core.snapshots import ChargerSnapshot, ChargerStatus, PartnerIdentity
from status_core.status_cache import ChargerStatusCache
from status_core.store import ChargerStore
from status_core.ttl_cache import BoundedTTLCache, CacheEntry, CacheStats
from status_core.timeouts import with_timeout

__all__ = [
    "Authenticator",
    "BoundedTTLCache",
    "CacheEntry",
    "CacheStats",
    "ChargerSnapshot",
    "ChargerStatus",
    "ChargerStatusCache",
    "ChargerStatusService",
    "ChargerStore",
    "PartnerIdentity",
    "PartnerIdentityCache",
    "StatusLookup",
    "StoreTimeouts",
    "with_timeout",
]
