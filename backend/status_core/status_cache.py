"""Charger status cache: charger id -> ChargerSnapshot."""
import time
from typing import Callable

from status_core.snapshots import ChargerSnapshot
from status_core.ttl_cache import BoundedTTLCache

DEFAULT_STATUS_TTL_MS = 5000
DEFAULT_STATUS_MAX_SIZE = 1000


class ChargerStatusCache(BoundedTTLCache[str, ChargerSnapshot]):
    """
    Read-path cache for charger status.

    Filled only after a successful store read and invalidated (never updated in
    place) after every successful status write. A hit may be up to ttl_ms stale
    relative to a write this instance has not observed.
    """

    def __init__(
        self,
        ttl_ms: int = DEFAULT_STATUS_TTL_MS,
        max_size: int = DEFAULT_STATUS_MAX_SIZE,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(ttl_ms=ttl_ms, max_size=max_size, clock=clock, name="charger_status")
