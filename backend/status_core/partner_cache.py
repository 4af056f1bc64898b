"""API key -> partner identity cache with a periodic sweep."""
import asyncio
import logging
import time
from typing import Callable

from status_core.snapshots import PartnerIdentity
from status_core.ttl_cache import BoundedTTLCache

LOG = logging.getLogger(__name__)

DEFAULT_PARTNER_TTL_MS = 5 * 60 * 1000
DEFAULT_PARTNER_MAX_SIZE = 10_000
DEFAULT_SWEEP_INTERVAL_S = 60.0


class PartnerIdentityCache(BoundedTTLCache[str, PartnerIdentity]):
    """
    Authentication cache keyed by API key.

    API keys are numerous and rarely re-read, so lazy expiry alone would let
    expired entries pile up; start_sweeper purges them on a fixed interval.
    Keys are treated as immutable: the write path never invalidates here.
    """

    def __init__(
        self,
        ttl_ms: int = DEFAULT_PARTNER_TTL_MS,
        max_size: int = DEFAULT_PARTNER_MAX_SIZE,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(ttl_ms=ttl_ms, max_size=max_size, clock=clock, name="partner_identity")

    def revoke(self, api_key: str) -> None:
        """Forget a key immediately instead of waiting for its TTL."""
        self.invalidate(api_key)

    def start_sweeper(self, interval_s: float = DEFAULT_SWEEP_INTERVAL_S) -> tuple[asyncio.Task, asyncio.Event]:
        """
        Start the sweep loop as an asyncio task.
        Returns (task, stop_event). Stop by setting stop_event or cancelling the task.
        """
        stop_event = asyncio.Event()
        task = asyncio.create_task(self._sweep_loop(interval_s, stop_event))
        return task, stop_event

    async def _sweep_loop(self, interval_s: float, stop_event: asyncio.Event) -> None:
        while not stop_event.is_set():
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=interval_s)
            except asyncio.TimeoutError:
                purged = self.purge_expired()
                if purged:
                    LOG.debug("Partner cache sweep purged %d expired entries", purged)
