"""Status read/write operations and the rules binding them to the caches.

Per charger key the status cache is either Cached or Uncached:
- Uncached -> Cached only after a successful store read (cache miss path).
- A hit never refreshes the entry; expiry counts from insertion.
- Cached -> Uncached on expiry (observed by get) or on invalidation, which
  runs after every successful status write and before its result is returned.

Writes never put the new snapshot in the cache: a concurrent conflicting write
may have landed in between, and dropping the entry is always safe. A read that
raced a write can still repopulate an older snapshot; staleness is bounded by
TTL plus one in-flight read. Concurrent misses on one key are not coalesced.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from numbers import Real
from typing import Optional, Union

from status_core.errors import (
    ChargerConflictError,
    ChargerNotFoundError,
    ForbiddenError,
    InvalidInputError,
    OperationTimeoutError,
    PartnerNotFoundError,
    UnauthorizedError,
)
from status_core.partner_cache import PartnerIdentityCache
from status_core.snapshots import ChargerSnapshot, ChargerStatus, PartnerIdentity
from status_core.status_cache import ChargerStatusCache
from status_core.store import ChargerStore
from status_core.timeouts import with_timeout
from utils import config

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreTimeouts:
    """Deadlines (ms) per call site. Reads are kept shorter than writes."""

    ownership_check_ms: int = 3000
    status_update_ms: int = 5000
    status_read_ms: int = 2000
    auth_lookup_ms: int = 3000

    @classmethod
    def from_config(cls) -> StoreTimeouts:
        return cls(
            ownership_check_ms=config.OWNERSHIP_CHECK_TIMEOUT_MS,
            status_update_ms=config.STATUS_UPDATE_TIMEOUT_MS,
            status_read_ms=config.STATUS_READ_TIMEOUT_MS,
            auth_lookup_ms=config.AUTH_LOOKUP_TIMEOUT_MS,
        )


@dataclass(frozen=True)
class StatusLookup:
    snapshot: ChargerSnapshot
    cache_hit: bool


# Retry-After hints (seconds) sent with timeouts.
STATUS_READ_RETRY_AFTER_S = 1
DEFAULT_RETRY_AFTER_S = 2


def _parse_status(status: Union[ChargerStatus, str]) -> ChargerStatus:
    try:
        return ChargerStatus(status)
    except ValueError as e:
        raise InvalidInputError(f"Invalid status: {status!r}") from e


def _parse_meter_value(meter_value: object) -> float:
    if isinstance(meter_value, bool) or not isinstance(meter_value, Real):
        raise InvalidInputError("meter_value must be a number")
    value = float(meter_value)
    if math.isnan(value) or math.isinf(value) or value < 0:
        raise InvalidInputError("meter_value must be a finite, non-negative number")
    return value


class ChargerStatusService:
    """getStatus / updateStatus plus charger registration and listing for one partner API."""

    def __init__(
        self,
        store: ChargerStore,
        status_cache: ChargerStatusCache,
        timeouts: Optional[StoreTimeouts] = None,
    ) -> None:
        self._store = store
        self._cache = status_cache
        self._timeouts = timeouts or StoreTimeouts()

    async def get_status(self, charger_id: str) -> StatusLookup:
        """Cache first; on miss read the store (status read deadline) and populate the cache."""
        return await self._read_through(
            charger_id,
            self._timeouts.status_read_ms,
            "status read",
            retry_after_s=STATUS_READ_RETRY_AFTER_S,
        )

    async def update_status(
        self,
        charger_id: str,
        status: Union[ChargerStatus, str],
        meter_value: float,
        caller_partner_id: str,
        bypass_ownership_check: bool = False,
    ) -> ChargerSnapshot:
        """
        Write a status/meter update for a charger the caller owns.

        Ownership is re-resolved through the cached read path unless
        bypass_ownership_check is set (load tests only). On success the
        status cache entry is dropped before returning.
        """
        parsed_status = _parse_status(status)
        parsed_meter = _parse_meter_value(meter_value)
        if bypass_ownership_check:
            LOG.debug("Ownership check bypassed for charger %s", charger_id)
        else:
            owner = await self._read_through(charger_id, self._timeouts.ownership_check_ms, "ownership check")
            if owner.snapshot.partner_id != caller_partner_id:
                LOG.warning(
                    "Partner %s attempted to update charger %s owned by %s",
                    caller_partner_id,
                    charger_id,
                    owner.snapshot.partner_id,
                )
                raise ForbiddenError("You do not have permission to update this charger")
        try:
            updated = await with_timeout(
                self._store.update_charger(charger_id, parsed_status, parsed_meter),
                self._timeouts.status_update_ms,
                "status update",
            )
        except OperationTimeoutError:
            # The abandoned write may still land.
            self._cache.invalidate(charger_id)
            raise
        self._cache.invalidate(charger_id)
        return updated

    async def initialize_charger(self, charger_id: str, partner_id: str) -> tuple[ChargerSnapshot, bool]:
        """
        Register charger_id for partner_id. Returns (snapshot, created).
        Idempotent for the owner; ChargerConflictError when another partner owns the id.
        New chargers start AVAILABLE with a zero meter.
        """
        if not isinstance(charger_id, str) or not charger_id.strip():
            raise InvalidInputError("charger_id must be a non-empty string")
        existing = await self._find_or_none(charger_id)
        if existing is None:
            try:
                created = await with_timeout(
                    self._store.create_charger(charger_id, partner_id),
                    self._timeouts.status_update_ms,
                    "charger create",
                )
                LOG.info("Charger %s initialized for partner %s", charger_id, partner_id)
                return created, True
            except ChargerConflictError:
                # Lost a creation race; fall through to the ownership comparison.
                existing = await self._find_or_none(charger_id)
                if existing is None:
                    raise
        if existing.partner_id != partner_id:
            LOG.warning(
                "Charger %s exists but belongs to partner %s, not %s",
                charger_id,
                existing.partner_id,
                partner_id,
            )
            raise ChargerConflictError(charger_id)
        LOG.info("Charger %s already exists and belongs to partner %s", charger_id, partner_id)
        return existing, False

    async def list_partner_chargers(
        self,
        partner_id: str,
        caller_partner_id: str,
        page: int = 1,
        limit: int = 50,
    ) -> list[ChargerSnapshot]:
        """One page of the caller's own chargers, read straight from the store."""
        if partner_id != caller_partner_id:
            raise ForbiddenError("You can only access your own chargers")
        if page < 1:
            raise InvalidInputError("page must be >= 1")
        safe_limit = max(1, min(limit, config.PARTNER_PAGE_MAX_LIMIT))
        offset = (page - 1) * safe_limit
        return await with_timeout(
            self._store.list_chargers_by_partner(partner_id, safe_limit, offset),
            self._timeouts.status_read_ms,
            "charger list",
        )

    async def _read_through(
        self,
        charger_id: str,
        timeout_ms: int,
        operation_name: str,
        retry_after_s: int = DEFAULT_RETRY_AFTER_S,
    ) -> StatusLookup:
        cached = self._cache.get(charger_id)
        if cached is not None:
            return StatusLookup(snapshot=cached, cache_hit=True)
        snapshot = await with_timeout(
            self._store.find_charger(charger_id),
            timeout_ms,
            operation_name,
            retry_after_s=retry_after_s,
        )
        self._cache.set(charger_id, snapshot)
        return StatusLookup(snapshot=snapshot, cache_hit=False)

    async def _find_or_none(self, charger_id: str) -> Optional[ChargerSnapshot]:
        try:
            return await with_timeout(
                self._store.find_charger(charger_id),
                self._timeouts.ownership_check_ms,
                "charger lookup",
            )
        except ChargerNotFoundError:
            return None


class Authenticator:
    """Resolves X-API-Key values to partners, consulting the partner cache first."""

    def __init__(
        self,
        store: ChargerStore,
        partner_cache: PartnerIdentityCache,
        lookup_timeout_ms: int = 3000,
    ) -> None:
        self._store = store
        self._cache = partner_cache
        self._lookup_timeout_ms = lookup_timeout_ms

    async def authenticate(self, api_key: Optional[str]) -> PartnerIdentity:
        if not api_key:
            raise UnauthorizedError("API key is required")
        cached = self._cache.get(api_key)
        if cached is not None:
            return cached
        try:
            partner = await with_timeout(
                self._store.find_partner_by_api_key(api_key),
                self._lookup_timeout_ms,
                "API key lookup",
            )
        except PartnerNotFoundError as e:
            LOG.warning("Authentication failed: unknown API key")
            raise UnauthorizedError("Invalid API key") from e
        self._cache.set(api_key, partner)
        return partner
