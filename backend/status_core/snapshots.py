"""Immutable read projections shared by the store, the caches and the API."""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class ChargerStatus(str, Enum):
    """Charger status values accepted from partners."""

    AVAILABLE = "AVAILABLE"
    BLOCKED = "BLOCKED"
    CHARGING = "CHARGING"
    INOPERATIVE = "INOPERATIVE"
    REMOVED = "REMOVED"
    RESERVED = "RESERVED"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class ChargerSnapshot:
    """Last known state of one charger. partner_id never changes after creation."""

    charger_id: str
    partner_id: str
    status: ChargerStatus
    meter_value: float
    last_update: datetime
    partner_name: Optional[str] = None


@dataclass(frozen=True)
class PartnerIdentity:
    """Partner resolved from an API key."""

    partner_id: str
    name: str
