"""Pydantic schemas for charger API."""
from datetime import datetime

from pydantic import BaseModel, Field

from status_core.snapshots import ChargerSnapshot, ChargerStatus


class ChargerInitialize(BaseModel):
    """Payload for registering a charger for the calling partner."""

    charger_id: str = Field(min_length=1, max_length=255)


class StatusUpdate(BaseModel):
    """Payload for a status/meter update."""

    status: ChargerStatus
    meter_value: float = Field(ge=0, allow_inf_nan=False, strict=True)


class ChargerStatusResponse(BaseModel):
    """Charger status as returned by the API."""

    id: str
    partner_id: str
    partner_name: str | None = None
    status: ChargerStatus
    meter_value: float
    last_update: datetime

    @classmethod
    def from_snapshot(cls, snapshot: ChargerSnapshot) -> "ChargerStatusResponse":
        return cls(
            id=snapshot.charger_id,
            partner_id=snapshot.partner_id,
            partner_name=snapshot.partner_name,
            status=snapshot.status,
            meter_value=snapshot.meter_value,
            last_update=snapshot.last_update,
        )


class RetryLaterResponse(BaseModel):
    """Returned with 202 when a cache-miss read hit its deadline."""

    message: str = "Operation in progress, please retry"
    retry_after: int = 1
    cached: bool = False
