"""Pydantic schemas for partner API."""
from pydantic import BaseModel, Field


class PartnerCreate(BaseModel):
    """Payload for creating a partner."""

    name: str = Field(min_length=1, max_length=255)


class PartnerResponse(BaseModel):
    """Partner in API responses (API key never included)."""

    id: str
    name: str


class PartnerCreated(PartnerResponse):
    """Response for partner creation: the only time the API key is returned."""

    api_key: str
