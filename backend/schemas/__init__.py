# Schemas package
from .chargers import ChargerInitialize, ChargerStatusResponse, RetryLaterResponse, StatusUpdate
from .health import CacheStatsResponse, HealthResponse
from .partners import PartnerCreate, PartnerCreated, PartnerResponse

__all__ = [
    "CacheStatsResponse",
    "ChargerInitialize",
    "ChargerStatusResponse",
    "HealthResponse",
    "PartnerCreate",
    "PartnerCreated",
    "PartnerResponse",
    "RetryLaterResponse",
    "StatusUpdate",
]
