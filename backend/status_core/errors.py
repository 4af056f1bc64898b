"""Error taxonomy for the charger status service.

Store and cache failures are reclassified into these before they reach the
API layer, which maps each class to one HTTP status.
"""
from typing import Optional


class ChargerServiceError(Exception):
    """Base class for errors surfaced to the API layer."""


class NotFoundError(ChargerServiceError):
    """Charger or partner absent in the backing store."""


class ChargerNotFoundError(NotFoundError):
    def __init__(self, charger_id: str) -> None:
        super().__init__("Charger not found")
        self.charger_id = charger_id


class PartnerNotFoundError(NotFoundError):
    def __init__(self, partner_id: Optional[str] = None) -> None:
        super().__init__("Partner not found")
        self.partner_id = partner_id


class OperationTimeoutError(ChargerServiceError):
    """A backing-store call exceeded its deadline. Retryable by the client."""

    def __init__(self, operation: str, timeout_ms: int, retry_after_s: int = 2) -> None:
        super().__init__(f"{operation} timed out after {timeout_ms}ms")
        self.operation = operation
        self.timeout_ms = timeout_ms
        self.retry_after_s = retry_after_s


class ForbiddenError(ChargerServiceError):
    """Caller does not own the resource. Never retried."""


class InvalidInputError(ChargerServiceError):
    """Malformed input. Never retried."""


class UnauthorizedError(ChargerServiceError):
    """Missing or unknown API key."""


class ChargerConflictError(ChargerServiceError):
    """Charger id is already registered to a different partner."""

    def __init__(self, charger_id: str) -> None:
        super().__init__("Charger ID already exists and belongs to a different partner")
        self.charger_id = charger_id


class InternalError(ChargerServiceError):
    """Anything else. Details are logged, never returned to the caller."""
