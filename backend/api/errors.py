"""Translate status-core errors into HTTP responses."""
import logging

from fastapi import HTTPException, status

from status_core.errors import (
    ChargerConflictError,
    ChargerServiceError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    OperationTimeoutError,
    UnauthorizedError,
)

LOG = logging.getLogger(__name__)

_CLIENT_ERRORS: tuple[tuple[type[ChargerServiceError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (ChargerConflictError, status.HTTP_409_CONFLICT),
)


def to_http_exception(exc: ChargerServiceError) -> HTTPException:
    """Map a service error to an HTTPException. Internal details never reach the caller."""
    if isinstance(exc, OperationTimeoutError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service temporarily unavailable, please try again",
            headers={"Retry-After": str(exc.retry_after_s)},
        )
    for error_cls, status_code in _CLIENT_ERRORS:
        if isinstance(exc, error_cls):
            return HTTPException(status_code=status_code, detail=str(exc))
    LOG.error("Internal error surfaced to API: %r", exc)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")
