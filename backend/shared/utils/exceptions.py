"""
HTTP errors raised by services and dependencies.

Each error logs itself when raised, with any keyword context given:

    raise NotFoundError("Booking", booking_id, location_id=location_id)
    raise AllocationConflictError(location_id=3, party_size=8)
"""

from typing import Any

from fastapi import HTTPException, status

from shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    """Base class: a status code, a client-facing detail, and log context."""

    status_code_default: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    log_level: str = "warning"

    def __init__(self, detail: str, headers: dict[str, str] | None = None, **log_context: Any):
        getattr(logger, self.log_level)(detail, status_code=self.status_code_default, **log_context)
        super().__init__(status_code=self.status_code_default, detail=detail, headers=headers)


class UnauthorizedError(AppException):
    """Missing, malformed or rejected bearer token (401)."""

    status_code_default = status.HTTP_401_UNAUTHORIZED

    def __init__(self, detail: str = "Not authenticated", **log_context: Any):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"}, **log_context)


class NotFoundError(AppException):
    """Entity missing, or outside the caller's tenant or location (404)."""

    status_code_default = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id: int | str | None = None, **log_context: Any):
        detail = f"{entity} not found" if entity_id is None else f"{entity} with ID {entity_id} not found"
        super().__init__(detail, entity=entity, entity_id=entity_id, **log_context)


class LocationNotFoundError(NotFoundError):
    def __init__(self, location_id: int | None = None, **log_context: Any):
        super().__init__("Location", location_id, **log_context)


class ValidationError(AppException):
    """Request rejected by a business rule (400)."""

    status_code_default = status.HTTP_400_BAD_REQUEST


class InvalidTransitionError(ValidationError):
    """Status change not allowed from the current status (400)."""

    def __init__(self, entity: str, from_status: str, to_status: str, **log_context: Any):
        super().__init__(
            f"Invalid transition from '{from_status}' to '{to_status}' for {entity}",
            entity=entity,
            from_status=from_status,
            to_status=to_status,
            **log_context,
        )


class ConflictError(AppException):
    """Request conflicts with current state (409)."""

    status_code_default = status.HTTP_409_CONFLICT


class AllocationConflictError(ConflictError):
    """No combination of free tables seats the party for the requested window."""

    def __init__(self, **log_context: Any):
        super().__init__("No tables available for the requested time slot and party size", **log_context)
