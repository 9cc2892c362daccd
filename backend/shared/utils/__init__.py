"""
Utilities module: HTTP exceptions, health probes, schemas.
"""

from shared.utils.exceptions import (
    NotFoundError,
    ValidationError,
    InvalidTransitionError,
    ConflictError,
    AllocationConflictError,
)

__all__ = [
    # exceptions
    "NotFoundError",
    "ValidationError",
    "InvalidTransitionError",
    "ConflictError",
    "AllocationConflictError",
]
