"""
App package - Application configuration and core utilities.
Contains settings, exceptions, and calendar helpers.
"""

from app.config import settings
from app.exceptions import (
    ServiceError,
    ServiceValidationError,
    NotFoundError,
    InvalidStateTransitionError,
    ConflictError,
    UnauthorizedError,
)

__all__ = [
    "settings",
    "ServiceError",
    "ServiceValidationError",
    "NotFoundError",
    "InvalidStateTransitionError",
    "ConflictError",
    "UnauthorizedError",
]
