from typing import Any, Mapping, Optional


class ServiceError(Exception):
    """Base class for errors surfaced to API callers.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, validation info)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Service error"

    def __init__(self, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(ServiceError):
    """Raised when input data is invalid or a required field is missing. http_status is 400."""

    http_status = 400
    default_message = "Invalid input"


class NotFoundError(ServiceError):
    """Raised when a referenced client, subscription or follow-up does not exist. http_status is 404."""

    http_status = 404
    default_message = "Not found"


class InvalidStateTransitionError(ServiceError):
    """Raised when a subscription action is not legal from its current status.

    Carries the current status and the attempted action in ``details``.
    http_status is 400.
    """

    http_status = 400
    default_message = "Invalid state transition"

    def __init__(self, message: Optional[str] = None, current_status: Optional[str] = None, action: Optional[str] = None):
        details = {}
        if current_status is not None:
            details["current_status"] = current_status
        if action is not None:
            details["action"] = action
        super().__init__(message, details=details or None, code="INVALID_STATE_TRANSITION")


class ConflictError(ServiceError):
    """Raised when a write keeps losing to concurrent writers. http_status is 409."""

    http_status = 409
    default_message = "Conflict"


class UnauthorizedError(ServiceError):
    """Raised when the caller identity is missing, invalid, or lacks the required role.

    http_status is 401.
    """

    http_status = 401
    default_message = "Unauthorized"
