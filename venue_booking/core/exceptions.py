# venue_booking/core/exceptions.py
"""
Domain-specific exceptions for the venue booking platform.

Every domain error carries an ``ErrorKind`` so callers can switch on the kind
instead of the exception class. Messages are written for end users; backend
error text never goes into ``message`` or ``details``.
"""

from typing import Any, Dict, Optional

from .enums import ErrorKind


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    kind: ErrorKind = ErrorKind.INVALID_ARGUMENT

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.kind.value
        self.details = details or {}
        super().__init__(self.message)

    def to_payload(self) -> Dict[str, Any]:
        """Serializable error body for API responses."""
        return {
            "code": self.code,
            "kind": self.kind.value,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(DomainException):
    """Raised when input is malformed (bad time range, non-positive party size)."""

    kind = ErrorKind.INVALID_ARGUMENT


class NotFoundException(DomainException):
    """Raised when a requested venue, customer or booking does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str, resource_id: Optional[str] = None) -> None:
        details: Dict[str, Any] = {"resource": resource}
        if resource_id is not None:
            details["id"] = resource_id
        super().__init__(message=f"{resource} not found", details=details)


class CapacityExceededException(DomainException):
    """Raised when a party does not fit the venue."""

    kind = ErrorKind.CAPACITY_EXCEEDED

    def __init__(self, party_size: int, capacity: int) -> None:
        super().__init__(
            message=f"Party size ({party_size}) exceeds venue capacity ({capacity})",
            details={"party_size": party_size, "capacity": capacity},
        )


class SlotConflictException(DomainException):
    """Raised when a booking overlaps an occupying booking at the same venue."""

    kind = ErrorKind.SLOT_CONFLICT

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message or "The requested time slot conflicts with an existing booking",
            details=details or {},
        )


class InvalidStateException(DomainException):
    """Raised when a lifecycle transition is not allowed from the current status."""

    kind = ErrorKind.INVALID_STATE

    def __init__(self, current_status: str, action: str) -> None:
        super().__init__(
            message=f"Cannot {action.replace('_', ' ')} a booking in {current_status} status",
            details={"current_status": current_status, "action": action},
        )


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    Used when data access fails (connection issues, query failures, constraint
    violations). Not a domain error: it propagates unchanged and is never retried
    by the services.
    """
