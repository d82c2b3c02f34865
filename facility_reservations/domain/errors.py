"""Domain errors raised by the reservation services and repositories."""

from __future__ import annotations


class ReservationError(Exception):
    """Base class for every error the domain surfaces to callers."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(ReservationError):
    """A referenced facility or reservation does not exist."""


class ValidationError(ReservationError):
    """Request is well-formed but outside the facility's rules."""


class ConflictError(ReservationError):
    """Requested interval overlaps an existing reservation."""


class DuplicateError(ReservationError):
    """An identical reservation (same facility, date, start and end) exists."""


class PermissionDeniedError(ReservationError):
    """Requester is neither the owner nor an administrator."""


class StorageError(ReservationError):
    """Underlying store failure; not retried."""


class ConstraintViolation(StorageError):
    """Insert rejected by a uniqueness constraint of the store."""


class AuthenticationError(ReservationError):
    """No requester identity was supplied with the call."""
