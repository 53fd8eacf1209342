from __future__ import annotations

from app.domain.entities.booking import Booking


class BookingError(Exception):
    """Base class for booking related errors."""
    pass


class ValidationError(BookingError):
    """Raised when a proposed slot is malformed or out of range."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConflictError(BookingError):
    """Raised when a valid slot overlaps an existing booking on the same date."""

    def __init__(self, conflict: Booking) -> None:
        super().__init__("Requested slot overlaps with an existing booking.")
        self.conflict = conflict


class NotFoundError(BookingError):
    """Raised when a deletion target does not exist."""

    def __init__(self, booking_id: str) -> None:
        super().__init__("Booking not found.")
        self.booking_id = booking_id


class PersistenceError(BookingError):
    """Raised when the booking collection cannot be read or written."""
    pass
