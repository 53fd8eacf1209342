from __future__ import annotations

from app.application.ports.booking_repository import BookingRepositoryPort
from app.domain.entities.booking import Booking


class MemoryBookingRepository(BookingRepositoryPort):
    def __init__(self, bookings: list[Booking] | None = None) -> None:
        self._bookings: list[Booking] = list(bookings or [])
        self.save_count = 0

    def load_all(self) -> list[Booking]:
        return list(self._bookings)

    def save_all(self, bookings: list[Booking]) -> None:
        self._bookings = list(bookings)
        self.save_count += 1
