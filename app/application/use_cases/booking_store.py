from __future__ import annotations

import logging
import threading
import uuid
from contextlib import nullcontext
from datetime import datetime, timezone
from typing import Callable, ContextManager

from app.application.exceptions import ConflictError
from app.application.ports.booking_repository import BookingRepositoryPort
from app.domain.entities.booking import Booking, Slot


def new_booking_id() -> str:
    return str(uuid.uuid4())


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class BookingStore:
    """
    Owns the durable booking collection.

    Every operation is a fresh load / compute / save cycle against the
    repository; nothing is cached between calls. Without a lock, concurrent
    creates can both pass the conflict check and the later save wins.
    Passing ``lock`` serializes create and delete as one critical section.
    """

    def __init__(
        self,
        repository: BookingRepositoryPort,
        id_factory: Callable[[], str] = new_booking_id,
        clock: Callable[[], str] = utc_timestamp,
        lock: threading.Lock | None = None,
    ) -> None:
        self._repository = repository
        self._id_factory = id_factory
        self._clock = clock
        self._lock = lock
        self._logger = logging.getLogger(__name__)

    def _critical_section(self) -> ContextManager:
        return self._lock if self._lock is not None else nullcontext()

    def list(self) -> list[Booking]:
        """All bookings sorted by date, then start minute. Storage order is untouched."""
        return sorted(self._repository.load_all(), key=Booking.sort_key)

    def find_conflict(self, bookings: list[Booking], slot: Slot) -> Booking | None:
        for existing in bookings:
            if existing.date == slot.date and slot.overlaps(existing.start_minutes, existing.end_minutes):
                return existing
        return None

    def create(self, slot: Slot) -> Booking:
        with self._critical_section():
            bookings = self._repository.load_all()
            conflict = self.find_conflict(bookings, slot)
            if conflict is not None:
                self._logger.info(
                    "Booking conflict",
                    extra={"date": slot.date, "time": slot.time, "conflict_id": conflict.id},
                )
                raise ConflictError(conflict)

            booking = Booking.from_slot(slot, booking_id=self._id_factory(), created_at=self._clock())
            bookings.append(booking)
            self._repository.save_all(bookings)

        self._logger.info(
            "Booking created",
            extra={
                "booking_id": booking.id,
                "date": booking.date,
                "time": booking.time,
                "duration": booking.duration,
            },
        )
        return booking

    def delete(self, booking_id: str) -> bool:
        """Remove every booking with this id. Returns False when nothing matched."""
        with self._critical_section():
            bookings = self._repository.load_all()
            remaining = [booking for booking in bookings if booking.id != booking_id]
            if len(remaining) == len(bookings):
                return False
            self._repository.save_all(remaining)

        self._logger.info("Booking deleted", extra={"booking_id": booking_id})
        return True
