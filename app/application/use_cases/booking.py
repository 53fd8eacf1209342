from __future__ import annotations

import logging
from typing import Any

from app.application.exceptions import NotFoundError
from app.application.use_cases.booking_store import BookingStore
from app.application.utils.slot_validator import validate
from app.domain.entities.booking import Booking


class BookingUseCase:
    def __init__(self, store: BookingStore) -> None:
        self._store = store
        self._logger = logging.getLogger(__name__)

    def list_bookings(self) -> list[Booking]:
        return self._store.list()

    def create_booking(self, date: Any, time: Any, duration: Any) -> Booking:
        """Validate the raw fields and book the slot. Raises ValidationError or ConflictError."""
        slot = validate(date, time, duration)
        return self._store.create(slot)

    def delete_booking(self, booking_id: str) -> None:
        if not self._store.delete(booking_id):
            self._logger.info("Booking not found", extra={"booking_id": booking_id})
            raise NotFoundError(booking_id)
