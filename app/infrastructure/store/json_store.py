from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any

from app.application.exceptions import PersistenceError
from app.application.ports.booking_repository import BookingRepositoryPort
from app.domain.entities.booking import Booking


class JsonBookingRepository(BookingRepositoryPort):
    """Stores the whole booking collection as one pretty-printed JSON array."""

    def __init__(self, file_path: str | Path = "./data/bookings.json") -> None:
        self._file_path = Path(file_path)
        self._write_lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    @property
    def file_path(self) -> Path:
        return self._file_path

    def ensure_file(self) -> None:
        """Create the data directory and an empty collection if missing."""
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            if not self._file_path.exists():
                self._file_path.write_text("[]\n", encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Cannot initialize {self._file_path}: {e}") from e

    def load_all(self) -> list[Booking]:
        self.ensure_file()
        try:
            raw = self._file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            self._logger.warning("Bookings file is not UTF-8, treating as empty", extra={"path": str(self._file_path)})
            return []
        except OSError as e:
            raise PersistenceError(f"Cannot read {self._file_path}: {e}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            self._logger.warning("Bookings file is corrupted, treating as empty", extra={"path": str(self._file_path)})
            return []

        if not isinstance(data, list):
            self._logger.warning("Bookings file is not a list, treating as empty", extra={"path": str(self._file_path)})
            return []

        bookings: list[Booking] = []
        for item in data:
            booking = self._deserialize_booking(item)
            if booking is None:
                self._logger.warning("Skipping malformed booking entry", extra={"path": str(self._file_path)})
                continue
            bookings.append(booking)
        return bookings

    def save_all(self, bookings: list[Booking]) -> None:
        """Write the collection to a unique temp file, then atomically rename it into place."""
        payload = json.dumps([self._serialize_booking(b) for b in bookings], indent=2, ensure_ascii=False) + "\n"

        with self._write_lock:
            temp_path: Path | None = None
            try:
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                with tempfile.NamedTemporaryFile(
                    "w",
                    encoding="utf-8",
                    dir=self._file_path.parent,
                    prefix=f".{self._file_path.name}.",
                    suffix=".tmp",
                    delete=False,
                ) as f:
                    temp_path = Path(f.name)
                    f.write(payload)
                os.replace(temp_path, self._file_path)
            except OSError as e:
                if temp_path is not None:
                    temp_path.unlink(missing_ok=True)
                raise PersistenceError(f"Cannot write {self._file_path}: {e}") from e

    def _serialize_booking(self, booking: Booking) -> dict[str, Any]:
        return {
            "id": booking.id,
            "date": booking.date,
            "time": booking.time,
            "duration": booking.duration,
            "startMinutes": booking.start_minutes,
            "endMinutes": booking.end_minutes,
            "createdAt": booking.created_at,
        }

    def _deserialize_booking(self, data: Any) -> Booking | None:
        if not isinstance(data, dict):
            return None
        try:
            return Booking(
                id=str(data["id"]),
                date=str(data["date"]),
                time=str(data["time"]),
                duration=_strict_int(data["duration"]),
                start_minutes=_strict_int(data["startMinutes"]),
                end_minutes=_strict_int(data["endMinutes"]),
                created_at=str(data.get("createdAt") or ""),
            )
        except (KeyError, TypeError, ValueError):
            return None


def _strict_int(value: Any) -> int:
    """Accept ints and integral floats only; anything else marks the entry malformed."""
    if isinstance(value, bool):
        raise TypeError("boolean is not a minute count")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise ValueError(f"not an integral number: {value!r}")
