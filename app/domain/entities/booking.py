from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Slot:
    date: str  # YYYY-MM-DD
    time: str  # HH:MM
    duration: int
    start_minutes: int
    end_minutes: int

    def overlaps(self, start_minutes: int, end_minutes: int) -> bool:
        """Half-open interval test: touching endpoints do not overlap."""
        return self.start_minutes < end_minutes and self.end_minutes > start_minutes


@dataclass(frozen=True)
class Booking:
    id: str
    date: str
    time: str
    duration: int
    start_minutes: int
    end_minutes: int
    created_at: str

    @classmethod
    def from_slot(cls, slot: Slot, booking_id: str, created_at: str) -> "Booking":
        return cls(
            id=booking_id,
            date=slot.date,
            time=slot.time,
            duration=slot.duration,
            start_minutes=slot.start_minutes,
            end_minutes=slot.end_minutes,
            created_at=created_at,
        )

    def sort_key(self) -> tuple[str, int]:
        return (self.date, self.start_minutes)
