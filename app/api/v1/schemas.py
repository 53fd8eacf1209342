from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.domain.entities.booking import Booking


class CreateBookingRequestSchema(BaseModel):
    """Raw booking fields; type checks happen in the slot validator."""

    model_config = ConfigDict(extra="ignore")

    date: Any = None
    time: Any = None
    duration: Any = None


class BookingSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    date: str
    time: str
    duration: int
    start_minutes: int = Field(alias="startMinutes")
    end_minutes: int = Field(alias="endMinutes")
    created_at: str = Field(alias="createdAt")

    @classmethod
    def from_entity(cls, booking: Booking) -> "BookingSchema":
        return cls(
            id=booking.id,
            date=booking.date,
            time=booking.time,
            duration=booking.duration,
            start_minutes=booking.start_minutes,
            end_minutes=booking.end_minutes,
            created_at=booking.created_at,
        )


class BookingListResponseSchema(BaseModel):
    bookings: list[BookingSchema]


class BookingResponseSchema(BaseModel):
    booking: BookingSchema


class ErrorResponseSchema(BaseModel):
    error: str
    conflict: BookingSchema | None = None
