"""Pydantic schemas for bookings and seat reservations."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cinebook.models.booking import BookingStatus


def _stringify_seat_ids(value: Any) -> Any:
    # Layouts may use numeric seat ids; requests are matched on their string form
    if isinstance(value, list):
        return [str(v) if isinstance(v, (int, float)) and not isinstance(v, bool) else v for v in value]
    return value


class BookingCreate(BaseModel):
    """Request body for creating a booking. The owner comes from the caller identity."""

    screening_id: str
    seats_number: int = Field(ge=0)
    seat_ids: list[str] = Field(default_factory=list)

    @field_validator("seat_ids", mode="before")
    @classmethod
    def stringify_seat_ids(cls, value: Any) -> Any:
        return _stringify_seat_ids(value)


class BookingUpdate(BaseModel):
    """Partial update: a status change and/or a new set of seats."""

    model_config = ConfigDict(extra="forbid")

    status: BookingStatus | None = None
    seat_ids: list[str] | None = None

    @field_validator("seat_ids", mode="before")
    @classmethod
    def stringify_seat_ids(cls, value: Any) -> Any:
        return _stringify_seat_ids(value)


class BookingResponse(BaseModel):
    """Booking response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    screening_id: str
    seats_number: int
    status: BookingStatus


class SeatReservationResponse(BaseModel):
    """Seat reservation response schema."""

    model_config = ConfigDict(from_attributes=True)

    screening_id: str
    seat_id: str
    booking_id: str


class BookingCreatedResponse(BaseModel):
    """Response for a newly created booking with its reserved seats."""

    booking: BookingResponse
    seats: list[SeatReservationResponse]
