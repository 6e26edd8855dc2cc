"""Pydantic schemas for API requests and responses."""

from cinebook.schemas.booking import (
    BookingCreate,
    BookingCreatedResponse,
    BookingResponse,
    BookingUpdate,
    SeatReservationResponse,
)
from cinebook.schemas.screening import ScreeningCreate, ScreeningResponse, ScreeningUpdate
from cinebook.schemas.seat import SeatMapResponse, SeatStatus

__all__ = [
    "BookingCreate",
    "BookingCreatedResponse",
    "BookingResponse",
    "BookingUpdate",
    "SeatReservationResponse",
    "ScreeningCreate",
    "ScreeningResponse",
    "ScreeningUpdate",
    "SeatMapResponse",
    "SeatStatus",
]
