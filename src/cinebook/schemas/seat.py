"""Pydantic schemas for seat maps."""

from pydantic import BaseModel


class SeatStatus(BaseModel):
    """One seat of a screening's hall."""

    seat_id: str
    row: int
    column: int
    reserved: bool


class SeatMapResponse(BaseModel):
    """All seats of a screening with their reservation state."""

    screening_id: str
    seats: list[SeatStatus]
    total_seats: int
    available_seats: int
