"""Pydantic schemas for screenings."""

from datetime import datetime, time

from pydantic import BaseModel, ConfigDict, field_serializer


class ScreeningCreate(BaseModel):
    """Request body for scheduling a screening."""

    movie_id: str
    theater_id: str
    hall_id: str
    start_time: datetime
    # "HH:mm:ss"; validated by the scheduler so a bad value is a 400
    duration: str


class ScreeningUpdate(BaseModel):
    """Partial screening update."""

    model_config = ConfigDict(extra="forbid")

    movie_id: str | None = None
    theater_id: str | None = None
    hall_id: str | None = None
    start_time: datetime | None = None
    duration: str | None = None


class ScreeningResponse(BaseModel):
    """Screening response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    movie_id: str
    theater_id: str
    hall_id: str
    start_time: datetime
    duration: time
    end_time: datetime

    @field_serializer("duration")
    def serialize_duration(self, duration: time) -> str:
        return duration.strftime("%H:%M:%S")
