"""Screening model: a movie shown in a hall at a given time."""

from datetime import datetime, time, timedelta
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, ForeignKeyConstraint, String, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cinebook.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from cinebook.models.booking import Booking
    from cinebook.models.movie import Movie


class Screening(Base, TimestampMixin):
    """
    Scheduled showing of a movie.

    Occupies its hall over the half-open interval
    ``[start_time, start_time + duration)``.
    """

    __tablename__ = "screenings"
    __table_args__ = (
        ForeignKeyConstraint(
            ["theater_id", "hall_id"],
            ["halls.theater_id", "halls.hall_id"],
            ondelete="CASCADE",
            name="fk_screenings_hall",
        ),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    # Foreign keys
    movie_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("movies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    theater_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("theaters.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    hall_id: Mapped[str] = mapped_column(String(50), nullable=False)

    # Schedule
    start_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )
    duration: Mapped[time] = mapped_column(Time, nullable=False)

    # Relationships
    movie: Mapped["Movie"] = relationship(back_populates="screenings")
    bookings: Mapped[list["Booking"]] = relationship(
        back_populates="screening",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def end_time(self) -> datetime:
        d = self.duration
        return self.start_time + timedelta(hours=d.hour, minutes=d.minute, seconds=d.second)

    def __repr__(self) -> str:
        return (
            f"<Screening(id={self.id!r}, "
            f"hall={self.theater_id!r}/{self.hall_id!r}, "
            f"start_time={self.start_time})>"
        )
