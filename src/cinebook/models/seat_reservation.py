"""Seat reservation model: binds one seat of one screening to a booking."""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, PrimaryKeyConstraint, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cinebook.models.base import Base

if TYPE_CHECKING:
    from cinebook.models.booking import Booking

# Width of the seat_id column; layouts must not hold longer identifiers
MAX_SEAT_ID_LENGTH = 20


class SeatReservation(Base):
    """
    Per-seat reservation row.

    The composite primary key on (screening_id, seat_id) is the
    authoritative guarantee that a seat is sold at most once per screening.
    """

    __tablename__ = "seat_reservations"
    __table_args__ = (
        PrimaryKeyConstraint("screening_id", "seat_id", name="pk_seat_reservations"),
    )

    screening_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("screenings.id", ondelete="CASCADE"),
        nullable=False,
    )
    seat_id: Mapped[str] = mapped_column(String(MAX_SEAT_ID_LENGTH), nullable=False)
    booking_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    booking: Mapped["Booking"] = relationship(back_populates="seats")

    def __repr__(self) -> str:
        return (
            f"<SeatReservation(screening_id={self.screening_id!r}, "
            f"seat_id={self.seat_id!r}, booking_id={self.booking_id!r})>"
        )
