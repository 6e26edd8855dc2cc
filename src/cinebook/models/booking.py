"""Booking model: a user's claim on seats for one screening."""

import enum
from typing import TYPE_CHECKING

from sqlalchemy import Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cinebook.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from cinebook.models.screening import Screening
    from cinebook.models.seat_reservation import SeatReservation


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    USED = "used"
    CANCELED = "canceled"


class Booking(Base, TimestampMixin):
    """
    Booking model.

    ``seats_number`` always equals the number of seat reservations the
    booking owns.
    """

    __tablename__ = "bookings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    screening_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("screenings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    seats_number: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[BookingStatus] = mapped_column(
        Enum(
            BookingStatus,
            name="booking_status",
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
        default=BookingStatus.PENDING,
        index=True,
    )

    # Relationships
    screening: Mapped["Screening"] = relationship(back_populates="bookings")
    seats: Mapped[list["SeatReservation"]] = relationship(
        back_populates="booking",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id!r}, screening_id={self.screening_id!r}, "
            f"seats_number={self.seats_number}, status={self.status.value!r})>"
        )
