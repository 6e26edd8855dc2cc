"""Hall model holding the seat layout of a screening room."""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cinebook.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from cinebook.models.theater import Theater

# A row of the grid; None marks a position without a seat (aisle, gap)
SeatRow = list[str | None]


class Hall(Base, TimestampMixin):
    """
    Screening room inside a theater.

    ``seats_layout`` is a rectangular grid of seat identifiers. Cells that
    hold ``None`` are not addressable seats.
    """

    __tablename__ = "halls"

    theater_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("theaters.id", ondelete="CASCADE"),
        primary_key=True,
    )
    hall_id: Mapped[str] = mapped_column(String(50), primary_key=True)
    seats_layout: Mapped[list[SeatRow]] = mapped_column(JSONB, nullable=False)

    # Relationships
    theater: Mapped["Theater"] = relationship(back_populates="halls")

    def __repr__(self) -> str:
        return f"<Hall(theater_id={self.theater_id!r}, hall_id={self.hall_id!r})>"
