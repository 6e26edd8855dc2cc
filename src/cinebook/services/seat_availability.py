"""Seat availability: which requested seats are already reserved."""

import logging
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cinebook.exceptions import SeatConflictError
from cinebook.models.seat_reservation import SeatReservation
from cinebook.services.seat_layout import SeatLayoutResolver, iter_seats

logger = logging.getLogger(__name__)


class SeatAvailabilityChecker:
    """
    Advisory check against existing seat reservations.

    Runs on the caller's session so it sees the same transaction as the
    insert that follows it. The primary key on seat_reservations remains
    the final word under concurrency.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def find_reserved_seats(
        self, screening_id: str, seat_ids: Sequence[str]
    ) -> list[str]:
        """Return the subset of ``seat_ids`` already reserved, in request order."""
        if not seat_ids:
            return []

        stmt = select(SeatReservation.seat_id).where(
            SeatReservation.screening_id == screening_id,
            SeatReservation.seat_id.in_(list(seat_ids)),
        )
        result = await self.db.execute(stmt)
        reserved = set(result.scalars().all())
        return [seat_id for seat_id in seat_ids if seat_id in reserved]

    async def check_seats_available(self, screening_id: str, seat_ids: Sequence[str]) -> None:
        """
        Fail if any requested seat is already reserved for the screening.

        Raises:
            SeatConflictError: Listing every requested seat that is taken
        """
        taken = await self.find_reserved_seats(screening_id, seat_ids)
        if taken:
            logger.warning(f"Seats already booked for screening {screening_id}: {taken}")
            raise SeatConflictError(screening_id, taken)

    async def list_seat_map(self, screening_id: str) -> list[dict]:
        """
        Describe every seat of the screening's hall with its reservation state.

        Returns:
            One dict per seat: ``seat_id``, ``row``, ``column``, ``reserved``
        """
        _, hall = await SeatLayoutResolver(self.db).get_screening_hall(screening_id)

        stmt = select(SeatReservation.seat_id).where(
            SeatReservation.screening_id == screening_id
        )
        result = await self.db.execute(stmt)
        reserved = set(result.scalars().all())

        return [
            {
                "seat_id": seat_id,
                "row": row,
                "column": column,
                "reserved": seat_id in reserved,
            }
            for row, column, seat_id in iter_seats(hall)
        ]
