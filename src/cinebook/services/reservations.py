"""Reservation transaction coordinator.

Every mutation runs inside ``unit_of_work`` so a booking and its seat
reservations are committed together or not at all. Seat uniqueness is
checked up front (advisory) and enforced by the primary key on
seat_reservations; a violation of that key at flush/commit time is reported
as a seat conflict, never as a generic failure.
"""

import logging
import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cinebook.exceptions import (
    BadRequestError,
    CinebookError,
    ConflictError,
    InternalError,
    NotAuthorizedError,
    NotFoundError,
    SeatConflictError,
)
from cinebook.models.booking import Booking, BookingStatus
from cinebook.models.seat_reservation import MAX_SEAT_ID_LENGTH, SeatReservation
from cinebook.services.booking_lifecycle import BookingLifecycle
from cinebook.services.seat_availability import SeatAvailabilityChecker
from cinebook.services.seat_layout import SeatLayoutResolver
from cinebook.services.unit_of_work import unit_of_work

logger = logging.getLogger(__name__)

SEAT_RESERVATION_PK = "pk_seat_reservations"


@dataclass
class BookingWithSeats:
    booking: Booking
    seats: list[SeatReservation] = field(default_factory=list)


def validate_seat_request(seat_ids: Sequence[str], seats_number: int) -> None:
    """
    Check the shape of a seat request before touching storage.

    Raises:
        BadRequestError: If no seats are given, the count does not match
            ``seats_number``, a seat is listed twice, or a seat id is too
            long to be stored
    """
    if not seat_ids:
        raise BadRequestError("Seat ID(s) are required")

    if len(seat_ids) != seats_number:
        raise BadRequestError(
            f"seats_number ({seats_number}) does not match the number of seat IDs ({len(seat_ids)})",
            seats_number=seats_number,
            seat_ids=list(seat_ids),
        )

    seen: set[str] = set()
    for seat_id in seat_ids:
        if len(seat_id) > MAX_SEAT_ID_LENGTH:
            raise BadRequestError(f"Invalid seat ID {seat_id}", seat_id=seat_id)
        if seat_id in seen:
            raise BadRequestError(f"Seat ID {seat_id} is listed more than once", seat_id=seat_id)
        seen.add(seat_id)


class ReservationCoordinator:
    """Atomic booking creation, update, cancellation and deletion."""

    def __init__(
        self,
        db: AsyncSession,
        seat_layout: SeatLayoutResolver | None = None,
        seat_availability: SeatAvailabilityChecker | None = None,
        lifecycle: BookingLifecycle | None = None,
    ) -> None:
        self.db = db
        self.seat_layout = seat_layout or SeatLayoutResolver(db)
        self.seat_availability = seat_availability or SeatAvailabilityChecker(db)
        self.lifecycle = lifecycle or BookingLifecycle()

    async def create_booking(
        self,
        user_id: str,
        screening_id: str,
        seats_number: int,
        seat_ids: Sequence[str],
    ) -> BookingWithSeats:
        """
        Book seats for a screening.

        Args:
            user_id: Authenticated caller who will own the booking
            screening_id: Screening to book
            seats_number: Number of seats the caller asked for
            seat_ids: Seat identifiers, one per seat

        Returns:
            The pending booking and its seat reservations

        Raises:
            NotAuthorizedError: Without a caller identity
            BadRequestError: On an empty, mismatched or invalid seat list
            NotFoundError: If the screening or its hall does not exist
            SeatConflictError: If any seat is already reserved, including
                when a concurrent booking wins the race at commit
        """
        if not user_id:
            raise NotAuthorizedError("Unauthorized: user not found in request")

        seat_ids = [str(seat_id) for seat_id in seat_ids]

        try:
            async with unit_of_work(self.db):
                validate_seat_request(seat_ids, seats_number)
                await self.seat_layout.check_seats_exist(screening_id, seat_ids)
                await self.seat_availability.check_seats_available(screening_id, seat_ids)

                booking = Booking(
                    id=str(uuid.uuid4()),
                    user_id=user_id,
                    screening_id=screening_id,
                    seats_number=seats_number,
                    status=BookingStatus.PENDING,
                )
                self.db.add(booking)

                seats = [
                    SeatReservation(
                        screening_id=screening_id,
                        seat_id=seat_id,
                        booking_id=booking.id,
                    )
                    for seat_id in seat_ids
                ]
                self.db.add_all(seats)
                await self.db.flush()
        except IntegrityError as exc:
            raise await self._translate_integrity_error(exc, screening_id, seat_ids) from exc

        logger.info(
            f"Created booking {booking.id} for user {user_id} on screening {screening_id}: {seat_ids}"
        )
        return BookingWithSeats(booking=booking, seats=seats)

    async def update_booking(
        self,
        booking_id: str,
        *,
        status: BookingStatus | None = None,
        seat_ids: Sequence[str] | None = None,
    ) -> Booking:
        """
        Update a booking's status and/or move it to other seats.

        Reseating swaps the booking's reservations in one transaction and
        keeps ``seats_number`` equal to the new seat count.

        Raises:
            NotFoundError: If the booking does not exist
            ConflictError: If reseating a booking that is no longer pending
            InvalidTransitionError: On an illegal status change
            BadRequestError / SeatConflictError: If the new seats are invalid or taken
        """
        new_seats = [str(seat_id) for seat_id in seat_ids] if seat_ids is not None else None
        screening_id: str | None = None

        try:
            async with unit_of_work(self.db):
                booking = await self._get_booking_for_update(booking_id)
                screening_id = booking.screening_id

                if new_seats is not None:
                    if booking.status != BookingStatus.PENDING:
                        raise ConflictError(
                            f"Booking {booking_id} is {booking.status.value}; seats can no longer change.",
                            booking_id=booking_id,
                        )
                    validate_seat_request(new_seats, len(new_seats))
                    await self.seat_layout.check_seats_exist(booking.screening_id, new_seats)

                    await self.db.execute(
                        delete(SeatReservation).where(SeatReservation.booking_id == booking_id)
                    )
                    await self.seat_availability.check_seats_available(
                        booking.screening_id, new_seats
                    )
                    self.db.add_all(
                        [
                            SeatReservation(
                                screening_id=booking.screening_id,
                                seat_id=seat_id,
                                booking_id=booking_id,
                            )
                            for seat_id in new_seats
                        ]
                    )
                    booking.seats_number = len(new_seats)

                if status is not None:
                    self.lifecycle.transition(booking, BookingStatus(status))

                await self.db.flush()
        except IntegrityError as exc:
            if screening_id is None or new_seats is None:
                raise
            raise await self._translate_integrity_error(exc, screening_id, new_seats) from exc

        logger.info(f"Updated booking {booking_id}")
        return booking

    async def delete_booking(self, booking_id: str) -> None:
        """
        Delete a booking together with all of its seat reservations.

        Raises:
            NotFoundError: If the booking does not exist
        """
        async with unit_of_work(self.db):
            await self.db.execute(
                delete(SeatReservation).where(SeatReservation.booking_id == booking_id)
            )
            result = await self.db.execute(delete(Booking).where(Booking.id == booking_id))
            if result.rowcount == 0:
                raise NotFoundError(
                    f"Booking with ID {booking_id} not found", booking_id=booking_id
                )

        logger.info(f"Deleted booking {booking_id}")

    async def mark_booking_as_used(self, booking_id: str) -> Booking:
        async with unit_of_work(self.db):
            booking = await self._get_booking_for_update(booking_id)
            self.lifecycle.mark_used(booking)
            await self.db.flush()
        return booking

    async def cancel_booking(self, booking_id: str) -> Booking:
        async with unit_of_work(self.db):
            booking = await self._get_booking_for_update(booking_id)
            self.lifecycle.cancel(booking)
            await self.db.flush()
        return booking

    async def release_seat(self, screening_id: str, seat_id: str) -> None:
        """
        Remove a single seat reservation.

        The owning booking's ``seats_number`` shrinks with it; a booking
        left without seats is deleted.

        Raises:
            NotFoundError: If the seat is not reserved for the screening
        """
        async with unit_of_work(self.db):
            reservation = await self.get_seat_reservation(screening_id, seat_id)
            booking = await self._get_booking_for_update(reservation.booking_id)
            await self.db.execute(
                delete(SeatReservation).where(
                    SeatReservation.screening_id == screening_id,
                    SeatReservation.seat_id == seat_id,
                )
            )
            if booking.seats_number <= 1:
                await self.db.execute(delete(Booking).where(Booking.id == booking.id))
            else:
                booking.seats_number -= 1
                await self.db.flush()

        logger.info(f"Released seat {seat_id} of screening {screening_id}")

    async def get_booking(self, booking_id: str) -> Booking:
        booking = await self.db.get(Booking, booking_id)
        if booking is None:
            raise NotFoundError(f"Booking with ID {booking_id} not found", booking_id=booking_id)
        return booking

    async def get_seat_reservation(self, screening_id: str, seat_id: str) -> SeatReservation:
        reservation = await self.db.get(SeatReservation, (screening_id, seat_id))
        if reservation is None:
            raise NotFoundError(
                f"Seat booking not found for seat {seat_id} in screening {screening_id}",
                screening_id=screening_id,
                seat_id=seat_id,
            )
        return reservation

    async def list_bookings(self, status: BookingStatus | None = None) -> list[Booking]:
        stmt = select(Booking).order_by(Booking.created_at)
        if status is not None:
            stmt = stmt.where(Booking.status == status)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_bookings_by_user(self, user_id: str) -> list[Booking]:
        stmt = select(Booking).where(Booking.user_id == user_id).order_by(Booking.created_at)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_booking_seats(self, booking_id: str) -> list[SeatReservation]:
        stmt = (
            select(SeatReservation)
            .where(SeatReservation.booking_id == booking_id)
            .order_by(SeatReservation.seat_id)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def _get_booking_for_update(self, booking_id: str) -> Booking:
        # populate_existing: the route may already hold this booking in the identity map
        booking = await self.db.get(
            Booking, booking_id, with_for_update=True, populate_existing=True
        )
        if booking is None:
            raise NotFoundError(f"Booking with ID {booking_id} not found", booking_id=booking_id)
        return booking

    async def _translate_integrity_error(
        self, exc: IntegrityError, screening_id: str, seat_ids: list[str]
    ) -> CinebookError:
        """Map a constraint violation raised at flush/commit onto a domain error."""
        message = str(exc.orig)
        if SEAT_RESERVATION_PK in message:
            return await self._seat_conflict(screening_id, seat_ids)
        if "foreign key" in message:
            logger.warning(f"Screening {screening_id} disappeared while booking: {message}")
            return NotFoundError(
                f"Screening with ID {screening_id} not found.", screening_id=screening_id
            )
        logger.error(f"Unexpected integrity error for screening {screening_id}: {message}")
        return InternalError("Could not save the booking", screening_id=screening_id)

    async def _seat_conflict(self, screening_id: str, seat_ids: list[str]) -> SeatConflictError:
        """Build the conflict error for a commit that lost a seat race."""
        try:
            taken = await self.seat_availability.find_reserved_seats(screening_id, seat_ids)
        except SQLAlchemyError:
            logger.error("Could not re-read reserved seats after a conflict", exc_info=True)
            taken = []

        logger.warning(
            f"Concurrent booking lost the race for screening {screening_id}: {taken or seat_ids}"
        )
        return SeatConflictError(screening_id, taken or list(seat_ids))
