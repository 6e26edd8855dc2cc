"""Booking status model: pending -> used | canceled."""

import logging

from cinebook.exceptions import InvalidTransitionError
from cinebook.models.booking import Booking, BookingStatus

logger = logging.getLogger(__name__)

# Terminal states have no outgoing transitions
ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.USED, BookingStatus.CANCELED}),
    BookingStatus.USED: frozenset(),
    BookingStatus.CANCELED: frozenset(),
}


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


class BookingLifecycle:
    """Applies status transitions to bookings."""

    def transition(self, booking: Booking, target: BookingStatus) -> bool:
        """
        Move a booking to ``target``.

        Re-applying a booking's current terminal status is a no-op.

        Returns:
            True if the status changed, False for a no-op

        Raises:
            InvalidTransitionError: For any move other than out of pending
        """
        current = BookingStatus(booking.status)
        if current == target and current != BookingStatus.PENDING:
            return False

        if not can_transition(current, target):
            raise InvalidTransitionError(
                f"Booking {booking.id} is {current.value} and cannot become {target.value}.",
                booking_id=booking.id,
                status=current.value,
            )

        booking.status = target
        logger.info(f"Booking {booking.id}: {current.value} -> {target.value}")
        return True

    def mark_used(self, booking: Booking) -> bool:
        return self.transition(booking, BookingStatus.USED)

    def cancel(self, booking: Booking) -> bool:
        return self.transition(booking, BookingStatus.CANCELED)
