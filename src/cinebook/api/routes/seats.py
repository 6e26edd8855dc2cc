"""Seat map and seat reservation endpoints."""

from fastapi import APIRouter, Depends, Response, status

from cinebook.api.deps import get_reservation_coordinator, get_seat_availability, require_role
from cinebook.models.seat_reservation import SeatReservation
from cinebook.schemas import SeatMapResponse, SeatReservationResponse, SeatStatus
from cinebook.services.authorization import Role
from cinebook.services.reservations import ReservationCoordinator
from cinebook.services.seat_availability import SeatAvailabilityChecker

router = APIRouter()


@router.get("/screenings/{screening_id}/seats", response_model=SeatMapResponse)
async def get_seat_map(
    screening_id: str,
    availability: SeatAvailabilityChecker = Depends(get_seat_availability),
) -> SeatMapResponse:
    """Every seat of the screening's hall, flagged when already reserved."""
    seats = [SeatStatus(**seat) for seat in await availability.list_seat_map(screening_id)]
    return SeatMapResponse(
        screening_id=screening_id,
        seats=seats,
        total_seats=len(seats),
        available_seats=sum(1 for seat in seats if not seat.reserved),
    )


@router.get(
    "/screenings/{screening_id}/seats/{seat_id}",
    response_model=SeatReservationResponse,
)
async def get_seat_reservation(
    screening_id: str,
    seat_id: str,
    coordinator: ReservationCoordinator = Depends(get_reservation_coordinator),
) -> SeatReservation:
    """The reservation holding one seat, with the booking it belongs to; 404 if free."""
    return await coordinator.get_seat_reservation(screening_id, seat_id)


@router.delete(
    "/screenings/{screening_id}/seats/{seat_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_role(Role.STAFF))],
)
async def release_seat(
    screening_id: str,
    seat_id: str,
    coordinator: ReservationCoordinator = Depends(get_reservation_coordinator),
) -> Response:
    """Release one reserved seat (staff only); the owning booking shrinks by one."""
    await coordinator.release_seat(screening_id, seat_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
