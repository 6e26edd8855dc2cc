"""Booking API endpoints."""

import logging

from fastapi import APIRouter, Depends, Query, Response, status

from cinebook.api.deps import (
    CurrentUser,
    ensure_self_or_staff,
    get_reservation_coordinator,
    get_role_directory,
    require_role,
    require_user,
)
from cinebook.models.booking import Booking, BookingStatus
from cinebook.models.seat_reservation import SeatReservation
from cinebook.schemas import (
    BookingCreate,
    BookingCreatedResponse,
    BookingResponse,
    BookingUpdate,
    SeatReservationResponse,
)
from cinebook.services.authorization import Role, RoleDirectory
from cinebook.services.reservations import ReservationCoordinator

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/bookings",
    response_model=BookingCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_booking(
    request: BookingCreate,
    user: CurrentUser = Depends(require_user),
    coordinator: ReservationCoordinator = Depends(get_reservation_coordinator),
) -> BookingCreatedResponse:
    """
    Book seats for a screening.

    The booking is owned by the authenticated caller; any user id in the
    body is ignored. Returns the pending booking and one seat reservation
    per requested seat.
    """
    result = await coordinator.create_booking(
        user_id=user.id,
        screening_id=request.screening_id,
        seats_number=request.seats_number,
        seat_ids=request.seat_ids,
    )
    return BookingCreatedResponse(
        booking=BookingResponse.model_validate(result.booking),
        seats=[SeatReservationResponse.model_validate(seat) for seat in result.seats],
    )


@router.get(
    "/bookings",
    response_model=list[BookingResponse],
    dependencies=[Depends(require_role(Role.STAFF))],
)
async def list_bookings(
    status_filter: BookingStatus | None = Query(None, alias="status", description="Filter by status"),
    coordinator: ReservationCoordinator = Depends(get_reservation_coordinator),
) -> list[Booking]:
    """List all bookings (staff only)."""
    return await coordinator.list_bookings(status=status_filter)


@router.get("/bookings/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: str,
    user: CurrentUser = Depends(require_user),
    roles: RoleDirectory = Depends(get_role_directory),
    coordinator: ReservationCoordinator = Depends(get_reservation_coordinator),
) -> Booking:
    booking = await coordinator.get_booking(booking_id)
    ensure_self_or_staff(user, booking.user_id, roles)
    return booking


@router.put("/bookings/{booking_id}", response_model=BookingResponse)
async def update_booking(
    booking_id: str,
    request: BookingUpdate,
    user: CurrentUser = Depends(require_user),
    roles: RoleDirectory = Depends(get_role_directory),
    coordinator: ReservationCoordinator = Depends(get_reservation_coordinator),
) -> Booking:
    """Change a booking's status and/or seats (owner or staff)."""
    booking = await coordinator.get_booking(booking_id)
    ensure_self_or_staff(user, booking.user_id, roles)
    return await coordinator.update_booking(
        booking_id, status=request.status, seat_ids=request.seat_ids
    )


@router.delete("/bookings/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_booking(
    booking_id: str,
    user: CurrentUser = Depends(require_user),
    roles: RoleDirectory = Depends(get_role_directory),
    coordinator: ReservationCoordinator = Depends(get_reservation_coordinator),
) -> Response:
    """Delete a booking and release all of its seats (owner or staff)."""
    booking = await coordinator.get_booking(booking_id)
    ensure_self_or_staff(user, booking.user_id, roles)
    await coordinator.delete_booking(booking_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/bookings/{booking_id}/used",
    response_model=BookingResponse,
    dependencies=[Depends(require_role(Role.STAFF))],
)
async def mark_booking_as_used(
    booking_id: str,
    coordinator: ReservationCoordinator = Depends(get_reservation_coordinator),
) -> Booking:
    return await coordinator.mark_booking_as_used(booking_id)


@router.patch("/bookings/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_booking(
    booking_id: str,
    user: CurrentUser = Depends(require_user),
    roles: RoleDirectory = Depends(get_role_directory),
    coordinator: ReservationCoordinator = Depends(get_reservation_coordinator),
) -> Booking:
    booking = await coordinator.get_booking(booking_id)
    ensure_self_or_staff(user, booking.user_id, roles)
    return await coordinator.cancel_booking(booking_id)


@router.get("/bookings/{booking_id}/seats", response_model=list[SeatReservationResponse])
async def list_booking_seats(
    booking_id: str,
    user: CurrentUser = Depends(require_user),
    roles: RoleDirectory = Depends(get_role_directory),
    coordinator: ReservationCoordinator = Depends(get_reservation_coordinator),
) -> list[SeatReservation]:
    booking = await coordinator.get_booking(booking_id)
    ensure_self_or_staff(user, booking.user_id, roles)
    return await coordinator.list_booking_seats(booking_id)


@router.get("/users/{user_id}/bookings", response_model=list[BookingResponse])
async def list_user_bookings(
    user_id: str,
    user: CurrentUser = Depends(require_user),
    roles: RoleDirectory = Depends(get_role_directory),
    coordinator: ReservationCoordinator = Depends(get_reservation_coordinator),
) -> list[Booking]:
    ensure_self_or_staff(user, user_id, roles)
    return await coordinator.list_bookings_by_user(user_id)
