"""SQLAdmin model views for the catalog and read-only reservation data."""

from typing import Any

from sqladmin import ModelView
from starlette.requests import Request

from cinebook.models.booking import Booking
from cinebook.models.hall import Hall
from cinebook.models.movie import Movie
from cinebook.models.screening import Screening
from cinebook.models.seat_reservation import SeatReservation
from cinebook.models.theater import Theater
from cinebook.services.seat_layout import validate_layout


class MovieAdmin(ModelView, model=Movie):
    column_list = [
        Movie.id,
        Movie.title,
        Movie.genre,
        Movie.director,
        Movie.release_date,
        Movie.duration_minutes,
    ]
    column_searchable_list = [Movie.title, Movie.director]
    column_sortable_list = [Movie.title, Movie.release_date]


class TheaterAdmin(ModelView, model=Theater):
    column_list = [Theater.id, Theater.name, Theater.city, Theater.address, Theater.phone]
    column_searchable_list = [Theater.name, Theater.city]
    column_sortable_list = [Theater.name, Theater.city]


class HallAdmin(ModelView, model=Hall):
    column_list = [Hall.theater_id, Hall.hall_id]
    column_searchable_list = [Hall.theater_id, Hall.hall_id]

    async def on_model_change(
        self, data: dict[str, Any], model: Hall, is_created: bool, request: Request
    ) -> None:
        # Store "no seat" cells as null and reject repeated seat ids
        data["seats_layout"] = validate_layout(data.get("seats_layout") or model.seats_layout or [])


class ScreeningAdmin(ModelView, model=Screening):
    column_list = [
        Screening.id,
        Screening.movie_id,
        Screening.theater_id,
        Screening.hall_id,
        Screening.start_time,
        Screening.duration,
    ]
    column_searchable_list = [Screening.theater_id, Screening.movie_id]
    column_sortable_list = [Screening.start_time]
    # Scheduling goes through the API so the overlap check always runs
    can_create = False
    can_edit = False


class BookingAdmin(ModelView, model=Booking):
    column_list = [
        Booking.id,
        Booking.user_id,
        Booking.screening_id,
        Booking.seats_number,
        Booking.status,
    ]
    column_searchable_list = [Booking.user_id, Booking.screening_id]
    can_create = False
    can_edit = False
    can_delete = False


class SeatReservationAdmin(ModelView, model=SeatReservation):
    name_plural = "Seat Reservations"
    column_list = [
        SeatReservation.screening_id,
        SeatReservation.seat_id,
        SeatReservation.booking_id,
    ]
    column_searchable_list = [SeatReservation.screening_id, SeatReservation.booking_id]
    can_create = False
    can_edit = False
    can_delete = False
