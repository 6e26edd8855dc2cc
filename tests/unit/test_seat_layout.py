"""Unit tests for seat layout resolution."""

from datetime import datetime, time
from unittest.mock import AsyncMock, MagicMock
from zoneinfo import ZoneInfo

import pytest

from cinebook.exceptions import BadRequestError, NotFoundError
from cinebook.models.hall import Hall
from cinebook.models.screening import Screening
from cinebook.models.seat_reservation import MAX_SEAT_ID_LENGTH
from cinebook.services.seat_layout import (
    SeatLayoutResolver,
    iter_seats,
    normalise_layout,
    resolve_valid_seats,
    validate_layout,
)

PARIS_TZ = ZoneInfo("Europe/Paris")


def make_hall(layout: list | None = None) -> Hall:
    if layout is None:
        layout = [["A1", "A2", None, "A3"], ["B1", "B2", None, "B3"]]
    return Hall(theater_id="cinema-lumiere", hall_id="salle-1", seats_layout=layout)


def make_screening() -> Screening:
    return Screening(
        id="screening-1",
        movie_id="movie-1",
        theater_id="cinema-lumiere",
        hall_id="salle-1",
        start_time=datetime(2026, 3, 10, 18, 0, tzinfo=PARIS_TZ),
        duration=time(2, 30),
    )


def make_resolver(screening: Screening | None, hall: Hall | None) -> tuple[SeatLayoutResolver, AsyncMock]:
    db = AsyncMock()
    db.get = AsyncMock(return_value=screening)
    catalog = MagicMock()
    catalog.get_hall = AsyncMock(return_value=hall)
    return SeatLayoutResolver(db, catalog=catalog), db


class TestResolveValidSeats:
    def test_skips_gaps(self) -> None:
        assert resolve_valid_seats(make_hall()) == {"A1", "A2", "A3", "B1", "B2", "B3"}

    def test_treats_legacy_zero_and_empty_string_as_gaps(self) -> None:
        hall = make_hall([["A1", 0, "A2"], ["", "B1", None]])
        assert resolve_valid_seats(hall) == {"A1", "A2", "B1"}

    def test_stringifies_numeric_seats(self) -> None:
        assert resolve_valid_seats(make_hall([[1, 2, 0, 3]])) == {"1", "2", "3"}

    def test_empty_layout_has_no_seats(self) -> None:
        assert resolve_valid_seats(make_hall([])) == set()


def test_iter_seats_reports_grid_positions() -> None:
    hall = make_hall([["A1", None, "A2"], [None, "B1", None]])
    assert list(iter_seats(hall)) == [(0, 0, "A1"), (0, 2, "A2"), (1, 1, "B1")]


class TestLayoutValidation:
    def test_normalises_gaps_to_none(self) -> None:
        assert normalise_layout([["A1", 0, ""], [1, None, "B2"]]) == [
            ["A1", None, None],
            ["1", None, "B2"],
        ]

    def test_rejects_duplicate_seat_ids(self) -> None:
        with pytest.raises(BadRequestError) as exc_info:
            validate_layout([["A1", "A2"], ["A1", "B2"]])
        assert exc_info.value.extra["seat_id"] == "A1"

    def test_rejects_seat_ids_too_long_to_store(self) -> None:
        with pytest.raises(BadRequestError) as exc_info:
            validate_layout([["A1", "X" * (MAX_SEAT_ID_LENGTH + 1)]])
        assert exc_info.value.extra["seat_id"] == "X" * (MAX_SEAT_ID_LENGTH + 1)

    def test_accepts_seat_ids_at_column_width(self) -> None:
        seat_id = "X" * MAX_SEAT_ID_LENGTH
        assert validate_layout([[seat_id]]) == [[seat_id]]

    def test_rejects_non_list_rows(self) -> None:
        with pytest.raises(BadRequestError):
            validate_layout(["A1A2"])

    def test_rejects_non_list_layout(self) -> None:
        with pytest.raises(BadRequestError):
            validate_layout("A1")


class TestCheckSeatsExist:
    async def test_accepts_seats_in_layout(self) -> None:
        resolver, _ = make_resolver(make_screening(), make_hall())
        await resolver.check_seats_exist("screening-1", ["A1", "B3"])

    async def test_empty_request_does_not_touch_storage(self) -> None:
        resolver, db = make_resolver(make_screening(), make_hall())
        await resolver.check_seats_exist("screening-1", [])
        db.get.assert_not_awaited()

    async def test_names_first_invalid_seat(self) -> None:
        resolver, _ = make_resolver(make_screening(), make_hall())

        with pytest.raises(BadRequestError) as exc_info:
            await resolver.check_seats_exist("screening-1", ["A1", "Z9", "Z8"])

        assert exc_info.value.extra["seat_id"] == "Z9"
        assert exc_info.value.extra["hall_id"] == "salle-1"
        assert "Z9" in exc_info.value.message

    async def test_gap_positions_are_not_seats(self) -> None:
        resolver, _ = make_resolver(make_screening(), make_hall([["A1", 0, "A2"]]))
        with pytest.raises(BadRequestError):
            await resolver.check_seats_exist("screening-1", ["0"])

    async def test_missing_screening_is_not_found(self) -> None:
        resolver, _ = make_resolver(None, make_hall())
        with pytest.raises(NotFoundError):
            await resolver.check_seats_exist("missing", ["A1"])

    async def test_missing_hall_is_not_found(self) -> None:
        resolver, _ = make_resolver(make_screening(), None)
        with pytest.raises(NotFoundError) as exc_info:
            await resolver.check_seats_exist("screening-1", ["A1"])
        assert exc_info.value.extra == {"theater_id": "cinema-lumiere", "hall_id": "salle-1"}
