"""Unit tests for the seat availability checker."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from cinebook.exceptions import SeatConflictError
from cinebook.models.hall import Hall
from cinebook.services.seat_availability import SeatAvailabilityChecker


def make_db(reserved: list[str]) -> AsyncMock:
    result = MagicMock()
    result.scalars.return_value.all.return_value = reserved
    db = AsyncMock()
    db.execute = AsyncMock(return_value=result)
    return db


async def test_find_reserved_seats_keeps_request_order() -> None:
    checker = SeatAvailabilityChecker(make_db(["A3", "A1"]))
    assert await checker.find_reserved_seats("screening-1", ["A1", "A2", "A3"]) == ["A1", "A3"]


async def test_find_reserved_seats_skips_query_for_empty_request() -> None:
    db = make_db([])
    checker = SeatAvailabilityChecker(db)

    assert await checker.find_reserved_seats("screening-1", []) == []
    db.execute.assert_not_awaited()


async def test_check_passes_when_all_seats_free() -> None:
    checker = SeatAvailabilityChecker(make_db([]))
    await checker.check_seats_available("screening-1", ["A1", "A2"])


async def test_check_reports_every_taken_seat() -> None:
    checker = SeatAvailabilityChecker(make_db(["A2", "A1"]))

    with pytest.raises(SeatConflictError) as exc_info:
        await checker.check_seats_available("screening-1", ["A1", "A2", "B1"])

    err = exc_info.value
    assert err.status_code == 409
    assert err.seat_ids == ["A1", "A2"]
    assert err.to_dict()["screening_id"] == "screening-1"


async def test_seat_map_flags_reserved_seats() -> None:
    hall = Hall(theater_id="t", hall_id="h", seats_layout=[["A1", None, "A2"], ["B1", "B2", None]])
    db = make_db(["A2"])

    with patch("cinebook.services.seat_availability.SeatLayoutResolver") as resolver_cls:
        resolver_cls.return_value.get_screening_hall = AsyncMock(return_value=(MagicMock(), hall))
        seat_map = await SeatAvailabilityChecker(db).list_seat_map("screening-1")

    assert seat_map == [
        {"seat_id": "A1", "row": 0, "column": 0, "reserved": False},
        {"seat_id": "A2", "row": 0, "column": 2, "reserved": True},
        {"seat_id": "B1", "row": 1, "column": 0, "reserved": False},
        {"seat_id": "B2", "row": 1, "column": 1, "reserved": False},
    ]
