"""Unit tests for screening scheduling and hall-overlap detection."""

from datetime import datetime, time
from unittest.mock import AsyncMock, MagicMock
from zoneinfo import ZoneInfo

import pytest

from cinebook.exceptions import BadRequestError, NotFoundError, ScreeningConflictError
from cinebook.models.hall import Hall
from cinebook.models.screening import Screening
from cinebook.services.screening_scheduler import ScreeningScheduler

PARIS_TZ = ZoneInfo("Europe/Paris")


# ---------------------------------------------------------------------------
# Test data helpers
# ---------------------------------------------------------------------------


def make_screening(
    id: str = "existing-1",
    start_time: datetime | None = None,
    duration: time = time(2, 30),
) -> Screening:
    if start_time is None:
        start_time = datetime(2026, 3, 10, 18, 0, tzinfo=PARIS_TZ)
    return Screening(
        id=id,
        movie_id="movie-1",
        theater_id="cinema-lumiere",
        hall_id="salle-1",
        start_time=start_time,
        duration=duration,
    )


def make_db(existing: list[Screening] | None = None) -> AsyncMock:
    result = MagicMock()
    result.scalars.return_value.all.return_value = existing or []
    result.rowcount = 1
    db = AsyncMock()
    db.add = MagicMock()
    db.get = AsyncMock(return_value=None)
    db.execute = AsyncMock(return_value=result)
    db.flush = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    return db


def make_catalog(movie: bool = True, theater: bool = True, hall: bool = True) -> MagicMock:
    catalog = MagicMock()
    catalog.get_movie = AsyncMock(return_value=MagicMock() if movie else None)
    catalog.get_theater = AsyncMock(return_value=MagicMock() if theater else None)
    catalog.get_hall = AsyncMock(
        return_value=Hall(theater_id="cinema-lumiere", hall_id="salle-1", seats_layout=[["A1"]])
        if hall
        else None
    )
    return catalog


async def schedule(scheduler: ScreeningScheduler, start: datetime, duration: str = "02:00:00") -> Screening:
    return await scheduler.create_screening(
        movie_id="movie-1",
        theater_id="cinema-lumiere",
        hall_id="salle-1",
        start_time=start,
        duration=duration,
    )


# ---------------------------------------------------------------------------
# create_screening
# ---------------------------------------------------------------------------


class TestCreateScreening:
    async def test_schedules_in_free_hall(self) -> None:
        db = make_db()
        catalog = make_catalog()
        scheduler = ScreeningScheduler(db, catalog=catalog, tz=PARIS_TZ)

        screening = await schedule(scheduler, datetime(2026, 3, 10, 18, 0, tzinfo=PARIS_TZ), "2:5:0")

        assert screening.duration == time(2, 5, 0)
        assert screening.hall_id == "salle-1"
        db.add.assert_called_once_with(screening)
        db.commit.assert_awaited_once()
        catalog.get_hall.assert_awaited_once_with("cinema-lumiere", "salle-1", lock=True)

    async def test_overlapping_screening_is_rejected(self) -> None:
        db = make_db([make_screening()])
        scheduler = ScreeningScheduler(db, catalog=make_catalog(), tz=PARIS_TZ)

        with pytest.raises(ScreeningConflictError) as exc_info:
            await schedule(scheduler, datetime(2026, 3, 10, 19, 0, tzinfo=PARIS_TZ))

        err = exc_info.value
        assert err.status_code == 400
        assert err.extra["conflicting_screening_id"] == "existing-1"
        db.add.assert_not_called()
        db.commit.assert_not_awaited()
        db.rollback.assert_awaited_once()

    async def test_back_to_back_screenings_are_allowed(self) -> None:
        # existing runs 18:00-20:30
        db = make_db([make_screening()])
        scheduler = ScreeningScheduler(db, catalog=make_catalog(), tz=PARIS_TZ)

        await schedule(scheduler, datetime(2026, 3, 10, 20, 30, tzinfo=PARIS_TZ))
        await schedule(scheduler, datetime(2026, 3, 10, 16, 0, tzinfo=PARIS_TZ))

        assert db.add.call_count == 2

    async def test_screening_running_past_midnight_is_detected(self) -> None:
        late = make_screening(start_time=datetime(2026, 3, 9, 23, 30, tzinfo=PARIS_TZ), duration=time(2, 0))
        db = make_db([late])
        scheduler = ScreeningScheduler(db, catalog=make_catalog(), tz=PARIS_TZ)

        with pytest.raises(ScreeningConflictError):
            await schedule(scheduler, datetime(2026, 3, 10, 0, 30, tzinfo=PARIS_TZ))

    async def test_candidate_query_is_scoped_to_hall(self) -> None:
        db = make_db()
        scheduler = ScreeningScheduler(db, catalog=make_catalog(), tz=PARIS_TZ)

        await schedule(scheduler, datetime(2026, 3, 10, 18, 0, tzinfo=PARIS_TZ))

        sql = str(db.execute.await_args.args[0])
        assert "screenings.theater_id" in sql
        assert "screenings.hall_id" in sql
        assert "screenings.start_time >=" in sql

    async def test_naive_start_is_read_as_local_time(self) -> None:
        scheduler = ScreeningScheduler(make_db(), catalog=make_catalog(), tz=PARIS_TZ)
        screening = await schedule(scheduler, datetime(2026, 3, 10, 18, 0))
        assert screening.start_time == datetime(2026, 3, 10, 18, 0, tzinfo=PARIS_TZ)

    async def test_invalid_duration_is_bad_request(self) -> None:
        db = make_db()
        catalog = make_catalog()
        scheduler = ScreeningScheduler(db, catalog=catalog, tz=PARIS_TZ)

        with pytest.raises(BadRequestError):
            await schedule(scheduler, datetime(2026, 3, 10, 18, 0, tzinfo=PARIS_TZ), "25:00:00")

        catalog.get_movie.assert_not_awaited()
        db.add.assert_not_called()

    @pytest.mark.parametrize(
        "catalog_kwargs,missing_key",
        [
            ({"movie": False}, "movie_id"),
            ({"theater": False}, "theater_id"),
            ({"hall": False}, "hall_id"),
        ],
    )
    async def test_unknown_reference_is_not_found(self, catalog_kwargs: dict, missing_key: str) -> None:
        db = make_db()
        scheduler = ScreeningScheduler(db, catalog=make_catalog(**catalog_kwargs), tz=PARIS_TZ)

        with pytest.raises(NotFoundError) as exc_info:
            await schedule(scheduler, datetime(2026, 3, 10, 18, 0, tzinfo=PARIS_TZ))

        assert missing_key in exc_info.value.extra
        db.add.assert_not_called()


# ---------------------------------------------------------------------------
# update / delete / get
# ---------------------------------------------------------------------------


class TestUpdateScreening:
    async def test_moving_into_busy_slot_is_rejected(self) -> None:
        other = make_screening(id="other", start_time=datetime(2026, 3, 10, 21, 0, tzinfo=PARIS_TZ))
        db = make_db([other])
        db.get = AsyncMock(return_value=make_screening(id="mine"))
        scheduler = ScreeningScheduler(db, catalog=make_catalog(), tz=PARIS_TZ)

        with pytest.raises(ScreeningConflictError):
            await scheduler.update_screening(
                "mine", {"start_time": datetime(2026, 3, 10, 20, 0, tzinfo=PARIS_TZ)}
            )

        db.rollback.assert_awaited_once()

    async def test_overlap_check_ignores_screening_itself(self) -> None:
        mine = make_screening(id="mine")
        db = make_db()
        db.get = AsyncMock(return_value=mine)
        scheduler = ScreeningScheduler(db, catalog=make_catalog(), tz=PARIS_TZ)

        updated = await scheduler.update_screening("mine", {"duration": "03:00:00"})

        assert updated.duration == time(3, 0)
        assert "screenings.id !=" in str(db.execute.await_args.args[0])
        db.commit.assert_awaited_once()

    async def test_movie_change_skips_overlap_check(self) -> None:
        db = make_db()
        db.get = AsyncMock(return_value=make_screening(id="mine"))
        catalog = make_catalog()
        scheduler = ScreeningScheduler(db, catalog=catalog, tz=PARIS_TZ)

        updated = await scheduler.update_screening("mine", {"movie_id": "movie-2"})

        assert updated.movie_id == "movie-2"
        catalog.get_hall.assert_not_awaited()
        db.execute.assert_not_awaited()

    async def test_invalid_duration_is_bad_request(self) -> None:
        db = make_db()
        db.get = AsyncMock(return_value=make_screening(id="mine"))
        scheduler = ScreeningScheduler(db, catalog=make_catalog(), tz=PARIS_TZ)

        with pytest.raises(BadRequestError):
            await scheduler.update_screening("mine", {"duration": "2:75:00"})

    async def test_unknown_field_is_bad_request(self) -> None:
        scheduler = ScreeningScheduler(make_db(), catalog=make_catalog(), tz=PARIS_TZ)
        with pytest.raises(BadRequestError):
            await scheduler.update_screening("mine", {"title": "nope"})

    async def test_missing_screening(self) -> None:
        scheduler = ScreeningScheduler(make_db(), catalog=make_catalog(), tz=PARIS_TZ)
        with pytest.raises(NotFoundError):
            await scheduler.update_screening("missing", {"duration": "01:00:00"})


async def test_delete_missing_screening_is_not_found() -> None:
    db = make_db()
    db.execute.return_value.rowcount = 0
    scheduler = ScreeningScheduler(db, catalog=make_catalog(), tz=PARIS_TZ)

    with pytest.raises(NotFoundError):
        await scheduler.delete_screening("missing")

    db.rollback.assert_awaited_once()


async def test_get_missing_screening_is_not_found() -> None:
    scheduler = ScreeningScheduler(make_db(), catalog=make_catalog(), tz=PARIS_TZ)
    with pytest.raises(NotFoundError):
        await scheduler.get_screening("missing")
