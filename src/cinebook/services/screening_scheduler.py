"""Screening scheduling with hall-overlap detection."""

import logging
import uuid
from datetime import datetime, time
from typing import Any
from zoneinfo import ZoneInfo

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from cinebook.config import settings
from cinebook.exceptions import BadRequestError, NotFoundError, ScreeningConflictError
from cinebook.models.hall import Hall
from cinebook.models.screening import Screening
from cinebook.services.catalog import CatalogLookup
from cinebook.services.unit_of_work import unit_of_work
from cinebook.utils.timeutils import (
    MAX_DURATION,
    as_local,
    duration_to_timedelta,
    intervals_overlap,
    local_day_window,
    parse_duration,
)

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"movie_id", "theater_id", "hall_id", "start_time", "duration"})
SCHEDULE_FIELDS = frozenset({"theater_id", "hall_id", "start_time", "duration"})


class ScreeningScheduler:
    """
    Creates and reschedules screenings without double-booking a hall.

    Candidate screenings are pre-filtered to the local calendar day of the
    new start (widened to catch screenings running across midnight), then
    tested for strict overlap of their half-open intervals. The hall row is
    locked for the duration of the transaction so concurrent schedulers for
    the same hall are serialised.
    """

    def __init__(
        self,
        db: AsyncSession,
        catalog: CatalogLookup | None = None,
        tz: ZoneInfo | None = None,
    ) -> None:
        self.db = db
        self.catalog = catalog or CatalogLookup(db)
        self.tz = tz or ZoneInfo(settings.timezone)

    async def create_screening(
        self,
        *,
        movie_id: str,
        theater_id: str,
        hall_id: str,
        start_time: datetime,
        duration: str | time,
    ) -> Screening:
        """
        Schedule a new screening.

        Raises:
            BadRequestError: If the duration is malformed
            NotFoundError: If the movie, theater or hall does not exist
            ScreeningConflictError: If the hall is busy during the slot
        """
        async with unit_of_work(self.db):
            duration_value = parse_duration(duration)
            start = as_local(start_time, self.tz)

            if await self.catalog.get_movie(movie_id) is None:
                raise NotFoundError(f"Movie with ID {movie_id} not found.", movie_id=movie_id)
            if await self.catalog.get_theater(theater_id) is None:
                raise NotFoundError(
                    f"Theater with ID {theater_id} not found.", theater_id=theater_id
                )
            await self._lock_hall(theater_id, hall_id)

            await self._ensure_slot_free(theater_id, hall_id, start, duration_value)

            screening = Screening(
                id=str(uuid.uuid4()),
                movie_id=movie_id,
                theater_id=theater_id,
                hall_id=hall_id,
                start_time=start,
                duration=duration_value,
            )
            self.db.add(screening)
            await self.db.flush()

        logger.info(
            f"Scheduled screening {screening.id} in {theater_id}/{hall_id} at {start.isoformat()}"
        )
        return screening

    async def update_screening(self, screening_id: str, patch: dict[str, Any]) -> Screening:
        """
        Apply a partial update to a screening.

        The duration is re-validated when present, and the overlap check is
        re-run (ignoring the screening itself) whenever the hall, start time
        or duration changes.

        Raises:
            NotFoundError: If the screening or a newly referenced entity is missing
            BadRequestError: On a malformed duration or unknown field
            ScreeningConflictError: If the new slot overlaps another screening
        """
        unknown = set(patch) - UPDATABLE_FIELDS
        if unknown:
            raise BadRequestError(
                f"Cannot update screening fields: {', '.join(sorted(unknown))}"
            )

        async with unit_of_work(self.db):
            screening = await self.db.get(Screening, screening_id)
            if screening is None:
                raise NotFoundError(
                    f"Screening with ID {screening_id} not found.", screening_id=screening_id
                )

            changes = {key: value for key, value in patch.items() if value is not None}
            if "duration" in changes:
                changes["duration"] = parse_duration(changes["duration"])
            if "start_time" in changes:
                changes["start_time"] = as_local(changes["start_time"], self.tz)

            if "movie_id" in changes and await self.catalog.get_movie(changes["movie_id"]) is None:
                raise NotFoundError(
                    f"Movie with ID {changes['movie_id']} not found.",
                    movie_id=changes["movie_id"],
                )
            if (
                "theater_id" in changes
                and await self.catalog.get_theater(changes["theater_id"]) is None
            ):
                raise NotFoundError(
                    f"Theater with ID {changes['theater_id']} not found.",
                    theater_id=changes["theater_id"],
                )

            if SCHEDULE_FIELDS & changes.keys():
                theater_id = changes.get("theater_id", screening.theater_id)
                hall_id = changes.get("hall_id", screening.hall_id)
                await self._lock_hall(theater_id, hall_id)
                await self._ensure_slot_free(
                    theater_id,
                    hall_id,
                    changes.get("start_time", screening.start_time),
                    changes.get("duration", screening.duration),
                    exclude_id=screening.id,
                )

            for key, value in changes.items():
                setattr(screening, key, value)
            await self.db.flush()

        logger.info(f"Updated screening {screening_id}: {sorted(changes)}")
        return screening

    async def delete_screening(self, screening_id: str) -> None:
        """Delete a screening; its bookings and seat reservations go with it."""
        async with unit_of_work(self.db):
            result = await self.db.execute(delete(Screening).where(Screening.id == screening_id))
            if result.rowcount == 0:
                raise NotFoundError(
                    f"Screening with ID {screening_id} not found.", screening_id=screening_id
                )
        logger.info(f"Deleted screening {screening_id}")

    async def get_screening(self, screening_id: str) -> Screening:
        screening = await self.db.get(Screening, screening_id)
        if screening is None:
            raise NotFoundError(
                f"Screening with ID {screening_id} not found.", screening_id=screening_id
            )
        return screening

    async def list_screenings(
        self, movie_id: str | None = None, theater_id: str | None = None
    ) -> list[Screening]:
        stmt = select(Screening).order_by(Screening.start_time)
        if movie_id is not None:
            stmt = stmt.where(Screening.movie_id == movie_id)
        if theater_id is not None:
            stmt = stmt.where(Screening.theater_id == theater_id)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def _lock_hall(self, theater_id: str, hall_id: str) -> Hall:
        hall = await self.catalog.get_hall(theater_id, hall_id, lock=True)
        if hall is None:
            raise NotFoundError(
                f"Hall with ID {hall_id} in theater {theater_id} not found.",
                theater_id=theater_id,
                hall_id=hall_id,
            )
        return hall

    async def _ensure_slot_free(
        self,
        theater_id: str,
        hall_id: str,
        start: datetime,
        duration: time,
        exclude_id: str | None = None,
    ) -> None:
        end = start + duration_to_timedelta(duration)

        day_start, day_end = local_day_window(start, self.tz)
        stmt = select(Screening).where(
            Screening.theater_id == theater_id,
            Screening.hall_id == hall_id,
            Screening.start_time >= day_start - MAX_DURATION,
            Screening.start_time < max(day_end, end),
        )
        if exclude_id is not None:
            stmt = stmt.where(Screening.id != exclude_id)

        result = await self.db.execute(stmt)
        for existing in result.scalars().all():
            existing_end = existing.start_time + duration_to_timedelta(existing.duration)
            if intervals_overlap(start, end, existing.start_time, existing_end):
                logger.warning(
                    f"Screening conflict in {theater_id}/{hall_id}: "
                    f"{start.isoformat()} overlaps screening {existing.id}"
                )
                raise ScreeningConflictError(
                    "Another screening is already scheduled in this hall during the selected time slot.",
                    conflicting_screening_id=existing.id,
                )
