"""Read-only lookups into the movie/theater/hall catalog."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cinebook.models.hall import Hall
from cinebook.models.movie import Movie
from cinebook.models.theater import Theater


class CatalogLookup:
    """Existence checks the reservation engine needs from the catalog."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_movie(self, movie_id: str) -> Movie | None:
        return await self.db.get(Movie, movie_id)

    async def get_theater(self, theater_id: str) -> Theater | None:
        return await self.db.get(Theater, theater_id)

    async def get_hall(
        self, theater_id: str, hall_id: str, *, lock: bool = False
    ) -> Hall | None:
        """
        Fetch a hall by its composite key.

        Args:
            theater_id: Owning theater
            hall_id: Hall identifier within the theater
            lock: Take a row lock (SELECT ... FOR UPDATE) for the rest of
                the current transaction

        Returns:
            The hall, or None if it does not exist
        """
        stmt = select(Hall).where(Hall.theater_id == theater_id, Hall.hall_id == hall_id)
        if lock:
            stmt = stmt.with_for_update()
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()
