"""Seed script to populate a sample movie, theater and hall."""

import asyncio
import logging
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from cinebook.database import AsyncSessionLocal
from cinebook.models import Hall, Movie, Theater
from cinebook.services.seat_layout import validate_layout

logger = logging.getLogger(__name__)

MOVIES = [
    {
        "id": "5f1c3a52-6f0e-4c8e-9a57-0b8f8f2d8a11",
        "title": "Inception",
        "description": "A thief who steals corporate secrets through dream-sharing technology.",
        "age_rating": "PG-13",
        "genre": "Science Fiction",
        "release_date": date(2010, 7, 16),
        "director": "Christopher Nolan",
        "duration_minutes": 148,
    },
]

THEATERS = [
    {
        "id": "cinema-lumiere",
        "name": "Cinéma Lumière",
        "address": "12 rue de la République",
        "postal_code": "69002",
        "city": "lyon",
        "phone": "+33 4 00 00 00 00",
        "email": "contact@cinema-lumiere.example",
    },
]

# 0 and "" mark gaps; validate_layout stores them as null
HALLS = [
    {
        "theater_id": "cinema-lumiere",
        "hall_id": "salle-1",
        "seats_layout": [
            ["A1", "A2", 0, "A3", "A4"],
            ["B1", "B2", 0, "B3", "B4"],
            ["C1", "C2", "", "C3", "C4"],
        ],
    },
]


async def _add_missing(session: AsyncSession, model: type, key: tuple | str, data: dict) -> None:
    if await session.get(model, key) is not None:
        logger.info(f"{model.__name__} {key} already exists, skipping")
        return
    session.add(model(**data))
    logger.info(f"Added {model.__name__} {key}")


async def seed_catalog() -> None:
    """Seed the database with a minimal catalog; safe to run repeatedly."""
    async with AsyncSessionLocal() as session:
        for movie in MOVIES:
            await _add_missing(session, Movie, movie["id"], movie)
        for theater in THEATERS:
            await _add_missing(session, Theater, theater["id"], theater)
        await session.flush()

        for hall in HALLS:
            data = {**hall, "seats_layout": validate_layout(hall["seats_layout"])}
            await _add_missing(session, Hall, (hall["theater_id"], hall["hall_id"]), data)

        await session.commit()
        logger.info("Catalog seeding complete")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed_catalog())
