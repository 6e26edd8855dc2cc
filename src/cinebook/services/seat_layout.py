"""Seat layout resolution: which seat identifiers a hall actually has."""

from collections.abc import Iterable, Sequence
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from cinebook.exceptions import BadRequestError, NotFoundError
from cinebook.models.hall import Hall, SeatRow
from cinebook.models.screening import Screening
from cinebook.models.seat_reservation import MAX_SEAT_ID_LENGTH
from cinebook.services.catalog import CatalogLookup


def _is_seat(cell: Any) -> bool:
    # Legacy layouts used 0 and "" for "no seat"; bools are never seats
    if cell is None or isinstance(cell, bool):
        return False
    if isinstance(cell, (int, float)):
        return cell != 0
    return str(cell).strip() != ""


def normalise_layout(rows: Sequence[Sequence[Any]]) -> list[SeatRow]:
    """
    Convert an input grid into the stored representation.

    Seat cells are stringified; 0, "" and None all become None.
    """
    if not isinstance(rows, Sequence) or isinstance(rows, (str, bytes)):
        raise BadRequestError("Seat layout must be a list of rows")

    normalised: list[SeatRow] = []
    for row in rows:
        if not isinstance(row, Sequence) or isinstance(row, (str, bytes)):
            raise BadRequestError("Each seat layout row must be a list of cells")
        normalised.append([str(cell).strip() if _is_seat(cell) else None for cell in row])
    return normalised


def validate_layout(rows: Sequence[Sequence[Any]]) -> list[SeatRow]:
    """
    Normalise a layout and check that its seat identifiers are unique.

    Raises:
        BadRequestError: On malformed rows, a repeated seat identifier, or
            one longer than MAX_SEAT_ID_LENGTH
    """
    layout = normalise_layout(rows)
    seen: set[str] = set()
    for row in layout:
        for cell in row:
            if cell is None:
                continue
            if len(cell) > MAX_SEAT_ID_LENGTH:
                raise BadRequestError(
                    f"Seat ID {cell} is longer than {MAX_SEAT_ID_LENGTH} characters",
                    seat_id=cell,
                )
            if cell in seen:
                raise BadRequestError(f"Duplicate seat ID in layout: {cell}", seat_id=cell)
            seen.add(cell)
    return layout


def resolve_valid_seats(hall: Hall) -> set[str]:
    """Return the stringified identifiers of every addressable seat in a hall."""
    return {
        str(cell).strip()
        for row in hall.seats_layout or []
        for cell in row
        if _is_seat(cell)
    }


def iter_seats(hall: Hall) -> Iterable[tuple[int, int, str]]:
    """Yield ``(row, column, seat_id)`` for each seat, in layout order."""
    for row_index, row in enumerate(hall.seats_layout or []):
        for col_index, cell in enumerate(row):
            if _is_seat(cell):
                yield row_index, col_index, str(cell).strip()


class SeatLayoutResolver:
    """Validates requested seat identifiers against a screening's hall."""

    def __init__(self, db: AsyncSession, catalog: CatalogLookup | None = None) -> None:
        self.db = db
        self.catalog = catalog or CatalogLookup(db)

    async def get_screening_hall(self, screening_id: str) -> tuple[Screening, Hall]:
        """
        Resolve a screening and the hall it takes place in.

        Raises:
            NotFoundError: If the screening or its hall does not exist
        """
        screening = await self.db.get(Screening, screening_id)
        if screening is None:
            raise NotFoundError(
                f"Screening with ID {screening_id} not found.", screening_id=screening_id
            )

        hall = await self.catalog.get_hall(screening.theater_id, screening.hall_id)
        if hall is None:
            raise NotFoundError(
                f"Movie hall {screening.hall_id} in theater {screening.theater_id} not found.",
                theater_id=screening.theater_id,
                hall_id=screening.hall_id,
            )
        return screening, hall

    async def check_seats_exist(self, screening_id: str, seat_ids: Sequence[str]) -> None:
        """
        Ensure every requested seat exists in the screening's hall layout.

        Succeeds without touching storage when ``seat_ids`` is empty.

        Raises:
            NotFoundError: If the screening or hall is missing
            BadRequestError: Naming the first seat not in the layout
        """
        if not seat_ids:
            return

        screening, hall = await self.get_screening_hall(screening_id)
        valid_seats = resolve_valid_seats(hall)

        for seat_id in seat_ids:
            if seat_id not in valid_seats:
                raise BadRequestError(
                    f"Invalid seat ID {seat_id}: this seat does not exist in the movie hall layout",
                    seat_id=seat_id,
                    theater_id=screening.theater_id,
                    hall_id=screening.hall_id,
                )
