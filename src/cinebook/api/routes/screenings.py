"""Screening API endpoints."""

from fastapi import APIRouter, Depends, Query, Response, status

from cinebook.api.deps import get_screening_scheduler, require_role
from cinebook.models.screening import Screening
from cinebook.schemas import ScreeningCreate, ScreeningResponse, ScreeningUpdate
from cinebook.services.authorization import Role
from cinebook.services.screening_scheduler import ScreeningScheduler

router = APIRouter()


@router.post(
    "/screenings",
    response_model=ScreeningResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_role(Role.STAFF))],
)
async def create_screening(
    request: ScreeningCreate,
    scheduler: ScreeningScheduler = Depends(get_screening_scheduler),
) -> Screening:
    """
    Schedule a screening (staff only).

    Fails with 404 if the movie, theater or hall is unknown, and with 400
    if the duration is malformed or the hall is already busy.
    """
    return await scheduler.create_screening(
        movie_id=request.movie_id,
        theater_id=request.theater_id,
        hall_id=request.hall_id,
        start_time=request.start_time,
        duration=request.duration,
    )


@router.get("/screenings", response_model=list[ScreeningResponse])
async def list_screenings(
    movie_id: str | None = Query(None, description="Only screenings of this movie"),
    theater_id: str | None = Query(None, description="Only screenings in this theater"),
    scheduler: ScreeningScheduler = Depends(get_screening_scheduler),
) -> list[Screening]:
    return await scheduler.list_screenings(movie_id=movie_id, theater_id=theater_id)


@router.get("/screenings/{screening_id}", response_model=ScreeningResponse)
async def get_screening(
    screening_id: str,
    scheduler: ScreeningScheduler = Depends(get_screening_scheduler),
) -> Screening:
    return await scheduler.get_screening(screening_id)


@router.put(
    "/screenings/{screening_id}",
    response_model=ScreeningResponse,
    dependencies=[Depends(require_role(Role.STAFF))],
)
async def update_screening(
    screening_id: str,
    request: ScreeningUpdate,
    scheduler: ScreeningScheduler = Depends(get_screening_scheduler),
) -> Screening:
    return await scheduler.update_screening(
        screening_id, request.model_dump(exclude_unset=True)
    )


@router.delete(
    "/screenings/{screening_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_role(Role.STAFF))],
)
async def delete_screening(
    screening_id: str,
    scheduler: ScreeningScheduler = Depends(get_screening_scheduler),
) -> Response:
    await scheduler.delete_screening(screening_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
