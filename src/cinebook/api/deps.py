"""FastAPI dependencies: caller identity, role checks and per-request services."""

from collections.abc import Callable, Coroutine
from typing import Any

from fastapi import Depends, Header
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from cinebook.database import get_db
from cinebook.exceptions import ForbiddenError, NotAuthorizedError
from cinebook.services.authorization import Role, RoleDirectory
from cinebook.services.reservations import ReservationCoordinator
from cinebook.services.screening_scheduler import ScreeningScheduler
from cinebook.services.seat_availability import SeatAvailabilityChecker


class CurrentUser(BaseModel):
    """Authenticated caller as forwarded by the gateway."""

    id: str
    name: str | None = None
    email: str | None = None


async def get_current_user(
    x_user_id: str | None = Header(default=None),
    x_user_name: str | None = Header(default=None),
    x_user_email: str | None = Header(default=None),
) -> CurrentUser | None:
    """Read the caller identity headers; None when the request is anonymous."""
    if not x_user_id:
        return None
    return CurrentUser(id=x_user_id, name=x_user_name, email=x_user_email)


async def require_user(
    user: CurrentUser | None = Depends(get_current_user),
) -> CurrentUser:
    if user is None:
        raise NotAuthorizedError("Unauthorized: user not found in request")
    return user


def get_role_directory() -> RoleDirectory:
    return RoleDirectory()


def require_role(required: Role) -> Callable[..., Coroutine[Any, Any, CurrentUser]]:
    """Dependency factory: the caller must hold ``required`` or a higher role."""

    async def _check(
        user: CurrentUser = Depends(require_user),
        roles: RoleDirectory = Depends(get_role_directory),
    ) -> CurrentUser:
        if not roles.has_permission(user.id, required):
            raise ForbiddenError("Forbidden: insufficient role")
        return user

    return _check


def ensure_self_or_staff(user: CurrentUser, owner_id: str, roles: RoleDirectory) -> None:
    """Allow the resource owner, or anyone with at least the staff role."""
    if user.id == owner_id:
        return
    if not roles.has_permission(user.id, Role.STAFF):
        raise ForbiddenError("Forbidden: not owner or staff")


async def get_reservation_coordinator(
    db: AsyncSession = Depends(get_db),
) -> ReservationCoordinator:
    return ReservationCoordinator(db)


async def get_screening_scheduler(db: AsyncSession = Depends(get_db)) -> ScreeningScheduler:
    return ScreeningScheduler(db)


async def get_seat_availability(db: AsyncSession = Depends(get_db)) -> SeatAvailabilityChecker:
    return SeatAvailabilityChecker(db)
