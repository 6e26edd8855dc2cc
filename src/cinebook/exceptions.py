"""Typed domain errors raised by the reservation engine.

Each error carries the HTTP status and a stable machine-usable ``reason``;
``cinebook.api.errors`` maps them onto responses.
"""

from typing import Any


class CinebookError(Exception):
    status_code: int = 500
    reason: str = "internal"

    def __init__(self, message: str, **extra: Any) -> None:
        super().__init__(message)
        self.message = message
        self.extra = extra

    def to_dict(self) -> dict[str, Any]:
        return {"reason": self.reason, "detail": self.message, **self.extra}


class BadRequestError(CinebookError):
    status_code = 400
    reason = "bad_request"


class ScreeningConflictError(BadRequestError):
    """Another screening already occupies the hall during the requested slot."""

    reason = "screening_conflict"


class NotAuthorizedError(CinebookError):
    status_code = 401
    reason = "not_authorized"


class ForbiddenError(CinebookError):
    status_code = 403
    reason = "forbidden"


class NotFoundError(CinebookError):
    status_code = 404
    reason = "not_found"


class ConflictError(CinebookError):
    status_code = 409
    reason = "conflict"


class SeatConflictError(ConflictError):
    """One or more seats are already reserved for the screening."""

    reason = "seat_conflict"

    def __init__(self, screening_id: str, seat_ids: list[str]) -> None:
        super().__init__(
            f"Seats already booked for screening {screening_id}: {', '.join(seat_ids)}",
            screening_id=screening_id,
            seat_ids=seat_ids,
        )
        self.screening_id = screening_id
        self.seat_ids = seat_ids


class InvalidTransitionError(ConflictError):
    reason = "invalid_transition"


class InternalError(CinebookError):
    status_code = 500
    reason = "internal"
