"""Time helpers for screening scheduling."""

from datetime import datetime, time, timedelta
from zoneinfo import ZoneInfo

from cinebook.exceptions import BadRequestError

# Durations are stored as a time of day, so no screening lasts 24h or more
MAX_DURATION = timedelta(hours=24)


def parse_duration(value: str | time) -> time:
    """
    Parse and normalise an ``HH:mm:ss`` duration.

    Parts may be given without zero padding: "2:5:0" is read as 02:05:00.

    Args:
        value: Duration string, or an already parsed time

    Returns:
        The duration as a ``datetime.time``

    Raises:
        BadRequestError: If the value is not three non-negative integers
            with hours <= 23 and minutes/seconds <= 59
    """
    if isinstance(value, time):
        return value.replace(microsecond=0, tzinfo=None)

    parts = str(value).strip().split(":")
    if len(parts) != 3:
        raise BadRequestError(
            'Invalid duration format. Expected "HH:mm:ss"', duration=value
        )

    # ASCII digits only; "²".isdigit() is True
    if not all(part.isascii() and part.isdigit() for part in parts):
        raise BadRequestError(
            "Invalid duration values. Must be valid hours, minutes, and seconds.",
            duration=value,
        )

    hours, minutes, seconds = (int(part) for part in parts)
    if hours > 23 or minutes > 59 or seconds > 59:
        raise BadRequestError(
            "Invalid duration values. Must be valid hours, minutes, and seconds.",
            duration=value,
        )

    return time(hours, minutes, seconds)


def duration_to_timedelta(duration: time) -> timedelta:
    return timedelta(hours=duration.hour, minutes=duration.minute, seconds=duration.second)


def format_duration(duration: time) -> str:
    return duration.strftime("%H:%M:%S")


def as_local(moment: datetime, tz: ZoneInfo) -> datetime:
    """Attach ``tz`` to naive datetimes; convert aware ones into it."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz)
    return moment.astimezone(tz)


def local_day_window(moment: datetime, tz: ZoneInfo) -> tuple[datetime, datetime]:
    """
    Return the local calendar day containing ``moment``.

    Returns:
        ``(midnight, next midnight)`` as aware datetimes in ``tz``
    """
    local = as_local(moment, tz)
    day_start = datetime.combine(local.date(), time(0, 0), tzinfo=tz)
    day_end = datetime.combine(local.date() + timedelta(days=1), time(0, 0), tzinfo=tz)
    return day_start, day_end


def intervals_overlap(
    start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime
) -> bool:
    """Strict overlap test for half-open intervals ``[start, end)``."""
    return start_a < end_b and start_b < end_a
