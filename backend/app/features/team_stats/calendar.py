"""
Calendar helpers for the reference timezone.

Week and month boundaries are computed on local wall-clock time and then
attached to the reference timezone. A wall time that falls in a DST gap or
overlap has no single instant, and is rejected with InternalConversionError
rather than silently resolved.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from app.models.base import utcnow
from app.shared.errors import BadRequestError, InternalConversionError


def localize(naive: datetime, tz: ZoneInfo) -> datetime:
    """
    Attach a timezone to a local wall time.

    Raises:
        InternalConversionError: wall time is ambiguous or does not exist
    """
    earlier = naive.replace(tzinfo=tz, fold=0)
    later = naive.replace(tzinfo=tz, fold=1)
    if earlier.utcoffset() == later.utcoffset():
        return earlier

    # Offsets differ in both a gap and an overlap; only a gap time fails
    # to survive a round trip through UTC
    round_trip = earlier.astimezone(timezone.utc).astimezone(tz)
    if round_trip.replace(tzinfo=None) != naive:
        raise InternalConversionError(
            f"Nonexistent local time in {tz.key}: {naive.isoformat()}"
        )
    raise InternalConversionError(
        f"Ambiguous local time in {tz.key}: {naive.isoformat()}"
    )


def start_of_week(moment: datetime, tz: ZoneInfo) -> datetime:
    """
    Monday 00:00 on or before the local date of `moment`.

    Returns:
        Naive local datetime (the week key)
    """
    local_date = moment.astimezone(tz).date()
    monday = local_date - timedelta(days=local_date.weekday())
    return datetime.combine(monday, time.min)


def competition_window(
    start_date: date,
    tz: ZoneInfo,
    now: Optional[datetime] = None
) -> tuple[datetime, datetime]:
    """Competition start (local midnight) through now."""
    start = localize(datetime.combine(start_date, time.min), tz)
    return start, now or utcnow()


def this_week_window(
    tz: ZoneInfo,
    now: Optional[datetime] = None
) -> tuple[datetime, datetime]:
    """Monday 00:00 through Sunday 23:59:59 of the current local week."""
    week_start = start_of_week(now or utcnow(), tz)
    week_end = week_start + timedelta(days=6, hours=23, minutes=59, seconds=59)
    return localize(week_start, tz), localize(week_end, tz)


def this_month_window(
    tz: ZoneInfo,
    now: Optional[datetime] = None
) -> tuple[datetime, datetime]:
    """First day 00:00 through the last second of the current local month."""
    local_now = (now or utcnow()).astimezone(tz)
    month_start = datetime(local_now.year, local_now.month, 1)
    if local_now.month == 12:
        next_month = datetime(local_now.year + 1, 1, 1)
    else:
        next_month = datetime(local_now.year, local_now.month + 1, 1)
    return localize(month_start, tz), localize(next_month, tz) - timedelta(seconds=1)


def parse_rfc3339(value: str, field: str) -> datetime:
    """
    Parse an RFC 3339 timestamp with an explicit offset.

    Raises:
        BadRequestError: value is malformed or has no offset
    """
    example = "2024-01-01T00:00:00Z"
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise BadRequestError(
            f"Invalid {field} datetime format: {e}. Expected RFC3339 format (e.g., {example})"
        ) from e
    if parsed.tzinfo is None:
        raise BadRequestError(
            f"Invalid {field} datetime format: missing UTC offset. "
            f"Expected RFC3339 format (e.g., {example})"
        )
    return parsed
