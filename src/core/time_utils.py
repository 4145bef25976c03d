"""Calendar and cooldown arithmetic shared by the rule engine."""

import calendar
from datetime import UTC, date, datetime, time, timedelta
from typing import TypeVar

from dateutil.relativedelta import relativedelta

from src.core.config import Constants
from src.core.errors import ErrorCode, InvalidArgumentError


MS_PER_HOUR = 60 * 60 * 1000
MS_PER_DAY = Constants.HOURS_PER_DAY * MS_PER_HOUR

DateT = TypeVar("DateT", date, datetime)


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in the given month (28-31)."""
    return calendar.monthrange(year, month)[1]


def add_days(value: DateT, days: int) -> DateT:
    """Add whole calendar days, keeping time-of-day and tzinfo."""
    return value + timedelta(days=days)


def add_months_clamped(value: DateT, months: int) -> DateT:
    """Add calendar months, clamping to the last day of the target month.

    Jan 31 + 1 month is Feb 28 (Feb 29 in leap years), never early March.
    """
    return value + relativedelta(months=months)


def is_aware(value: datetime) -> bool:
    return value.tzinfo is not None and value.utcoffset() is not None


def ensure_same_awareness(*values: datetime | None, field: str | None = None) -> None:
    """Reject a mix of naive and timezone-aware datetimes.

    Raises:
        InvalidArgumentError: If some values are naive and others aware
    """
    kinds = {is_aware(value) for value in values if value is not None}
    if len(kinds) > 1:
        msg = "Cannot compare naive and timezone-aware datetimes"
        raise InvalidArgumentError(msg, code=ErrorCode.ERR_INVALID_TIMESTAMP, field=field)


def to_instant(value: date | datetime, reference: datetime) -> datetime:
    """Lift a calendar date to midnight in the reference's timezone.

    Datetimes are returned unchanged.
    """
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min, tzinfo=reference.tzinfo)


def elapsed_ms(start: datetime, end: datetime) -> int:
    """Whole milliseconds from start to end (negative if end is earlier).

    Aware values are measured as UTC instants, so a DST change between them
    counts as real elapsed time rather than wall-clock time.
    """
    if is_aware(start) and is_aware(end):
        start, end = start.astimezone(UTC), end.astimezone(UTC)
    return (end - start) // timedelta(milliseconds=1)


def is_cooldown_over(last_at: datetime | None, now: datetime, cooldown_hours: float) -> bool:
    """Check whether a cooldown window has elapsed since the last notification.

    A missing timestamp means the item was never notified, so it is always
    eligible.
    """
    if last_at is None:
        return True
    return elapsed_ms(last_at, now) >= cooldown_hours * MS_PER_HOUR


def is_within_window(target: datetime, now: datetime, days: float) -> bool:
    """Check that target lies between now and now + days, both ends inclusive.

    Targets already in the past are outside the window.
    """
    remaining = elapsed_ms(now, target)
    return 0 <= remaining <= days * MS_PER_DAY
