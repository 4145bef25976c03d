"""Recurrence calculation for repeating household tasks.

Every function here is a pure transform of its arguments: callers read the
task template, pass its values in, and persist whatever comes back.
"""

import logging
from collections.abc import Iterator
from datetime import date, datetime, time

from src.core.config import Constants
from src.core.errors import ErrorCode, InvalidArgumentError
from src.core.logging import log_with_context, span
from src.core.time_utils import DateT, add_days, add_months_clamped, ensure_same_awareness
from src.domain.recurrence import RecurrencePattern, RecurrenceRequest, RecurrenceRollover, RecurringTaskSnapshot


logger = logging.getLogger(__name__)

_UNIT_NAMES: dict[RecurrencePattern, tuple[str, str]] = {
    RecurrencePattern.DAILY: ("daily", "day"),
    RecurrencePattern.WEEKLY: ("weekly", "week"),
    RecurrencePattern.MONTHLY: ("monthly", "month"),
}


def _resolve_pattern(pattern: RecurrencePattern | str) -> RecurrencePattern:
    if isinstance(pattern, RecurrencePattern):
        return pattern
    try:
        return RecurrencePattern(pattern)
    except ValueError as e:
        msg = f"Invalid recurrence pattern: {pattern!r}"
        raise InvalidArgumentError(msg, code=ErrorCode.ERR_INVALID_RECURRENCE_PATTERN, field="pattern") from e


def _check_interval(interval: int) -> None:
    if isinstance(interval, bool) or not isinstance(interval, int) or interval < 1:
        msg = f"Recurrence interval must be an integer >= 1, got {interval!r}"
        raise InvalidArgumentError(msg, code=ErrorCode.ERR_INVALID_INTERVAL, field="interval")


def _check_base_date(base_date: date) -> None:
    if not isinstance(base_date, date):
        msg = f"Base date must be a date or datetime, got {type(base_date).__name__}"
        raise InvalidArgumentError(msg, code=ErrorCode.ERR_INVALID_TIMESTAMP, field="base_date")


def _check_comparable(first: date, second: date, *, field: str) -> None:
    """Dates and datetimes cannot be ordered against each other."""
    if isinstance(first, datetime) != isinstance(second, datetime):
        msg = f"{field} must be the same kind of value as the base date (date or datetime)"
        raise InvalidArgumentError(msg, code=ErrorCode.ERR_INVALID_TIMESTAMP, field=field)
    if isinstance(first, datetime) and isinstance(second, datetime):
        ensure_same_awareness(first, second, field=field)


def compute_next(base_date: DateT, pattern: RecurrencePattern | str, interval: int) -> DateT:
    """Calculate the next occurrence after base_date.

    DAILY adds ``interval`` days and WEEKLY adds ``interval * 7`` days.
    MONTHLY adds ``interval`` calendar months and, when the day-of-month does
    not exist in the target month, lands on that month's last day (Jan 31 ->
    Feb 28, or Feb 29 in a leap year). Time-of-day and tzinfo are preserved.

    Args:
        base_date: Date or datetime to advance from
        pattern: Recurrence pattern (enum member or its string value)
        interval: Repeat multiplier, at least 1

    Returns:
        The next occurrence, of the same type as base_date

    Raises:
        InvalidArgumentError: If the pattern is unknown or the interval is below 1
    """
    with span("recurrence_service.compute_next"):
        resolved = _resolve_pattern(pattern)
        _check_interval(interval)
        _check_base_date(base_date)

        if resolved == RecurrencePattern.DAILY:
            next_date = add_days(base_date, interval)
        elif resolved == RecurrencePattern.WEEKLY:
            next_date = add_days(base_date, interval * Constants.DAYS_PER_WEEK)
        else:
            next_date = add_months_clamped(base_date, interval)

        log_with_context(
            logger,
            "debug",
            "Computed next recurrence",
            base_date=base_date.isoformat(),
            pattern=resolved,
            interval=interval,
        )
        return next_date


def compute_next_for(request: RecurrenceRequest) -> date | datetime:
    """Calculate the next occurrence for an already validated request."""
    return compute_next(request.base_date, request.pattern, request.interval)


def iter_occurrences(
    base_date: DateT,
    pattern: RecurrencePattern | str,
    interval: int,
    *,
    count: int | None = None,
    until: DateT | None = None,
) -> Iterator[DateT]:
    """Walk forward from base_date, feeding each result back in as the next base.

    base_date itself is not yielded. Iteration stops after ``count`` results or
    once the next occurrence would fall after ``until``, whichever comes first.
    Because each step starts from the previous result, a MONTHLY walk that was
    clamped once stays on the clamped day (Jan 31 -> Feb 28 -> Mar 28).

    Raises:
        InvalidArgumentError: If neither bound is given, count is negative, or
            the inputs are invalid for compute_next
    """
    resolved = _resolve_pattern(pattern)
    _check_interval(interval)
    _check_base_date(base_date)
    if count is None and until is None:
        msg = "iter_occurrences needs a count or an until bound"
        raise InvalidArgumentError(msg, code=ErrorCode.ERR_INVALID_ARGUMENT, field="count")
    if count is not None and (isinstance(count, bool) or not isinstance(count, int) or count < 0):
        msg = f"Occurrence count must be a non-negative integer, got {count!r}"
        raise InvalidArgumentError(msg, code=ErrorCode.ERR_INVALID_ARGUMENT, field="count")
    if until is not None:
        _check_comparable(base_date, until, field="until")

    return _walk(base_date, resolved, interval, count, until)


def _walk(
    current: DateT,
    pattern: RecurrencePattern,
    interval: int,
    count: int | None,
    until: DateT | None,
) -> Iterator[DateT]:
    produced = 0
    while count is None or produced < count:
        current = compute_next(current, pattern, interval)
        if until is not None and current > until:
            return
        yield current
        produced += 1


def advance_until_after(
    base_date: DateT,
    pattern: RecurrencePattern | str,
    interval: int,
    reference: DateT,
) -> DateT:
    """Return the first date in the walk from base_date that is after reference.

    base_date is returned unchanged when it is already after reference. Used to
    catch up a template whose job did not run for several periods.
    """
    with span("recurrence_service.advance_until_after"):
        resolved = _resolve_pattern(pattern)
        _check_interval(interval)
        _check_base_date(base_date)
        _check_comparable(base_date, reference, field="reference")

        current = base_date
        steps = 0
        while current <= reference:
            current = compute_next(current, resolved, interval)
            steps += 1

        if steps > 1:
            log_with_context(
                logger, "info", "Skipped missed recurrences", skipped=steps - 1, pattern=resolved, interval=interval
            )
        return current


def plan_rollover(snapshot: RecurringTaskSnapshot, today: date | datetime) -> RecurrenceRollover | None:
    """Work out what the recurrence job should write for a due template.

    A template is due when its next recurrence date is on or before ``today``.
    A plain date stands for midnight at the start of that day, so a template
    due later the same day waits for the next run. The new task instance takes
    the template's current next recurrence date as its deadline, and the
    template advances by one period.

    Returns:
        The rollover to apply, or None when the template is not due or has no
        next recurrence date
    """
    with span("recurrence_service.plan_rollover"):
        due_at = snapshot.next_recurrence_date
        if due_at is None:
            log_with_context(logger, "warning", "Recurring task has no next recurrence date", task_id=snapshot.task_id)
            return None

        if isinstance(today, datetime):
            ensure_same_awareness(due_at, today, field="today")
            is_due = due_at <= today
        else:
            is_due = due_at <= datetime.combine(today, time.min, tzinfo=due_at.tzinfo)

        if not is_due:
            log_with_context(logger, "debug", "Recurring task not due yet", task_id=snapshot.task_id)
            return None

        next_due = compute_next(due_at, snapshot.pattern, snapshot.interval)
        log_with_context(
            logger,
            "info",
            "Planned recurring task rollover",
            task_id=snapshot.task_id,
            deadline=due_at.isoformat(),
            next=next_due.isoformat(),
        )
        return RecurrenceRollover(
            task_id=snapshot.task_id,
            instance_deadline=due_at,
            last_recurrence_date=due_at,
            next_recurrence_date=next_due,
        )


def describe_recurrence(pattern: RecurrencePattern | str, interval: int) -> str:
    """Convert a pattern and interval to human-readable text.

    Returns:
        Text such as "daily", "every 3 days", "weekly" or "every 2 months"
    """
    resolved = _resolve_pattern(pattern)
    _check_interval(interval)

    adverb, unit = _UNIT_NAMES[resolved]
    if interval == 1:
        return adverb
    return f"every {interval} {unit}s"
