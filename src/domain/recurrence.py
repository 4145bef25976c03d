"""Recurrence domain models and enums."""

from datetime import date, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.core.errors import ErrorCode, InvalidArgumentError


class RecurrencePattern(StrEnum):
    """Repeat unit governing how a task's due date advances."""

    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"


class RecurrenceRequest(BaseModel):
    """A single "advance this date" request, built per call."""

    model_config = ConfigDict(frozen=True)

    base_date: datetime | date = Field(..., description="Date (or datetime) to advance from")
    pattern: RecurrencePattern = Field(..., description="DAILY, WEEKLY or MONTHLY")
    interval: int = Field(..., ge=1, strict=True, description="Repeat multiplier ('every N units')")

    @classmethod
    def build(
        cls,
        *,
        base_date: date | datetime,
        pattern: RecurrencePattern | str,
        interval: int,
    ) -> "RecurrenceRequest":
        """Validate and build a request, reporting failures as InvalidArgumentError.

        Raises:
            InvalidArgumentError: If the pattern is unknown or the interval is below 1
        """
        try:
            return cls(base_date=base_date, pattern=pattern, interval=interval)
        except ValidationError as e:
            failed = {str(error["loc"][0]) for error in e.errors() if error["loc"]}
            if "pattern" in failed:
                msg = f"Invalid recurrence pattern: {pattern!r}"
                raise InvalidArgumentError(msg, code=ErrorCode.ERR_INVALID_RECURRENCE_PATTERN, field="pattern") from e
            if "interval" in failed:
                msg = f"Recurrence interval must be an integer >= 1, got {interval!r}"
                raise InvalidArgumentError(msg, code=ErrorCode.ERR_INVALID_INTERVAL, field="interval") from e
            raise


class RecurringTaskSnapshot(BaseModel):
    """Read-only view of a recurring task template."""

    model_config = ConfigDict(frozen=True)

    task_id: str = Field(..., description="Unique task ID of the recurring template")
    pattern: RecurrencePattern = Field(..., description="Recurrence pattern of the template")
    interval: int = Field(default=1, ge=1, description="Repeat multiplier")
    next_recurrence_date: datetime | None = Field(default=None, description="When the next instance is due")
    last_recurrence_date: datetime | None = Field(default=None, description="When the last instance was due")


class RecurrenceRollover(BaseModel):
    """Values the recurrence job writes back after a template comes due."""

    model_config = ConfigDict(frozen=True)

    task_id: str = Field(..., description="Template the rollover belongs to")
    instance_deadline: datetime = Field(..., description="Deadline for the newly created task instance")
    last_recurrence_date: datetime = Field(..., description="New value for the template's last recurrence date")
    next_recurrence_date: datetime = Field(..., description="New value for the template's next recurrence date")
