"""Domain models and DTOs."""

from src.domain.pantry import (
    NotificationDecision,
    NotificationKind,
    PantryNotificationDraft,
    PantryNotificationOptions,
    PantryNotificationState,
)
from src.domain.recurrence import RecurrencePattern, RecurrenceRequest, RecurrenceRollover, RecurringTaskSnapshot


__all__ = [
    "NotificationDecision",
    "NotificationKind",
    "PantryNotificationDraft",
    "PantryNotificationOptions",
    "PantryNotificationState",
    "RecurrencePattern",
    "RecurrenceRequest",
    "RecurrenceRollover",
    "RecurringTaskSnapshot",
]
