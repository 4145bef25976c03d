from src.services import (
    pantry_notification_service,
    recurrence_service,
)


__all__ = [
    "pantry_notification_service",
    "recurrence_service",
]
