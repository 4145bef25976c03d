"""Pantry notification domain models and enums."""

from datetime import date, datetime
from enum import StrEnum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from src.core.errors import ErrorCode, InvalidArgumentError


DEFAULT_LOW_STOCK_THRESHOLD = 1
DEFAULT_NEAR_EXPIRY_DAYS = 3
DEFAULT_COOLDOWN_HOURS = 36


class NotificationKind(StrEnum):
    """Kinds of pantry alerts, each with its own cooldown clock."""

    LOW_STOCK = "LOW_STOCK"
    EXPIRY = "EXPIRY"


class PantryNotificationState(BaseModel):
    """Snapshot of the notification-relevant fields of a pantry item."""

    model_config = ConfigDict(frozen=True)

    quantity: float = Field(..., ge=0, description="Current quantity in the item's measurement unit")
    expiry_date: datetime | date | None = Field(default=None, description="Expiry date, if the item has one")
    last_low_stock_notification_at: datetime | None = Field(
        default=None, description="When a low-stock alert last fired for this item"
    )
    last_expiry_notification_at: datetime | None = Field(
        default=None, description="When a near-expiry alert last fired for this item"
    )


class PantryNotificationOptions(BaseModel):
    """Thresholds and cooldown used when evaluating pantry alerts.

    Defaults: low stock at quantity <= 1, near expiry within 3 days, and 36
    hours between two alerts of the same kind.
    """

    model_config = ConfigDict(frozen=True)

    low_stock_threshold: float = Field(default=DEFAULT_LOW_STOCK_THRESHOLD, ge=0)
    near_expiry_days: float = Field(default=DEFAULT_NEAR_EXPIRY_DAYS, ge=0)
    cooldown_hours: float = Field(default=DEFAULT_COOLDOWN_HOURS, ge=0)

    @classmethod
    def build(cls, **values: float) -> "PantryNotificationOptions":
        """Validate and build options, reporting failures as InvalidArgumentError.

        Raises:
            InvalidArgumentError: If a value is negative or not a number
        """
        try:
            return cls(**values)
        except ValidationError as e:
            fields = sorted({str(error["loc"][0]) for error in e.errors() if error["loc"]})
            msg = f"Invalid pantry notification options: {', '.join(fields) or 'unknown field'}"
            raise InvalidArgumentError(
                msg,
                code=ErrorCode.ERR_INVALID_CONFIGURATION,
                field=fields[0] if fields else None,
            ) from e


class NotificationDecision(BaseModel):
    """Which alerts should fire now, and the cooldown anchors to persist."""

    model_config = ConfigDict(frozen=True)

    should_notify_low_stock: bool = False
    should_notify_expiry: bool = False
    next_low_stock_notified_at: datetime | None = None
    next_expiry_notified_at: datetime | None = None

    @model_validator(mode="after")
    def _check_flag_timestamp_pairs(self) -> Self:
        if self.should_notify_low_stock != (self.next_low_stock_notified_at is not None):
            raise ValueError("should_notify_low_stock and next_low_stock_notified_at must be set together")
        if self.should_notify_expiry != (self.next_expiry_notified_at is not None):
            raise ValueError("should_notify_expiry and next_expiry_notified_at must be set together")
        return self

    @property
    def kinds(self) -> list[NotificationKind]:
        """Alert kinds that fire in this decision."""
        fired = []
        if self.should_notify_low_stock:
            fired.append(NotificationKind.LOW_STOCK)
        if self.should_notify_expiry:
            fired.append(NotificationKind.EXPIRY)
        return fired


class PantryNotificationDraft(BaseModel):
    """Notification content handed to the external dispatch layer."""

    kind: NotificationKind = Field(..., description="Which alert produced this draft")
    category: str = Field(default="PANTRY", description="Notification category")
    level: str = Field(default="MEDIUM", description="Notification urgency level")
    title: str = Field(..., description="Short notification title")
    body: str = Field(..., description="Notification body text")
