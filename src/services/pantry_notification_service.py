"""Pantry alert evaluation with per-kind cooldowns.

The evaluator only recommends: it performs no I/O and sends nothing. Callers
persist the returned timestamps and hand drafts to the dispatch layer.
"""

import logging
from collections.abc import Mapping
from datetime import datetime

from src.core.config import Constants
from src.core.errors import ErrorCode, InvalidArgumentError
from src.core.logging import log_with_context, span
from src.core.time_utils import ensure_same_awareness, is_cooldown_over, is_within_window, to_instant
from src.domain.pantry import (
    NotificationDecision,
    NotificationKind,
    PantryNotificationDraft,
    PantryNotificationOptions,
    PantryNotificationState,
)


logger = logging.getLogger(__name__)


def _check_now(now: datetime) -> None:
    if not isinstance(now, datetime):
        msg = f"now must be a datetime, got {type(now).__name__}"
        raise InvalidArgumentError(msg, code=ErrorCode.ERR_INVALID_TIMESTAMP, field="now")


def _check_options(options: PantryNotificationOptions) -> None:
    # model_construct() skips field validation, so re-check the bounds here
    for field in ("low_stock_threshold", "near_expiry_days", "cooldown_hours"):
        if getattr(options, field) < 0:
            msg = f"Invalid pantry notification options: {field} must not be negative"
            raise InvalidArgumentError(msg, code=ErrorCode.ERR_INVALID_CONFIGURATION, field=field)


def _decide(
    state: PantryNotificationState,
    now: datetime,
    options: PantryNotificationOptions,
) -> NotificationDecision:
    expiry_at = to_instant(state.expiry_date, now) if state.expiry_date is not None else None
    ensure_same_awareness(
        now,
        expiry_at,
        state.last_low_stock_notification_at,
        state.last_expiry_notification_at,
        field="state",
    )

    notify_low_stock = state.quantity <= options.low_stock_threshold and is_cooldown_over(
        state.last_low_stock_notification_at, now, options.cooldown_hours
    )

    notify_expiry = (
        expiry_at is not None
        and is_within_window(expiry_at, now, options.near_expiry_days)
        and is_cooldown_over(state.last_expiry_notification_at, now, options.cooldown_hours)
    )

    return NotificationDecision(
        should_notify_low_stock=notify_low_stock,
        should_notify_expiry=notify_expiry,
        next_low_stock_notified_at=now if notify_low_stock else None,
        next_expiry_notified_at=now if notify_expiry else None,
    )


def evaluate(
    state: PantryNotificationState,
    now: datetime,
    options: PantryNotificationOptions | None = None,
) -> NotificationDecision:
    """Decide which pantry alerts should fire for one item at ``now``.

    Low stock fires when the quantity is at or below the threshold. Near expiry
    fires when the expiry falls between now and now + near_expiry_days; items
    that have already expired do not qualify. Each kind is then suppressed
    while its own last notification is younger than the cooldown. The two
    checks never influence each other.

    Args:
        state: Snapshot of the pantry item
        now: Evaluation time; becomes the new cooldown anchor for fired kinds
        options: Thresholds and cooldown (defaults: 1, 3 days, 36 hours)

    Returns:
        The decision, with a new timestamp only for kinds that fire

    Raises:
        InvalidArgumentError: On negative options or mixed naive/aware datetimes
    """
    with span("pantry_notification_service.evaluate"):
        _check_now(now)
        if options is None:
            options = PantryNotificationOptions()
        _check_options(options)

        decision = _decide(state, now, options)

        log_with_context(
            logger,
            "debug",
            "Evaluated pantry notifications",
            quantity=state.quantity,
            low_stock=decision.should_notify_low_stock,
            expiry=decision.should_notify_expiry,
        )
        return decision


def evaluate_batch(
    states: Mapping[str, PantryNotificationState],
    now: datetime,
    options: PantryNotificationOptions | None = None,
) -> dict[str, NotificationDecision]:
    """Evaluate many pantry items against one fixed ``now``.

    Args:
        states: Item snapshots keyed by item ID
        now: Shared evaluation time for the whole batch
        options: Thresholds and cooldown applied to every item

    Returns:
        Decisions keyed by the same item IDs
    """
    with span("pantry_notification_service.evaluate_batch"):
        _check_now(now)
        if options is None:
            options = PantryNotificationOptions()
        _check_options(options)

        decisions = {item_id: _decide(state, now, options) for item_id, state in states.items()}

        low_stock_count = sum(1 for d in decisions.values() if d.should_notify_low_stock)
        expiry_count = sum(1 for d in decisions.values() if d.should_notify_expiry)
        logger.info(
            "Completed pantry notification evaluation: %d items, %d low stock, %d near expiry",
            len(decisions),
            low_stock_count,
            expiry_count,
        )
        return decisions


def apply_decision(state: PantryNotificationState, decision: NotificationDecision) -> PantryNotificationState:
    """Return the snapshot the caller should persist after acting on a decision.

    Timestamps are only replaced for kinds that fired; the others keep their
    previous value.
    """
    updates: dict[str, datetime] = {}
    if decision.next_low_stock_notified_at is not None:
        updates["last_low_stock_notification_at"] = decision.next_low_stock_notified_at
    if decision.next_expiry_notified_at is not None:
        updates["last_expiry_notification_at"] = decision.next_expiry_notified_at
    if not updates:
        return state
    return state.model_copy(update=updates)


def build_notification_drafts(
    item_name: str | None,
    state: PantryNotificationState,
    decision: NotificationDecision,
) -> list[PantryNotificationDraft]:
    """Build the notification texts for every alert that fires in a decision."""
    name = item_name or "Pantry item"
    drafts = []

    if decision.should_notify_low_stock:
        drafts.append(
            PantryNotificationDraft(
                kind=NotificationKind.LOW_STOCK,
                category=Constants.NOTIFICATION_CATEGORY_PANTRY,
                level=Constants.NOTIFICATION_LEVEL_MEDIUM,
                title=f"Pantry item ({name}) is low on stock",
                body=f"{name} is low on stock in the Pantry!",
            )
        )

    if decision.should_notify_expiry and state.expiry_date is not None:
        date_text = state.expiry_date.isoformat()[:10]
        drafts.append(
            PantryNotificationDraft(
                kind=NotificationKind.EXPIRY,
                category=Constants.NOTIFICATION_CATEGORY_PANTRY,
                level=Constants.NOTIFICATION_LEVEL_MEDIUM,
                title=f"Pantry item ({name}) is near expiry",
                body=f"{name} is expiring soon (expiry date: {date_text}).",
            )
        )

    return drafts
