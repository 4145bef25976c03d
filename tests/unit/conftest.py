"""Pytest configuration and fixtures for unit tests."""

from datetime import datetime, timedelta

import pytest

from src.domain.pantry import PantryNotificationState


@pytest.fixture
def make_state():
    """Factory for pantry snapshots with sensible defaults."""

    def _make(
        *,
        quantity: float = 10,
        expiry_date=None,
        last_low_stock_notification_at: datetime | None = None,
        last_expiry_notification_at: datetime | None = None,
    ) -> PantryNotificationState:
        return PantryNotificationState(
            quantity=quantity,
            expiry_date=expiry_date,
            last_low_stock_notification_at=last_low_stock_notification_at,
            last_expiry_notification_at=last_expiry_notification_at,
        )

    return _make


@pytest.fixture
def hours_ago(fixed_now):
    """Return a helper producing timestamps N hours before fixed_now."""
    return lambda hours: fixed_now - timedelta(hours=hours)
