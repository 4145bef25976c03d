"""Pytest configuration and shared fixtures."""

from datetime import UTC, datetime

import pytest


@pytest.fixture
def fixed_now() -> datetime:
    """A fixed, timezone-aware evaluation time shared by a test."""
    return datetime(2023, 1, 1, 12, 0, tzinfo=UTC)
