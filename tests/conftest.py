"""
Shared fixtures: fresh global state, a frozen clock and an in-memory repository.
"""
from datetime import datetime, timezone

import pytest

from proworker.lib.clock import FrozenClock
from proworker.lib.config_flags import reset_all_configs
from proworker.lib.metrics import reset_metrics
from tests.factories import FakeRepository


@pytest.fixture(autouse=True)
def _reset_globals():
    """Fresh metrics and analytics config for every test."""
    reset_metrics()
    reset_all_configs()
    yield
    reset_metrics()
    reset_all_configs()


@pytest.fixture
def frozen_clock():
    return FrozenClock(datetime(2025, 3, 15, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def repository():
    return FakeRepository()
