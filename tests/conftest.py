"""Common fixtures."""

from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest

from smartnote.application.services import ActivityTracker, TaskRegistry


class FakeClock:
    """Manually advanced clock for deterministic timestamps."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def now() -> datetime:
    """Create a fixed current time for testing (Wednesday 2024-01-10 15:30 UTC)."""
    return datetime(2024, 1, 10, 15, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(now: datetime) -> FakeClock:
    """Create a controllable clock starting at ``now``."""
    return FakeClock(now)


@pytest.fixture
def mock_activity_repository() -> Mock:
    """Create mock activity stats repository (nothing stored yet)."""
    repo = Mock()
    repo.load = Mock(return_value=None)
    repo.save = Mock()
    return repo


@pytest.fixture
def mock_group_repository() -> Mock:
    """Create mock group state repository (nothing stored yet)."""
    repo = Mock()
    repo.load = Mock(return_value=None)
    repo.save = Mock()
    return repo


@pytest.fixture
def activity_tracker(
    mock_activity_repository: Mock, clock: FakeClock
) -> ActivityTracker:
    """Create an initialized activity tracker using UTC."""
    tracker = ActivityTracker(
        mock_activity_repository, tz=timezone.utc, clock=clock
    )
    tracker.initialize()
    return tracker


@pytest.fixture
def registry(
    mock_group_repository: Mock,
    activity_tracker: ActivityTracker,
    clock: FakeClock,
) -> TaskRegistry:
    """Create a loaded, empty registry."""
    registry = TaskRegistry(mock_group_repository, activity_tracker, clock=clock)
    registry.load()
    return registry
