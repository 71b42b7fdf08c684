"""Tests for ActivityTracker."""

import logging
from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest

from smartnote.application.services import ActivityAction, ActivityTracker
from smartnote.infrastructure.persistence.exceptions import DatabaseError


class TestActivityTrackerInitialize:
    """ActivityTracker.initialize tests."""

    def test_fresh_stats_are_saved(
        self, mock_activity_repository: Mock, clock, now: datetime
    ) -> None:
        """Test that missing stats start at zero and are persisted."""
        tracker = ActivityTracker(mock_activity_repository, clock=clock)

        tracker.initialize()

        assert tracker.initialized is True
        assert tracker.stats.hourly == [0] * 24
        assert tracker.stats.weekly == [0] * 7
        assert tracker.stats.last_reset == now
        mock_activity_repository.save.assert_called_once()
        saved = mock_activity_repository.save.call_args[0][0]
        assert saved["lastReset"] == now.isoformat()

    def test_stored_stats_are_loaded(
        self, mock_activity_repository: Mock, clock, now: datetime
    ) -> None:
        """Test that stored stats are restored without saving."""
        hourly = [0] * 24
        hourly[9] = 4
        mock_activity_repository.load.return_value = {
            "hourly": hourly,
            "weekly": [1, 0, 0, 0, 0, 0, 2],
            "lastReset": (now - timedelta(days=1)).isoformat(),
        }
        tracker = ActivityTracker(mock_activity_repository, clock=clock)

        tracker.initialize()

        assert tracker.stats.hourly[9] == 4
        assert tracker.stats.weekly == [1, 0, 0, 0, 0, 0, 2]
        assert tracker.stats.last_reset == now - timedelta(days=1)
        mock_activity_repository.save.assert_not_called()

    def test_stats_before_initialize_raises(
        self, mock_activity_repository: Mock
    ) -> None:
        """Test that access before initialization fails loudly."""
        tracker = ActivityTracker(mock_activity_repository)

        assert tracker.initialized is False
        with pytest.raises(RuntimeError):
            tracker.stats
        with pytest.raises(RuntimeError):
            tracker.record_event(ActivityAction.CREATE)

    def test_stats_returns_copy(self, activity_tracker: ActivityTracker) -> None:
        """Test that callers cannot mutate the tracker's histogram."""
        snapshot = activity_tracker.stats
        snapshot.hourly[0] = 99

        assert activity_tracker.stats.hourly[0] == 0


class TestActivityTrackerRecordEvent:
    """ActivityTracker.record_event tests."""

    def test_increments_hour_and_weekday(
        self, activity_tracker: ActivityTracker, mock_activity_repository: Mock
    ) -> None:
        """Test that an event lands in the current hour and weekday."""
        mock_activity_repository.save.reset_mock()

        activity_tracker.record_event(ActivityAction.CREATE)

        stats = activity_tracker.stats
        assert stats.hourly[15] == 1
        assert stats.weekly[3] == 1  # Wednesday
        assert sum(stats.hourly) == 1
        assert sum(stats.weekly) == 1
        mock_activity_repository.save.assert_called_once()

    def test_uses_configured_timezone(
        self, mock_activity_repository: Mock, clock
    ) -> None:
        """Test that buckets follow the configured timezone."""
        tz = timezone(timedelta(hours=9))
        tracker = ActivityTracker(mock_activity_repository, tz=tz, clock=clock)
        tracker.initialize()

        tracker.record_event(ActivityAction.UPDATE)

        # 15:30 UTC is 00:30 on Thursday at +09:00
        assert tracker.stats.hourly[0] == 1
        assert tracker.stats.weekly[4] == 1

    def test_resets_after_window(
        self, activity_tracker: ActivityTracker, clock
    ) -> None:
        """Test that histograms reset once the window has elapsed."""
        activity_tracker.record_event(ActivityAction.CREATE)
        activity_tracker.record_event(ActivityAction.CREATE)

        later = clock.advance(days=7, seconds=1)
        activity_tracker.record_event(ActivityAction.UPDATE)

        stats = activity_tracker.stats
        assert sum(stats.hourly) == 1
        assert sum(stats.weekly) == 1
        assert stats.last_reset == later

    def test_no_reset_at_exact_window(
        self, activity_tracker: ActivityTracker, clock
    ) -> None:
        """Test that exactly one window later does not reset."""
        activity_tracker.record_event(ActivityAction.CREATE)

        clock.advance(days=7)
        activity_tracker.record_event(ActivityAction.CREATE)

        assert sum(activity_tracker.stats.hourly) == 2

    def test_custom_reset_window(self, mock_activity_repository: Mock, clock) -> None:
        """Test a shorter reset window."""
        tracker = ActivityTracker(
            mock_activity_repository,
            reset_window=timedelta(days=1),
            tz=timezone.utc,
            clock=clock,
        )
        tracker.initialize()
        tracker.record_event(ActivityAction.CREATE)

        clock.advance(days=2)
        tracker.record_event(ActivityAction.CREATE)

        assert sum(tracker.stats.hourly) == 1

    def test_save_failure_is_logged(
        self,
        activity_tracker: ActivityTracker,
        mock_activity_repository: Mock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test that persistence errors keep the in-memory count."""
        mock_activity_repository.save.side_effect = DatabaseError("disk full")

        with caplog.at_level(logging.ERROR):
            activity_tracker.record_event(ActivityAction.CREATE)

        assert activity_tracker.stats.hourly[15] == 1
        assert "Failed to save activity stats" in caplog.text
