"""Application services."""

from smartnote.application.services.activity_tracker import (
    ActivityAction,
    ActivityTracker,
)
from smartnote.application.services.registry import TaskRegistry

__all__ = ["ActivityAction", "ActivityTracker", "TaskRegistry"]
