"""Domain entities."""

from smartnote.domain.entities.activity_stats import ActivityStats
from smartnote.domain.entities.background import (
    PRESET_COLORS,
    Background,
    BackgroundKind,
    default_background,
)
from smartnote.domain.entities.group import Group, GroupStats, create_group
from smartnote.domain.entities.statistics import ActivitySummary, DailyRecord
from smartnote.domain.entities.task import Task, create_task

__all__ = [
    "PRESET_COLORS",
    "ActivityStats",
    "ActivitySummary",
    "Background",
    "BackgroundKind",
    "DailyRecord",
    "Group",
    "GroupStats",
    "Task",
    "create_group",
    "create_task",
    "default_background",
]
