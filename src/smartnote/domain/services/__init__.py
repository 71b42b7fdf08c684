"""Domain services."""

from smartnote.domain.services.protocols import ActivitySource, GroupSource
from smartnote.domain.services.statistics import (
    StatisticsEngine,
    completion_rate,
    longest_streak,
)

__all__ = [
    "ActivitySource",
    "GroupSource",
    "StatisticsEngine",
    "completion_rate",
    "longest_streak",
]
