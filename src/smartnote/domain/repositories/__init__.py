"""Domain repositories."""

from smartnote.domain.repositories.activity_stats_repository import (
    ActivityStatsRepository,
    RawActivityStats,
)
from smartnote.domain.repositories.group_state_repository import (
    GroupStateRepository,
    RawState,
)

__all__ = [
    "ActivityStatsRepository",
    "GroupStateRepository",
    "RawActivityStats",
    "RawState",
]
