"""Persistence infrastructure."""

from smartnote.infrastructure.persistence.activity_stats_repository import (
    SQLiteActivityStatsRepository,
)
from smartnote.infrastructure.persistence.database import DatabaseManager
from smartnote.infrastructure.persistence.exceptions import (
    DatabaseError,
    PersistenceError,
)
from smartnote.infrastructure.persistence.group_state_repository import (
    SQLiteGroupStateRepository,
)
from smartnote.infrastructure.persistence.models import (
    ActivityStatsModel,
    GroupModel,
    TaskModel,
)

__all__ = [
    "ActivityStatsModel",
    "DatabaseError",
    "DatabaseManager",
    "GroupModel",
    "PersistenceError",
    "SQLiteActivityStatsRepository",
    "SQLiteGroupStateRepository",
    "TaskModel",
]
