"""Tests for SQLiteGroupStateRepository."""

from contextlib import contextmanager
from datetime import datetime

import pytest
from sqlalchemy.exc import OperationalError

from smartnote.domain.entities import Background, create_group, create_task
from smartnote.domain.services.state_codec import deserialize_groups, serialize_groups
from smartnote.infrastructure.persistence import (
    DatabaseError,
    DatabaseManager,
    SQLiteGroupStateRepository,
)


@pytest.fixture
def repository(db_manager: DatabaseManager) -> SQLiteGroupStateRepository:
    return SQLiteGroupStateRepository(db_manager.get_session)


def raw_group(group_id: str, *task_ids: str) -> dict:
    return {
        "id": group_id,
        "name": f"Group {group_id}",
        "background": {"kind": "color", "value": "#FF6B6B"},
        "stats": {"complete": 0, "incomplete": len(task_ids)},
        "tasks": [
            {
                "id": task_id,
                "title": f"Task {task_id}",
                "completed": False,
                "createdAt": "2024-01-10T09:00:00+00:00",
                "completedAt": None,
                "dueDate": None,
                "notes": None,
            }
            for task_id in task_ids
        ],
    }


class TestSQLiteGroupStateRepository:
    """SQLiteGroupStateRepository tests."""

    def test_load_empty(self, repository: SQLiteGroupStateRepository) -> None:
        """Test that an empty database has no state."""
        assert repository.load() is None

    def test_save_and_load(self, repository: SQLiteGroupStateRepository) -> None:
        """Test that a saved state reads back identically."""
        state = {"groups": [raw_group("g1", "t1", "t2"), raw_group("g2", "t3")]}

        repository.save(state)

        assert repository.load() == state

    def test_save_replaces_previous_state(
        self, repository: SQLiteGroupStateRepository
    ) -> None:
        """Test that saving overwrites rather than merges."""
        repository.save({"groups": [raw_group("g1", "t1"), raw_group("g2")]})

        repository.save({"groups": [raw_group("g2", "t2")]})

        assert repository.load() == {"groups": [raw_group("g2", "t2")]}

    def test_save_empty_state(self, repository: SQLiteGroupStateRepository) -> None:
        """Test that saving no groups clears the database."""
        repository.save({"groups": [raw_group("g1", "t1")]})

        repository.save({"groups": []})

        assert repository.load() is None

    def test_order_is_preserved(self, repository: SQLiteGroupStateRepository) -> None:
        """Test that group and task order survive a round trip."""
        state = {"groups": [raw_group("z", "t9", "t1"), raw_group("a", "t5")]}

        repository.save(state)

        loaded = repository.load()
        assert loaded is not None
        assert [g["id"] for g in loaded["groups"]] == ["z", "a"]
        assert [t["id"] for t in loaded["groups"][0]["tasks"]] == ["t9", "t1"]

    def test_domain_round_trip(
        self, repository: SQLiteGroupStateRepository, now: datetime
    ) -> None:
        """Test persisting a domain model through the codec."""
        group = create_group("Ideas", Background.image("https://example.com/x.png"))
        task = create_task("note", now)
        task.notes = "<p>body</p>"
        group.add_task(task)
        group.set_completed(task, True, now)

        repository.save(serialize_groups([group]))
        restored = deserialize_groups(repository.load(), now)

        assert len(restored) == 1
        assert restored[0].background == group.background
        assert restored[0].stats == group.stats
        restored_task = restored[0].tasks[task.id]
        assert restored_task.notes == "<p>body</p>"
        assert restored_task.completed_at == now

    def test_database_error_is_wrapped(self) -> None:
        """Test that SQLAlchemy errors surface as DatabaseError."""

        @contextmanager
        def failing_session():
            raise OperationalError("SELECT", {}, Exception("locked"))
            yield

        repository = SQLiteGroupStateRepository(failing_session)

        with pytest.raises(DatabaseError):
            repository.load()
        with pytest.raises(DatabaseError):
            repository.save({"groups": []})
