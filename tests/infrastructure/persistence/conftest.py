"""Persistence fixtures."""

from collections.abc import Generator

import pytest

from smartnote.infrastructure.persistence import DatabaseManager


@pytest.fixture
def db_manager() -> Generator[DatabaseManager, None, None]:
    """Create an in-memory database with tables."""
    manager = DatabaseManager(":memory:")
    manager.create_tables()
    yield manager
    manager.close()
