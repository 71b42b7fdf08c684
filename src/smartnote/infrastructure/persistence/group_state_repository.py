"""SQLite implementation of GroupStateRepository."""

import logging
from collections.abc import Callable
from contextlib import AbstractContextManager
from typing import Any

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from smartnote.domain.repositories import RawState
from smartnote.infrastructure.persistence.exceptions import DatabaseError
from smartnote.infrastructure.persistence.models import GroupModel, TaskModel

logger = logging.getLogger(__name__)


class SQLiteGroupStateRepository:
    """SQLite 版 GroupStateRepository 実装

    RawState をグループテーブルとタスクテーブルに展開して保存する。
    保存は常に全件置き換えで、1トランザクションで行う。
    """

    def __init__(
        self,
        session_factory: Callable[[], AbstractContextManager[Session]],
    ) -> None:
        """初期化

        Args:
            session_factory: セッション生成関数
        """
        self._session_factory = session_factory

    def load(self) -> RawState | None:
        """保存済みの状態を読み込む

        Returns:
            RawState、グループが1件も保存されていない場合は None

        Raises:
            DatabaseError: 読み込みに失敗した場合
        """
        try:
            with self._session_factory() as session:
                groups = session.exec(
                    select(GroupModel).order_by(GroupModel.position)
                ).all()
                if not groups:
                    return None
                tasks = session.exec(
                    select(TaskModel).order_by(TaskModel.position)
                ).all()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to load groups: {e}") from e

        tasks_by_group: dict[str, list[dict[str, Any]]] = {}
        for task in tasks:
            tasks_by_group.setdefault(task.group_id, []).append(
                self._task_to_raw(task)
            )

        return {
            "groups": [
                {
                    "id": group.id,
                    "name": group.name,
                    "background": {
                        "kind": group.background_kind,
                        "value": group.background_value,
                    },
                    "stats": {
                        "complete": group.complete_count,
                        "incomplete": group.incomplete_count,
                    },
                    "tasks": tasks_by_group.get(group.id, []),
                }
                for group in groups
            ]
        }

    def save(self, state: RawState) -> None:
        """状態全体を保存する

        Args:
            state: 保存する RawState

        Raises:
            DatabaseError: 保存に失敗した場合（変更はロールバックされる）
        """
        try:
            with self._session_factory() as session:
                session.execute(delete(TaskModel))
                session.execute(delete(GroupModel))
                task_position = 0
                for group_position, group in enumerate(state.get("groups", [])):
                    session.add(self._group_to_model(group, group_position))
                    for task in group.get("tasks", []):
                        session.add(
                            self._task_to_model(task, group["id"], task_position)
                        )
                        task_position += 1
                session.commit()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to save groups: {e}") from e
        logger.debug("Saved %d groups", len(state.get("groups", [])))

    @staticmethod
    def _group_to_model(group: dict[str, Any], position: int) -> GroupModel:
        background = group.get("background") or {}
        stats = group.get("stats") or {}
        return GroupModel(
            id=group["id"],
            position=position,
            name=group.get("name", ""),
            background_kind=background.get("kind", "color"),
            background_value=background.get("value", "#ffffff"),
            complete_count=stats.get("complete", 0),
            incomplete_count=stats.get("incomplete", 0),
        )

    @staticmethod
    def _task_to_model(
        task: dict[str, Any], group_id: str, position: int
    ) -> TaskModel:
        return TaskModel(
            id=task["id"],
            group_id=group_id,
            position=position,
            title=task.get("title", ""),
            completed=bool(task.get("completed", False)),
            created_at=task["createdAt"],
            completed_at=task.get("completedAt"),
            due_date=task.get("dueDate"),
            notes=task.get("notes"),
        )

    @staticmethod
    def _task_to_raw(model: TaskModel) -> dict[str, Any]:
        return {
            "id": model.id,
            "title": model.title,
            "completed": model.completed,
            "createdAt": model.created_at,
            "completedAt": model.completed_at,
            "dueDate": model.due_date,
            "notes": model.notes,
        }
