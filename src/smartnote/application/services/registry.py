"""TaskRegistry: CRUD over groups and tasks with persistence."""

import logging
from collections.abc import Callable
from datetime import datetime

from smartnote.application.services.activity_tracker import (
    ActivityAction,
    ActivityTracker,
)
from smartnote.domain.datetime_utils import now_local
from smartnote.domain.entities import (
    Background,
    Group,
    Task,
    create_group,
    create_task,
)
from smartnote.domain.repositories import GroupStateRepository
from smartnote.domain.services.state_codec import deserialize_groups, serialize_groups
from smartnote.infrastructure.persistence.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class TaskRegistry:
    """グループとタスクの管理

    グループを排他的に所有し、変更のたびにモデル全体を同期的に保存する。
    存在しないグループ/タスクを指定した操作は例外を出さず何もしない。
    """

    def __init__(
        self,
        repository: GroupStateRepository,
        activity_tracker: ActivityTracker,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """初期化

        Args:
            repository: グループ状態の永続化先
            activity_tracker: ユーザー操作の記録先
            clock: 現在時刻を返す関数
        """
        self._repository = repository
        self._activity_tracker = activity_tracker
        self._clock = clock or now_local
        self._groups: dict[str, Group] = {}

    def load(self) -> None:
        """保存済みの状態からモデルを構築する（未保存なら空）"""
        groups = deserialize_groups(self._repository.load(), self._clock())
        self._groups = {group.id: group for group in groups}
        logger.info("Loaded %d groups", len(self._groups))

    def _save(self) -> None:
        try:
            self._repository.save(serialize_groups(self._groups.values()))
        except PersistenceError:
            logger.exception("Failed to save groups; keeping in-memory state")

    # -- queries --

    def list_groups(self) -> list[Group]:
        return list(self._groups.values())

    def get_group(self, group_id: str) -> Group | None:
        return self._groups.get(group_id)

    def get_task(self, group_id: str, task_id: str) -> Task | None:
        group = self._groups.get(group_id)
        if group is None:
            return None
        return group.tasks.get(task_id)

    def get_notes(self, group_id: str, task_id: str) -> str:
        """タスクのノート本文を返す（存在しない場合は空文字）"""
        task = self.get_task(group_id, task_id)
        if task is None:
            return ""
        return task.notes or ""

    def search_tasks(self, group_id: str, query: str) -> list[Task]:
        """グループ内のタスクをタイトルとノートで検索する

        Args:
            group_id: グループ ID
            query: 検索語（大文字小文字を区別しない、空なら全件）

        Returns:
            作成日時の新しい順に並んだタスク
        """
        group = self._groups.get(group_id)
        if group is None:
            return []
        query = query.strip()
        tasks = [
            task for task in group.tasks.values() if not query or task.matches(query)
        ]
        return sorted(tasks, key=lambda task: task.created_at, reverse=True)

    # -- group mutations --

    def create_group(self, name: str, background: Background | None = None) -> Group:
        """グループを作成する

        Args:
            name: グループ名
            background: 背景（省略時は白）

        Returns:
            作成したグループ
        """
        group = create_group(name, background)
        self._groups[group.id] = group
        logger.debug("Created group %s (%s)", group.id, name)
        self._save()
        return group

    def rename_group(self, group_id: str, name: str) -> None:
        """グループ名を変更する（空白のみの名前は無視する）"""
        group = self._groups.get(group_id)
        name = name.strip()
        if group is None or not name:
            return
        group.name = name
        self._save()

    def change_background(self, group_id: str, background: Background) -> None:
        """グループの背景を変更する"""
        group = self._groups.get(group_id)
        if group is None:
            return
        group.background = background
        self._save()

    def delete_group(self, group_id: str) -> None:
        """グループを所属タスクごと削除する"""
        if self._groups.pop(group_id, None) is None:
            return
        logger.debug("Deleted group %s", group_id)
        self._save()

    # -- task mutations --

    def create_task(self, group_id: str, title: str) -> Task | None:
        """タスクを作成する

        Args:
            group_id: 追加先のグループ ID
            title: タイトル

        Returns:
            作成したタスク、グループが存在しない場合は None
        """
        group = self._groups.get(group_id)
        if group is None:
            return None
        task = create_task(title, self._clock())
        group.add_task(task)
        logger.debug("Created task %s in group %s", task.id, group_id)
        self._activity_tracker.record_event(ActivityAction.CREATE)
        self._save()
        return task

    def toggle_task(self, group_id: str, task_id: str) -> None:
        """タスクの完了状態を反転する"""
        group = self._groups.get(group_id)
        if group is None:
            return
        task = group.tasks.get(task_id)
        if task is None:
            return
        group.set_completed(task, not task.completed, self._clock())
        self._save()

    def mark_all_tasks_complete(self, group_id: str) -> None:
        """グループ内の未完了タスクをすべて完了にする"""
        group = self._groups.get(group_id)
        if group is None:
            return
        now = self._clock()
        for task in group.tasks.values():
            group.set_completed(task, True, now)
        self._save()

    def delete_task(self, group_id: str, task_id: str) -> None:
        """タスクを削除する"""
        group = self._groups.get(group_id)
        if group is None or group.remove_task(task_id) is None:
            return
        logger.debug("Deleted task %s from group %s", task_id, group_id)
        self._save()

    def save_notes(self, group_id: str, task_id: str, content: str) -> None:
        """タスクのノート本文を上書き保存する"""
        task = self.get_task(group_id, task_id)
        if task is None:
            return
        task.notes = content
        self._activity_tracker.record_event(ActivityAction.UPDATE)
        self._save()
