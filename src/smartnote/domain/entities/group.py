"""Group entity."""

from dataclasses import dataclass, field
from datetime import datetime

from smartnote.domain.entities.background import Background, default_background
from smartnote.domain.entities.task import Task, generate_id


@dataclass
class GroupStats:
    """グループ内タスクの完了/未完了件数

    Attributes:
        complete: 完了タスク数
        incomplete: 未完了タスク数
    """

    complete: int = 0
    incomplete: int = 0

    @property
    def total(self) -> int:
        """タスク総数"""
        return self.complete + self.incomplete


@dataclass
class Group:
    """グループエンティティ

    タスクを排他的に所有する。stats はタスク操作のたびに差分更新され、
    常にタスク集合と一致する。タスクの追加・完了状態の変更・削除は
    必ずこのクラスのメソッドを経由すること。

    Attributes:
        id: グループの一意識別子
        name: グループ名
        background: 背景
        tasks: タスク ID からタスクへのマップ
        stats: 完了/未完了件数
    """

    id: str
    name: str
    background: Background = field(default_factory=default_background)
    tasks: dict[str, Task] = field(default_factory=dict)
    stats: GroupStats = field(default_factory=GroupStats)

    def add_task(self, task: Task) -> None:
        """タスクを追加する

        Args:
            task: 追加するタスク

        Raises:
            ValueError: 同じ ID のタスクが既に存在する場合
        """
        if task.id in self.tasks:
            raise ValueError(f"Task {task.id} already exists in group {self.id}")
        self.tasks[task.id] = task
        self._apply_stats_delta(task.completed, 1)

    def remove_task(self, task_id: str) -> Task | None:
        """タスクを削除する

        Args:
            task_id: 削除するタスクの ID

        Returns:
            削除したタスク（存在しない場合は None）
        """
        task = self.tasks.pop(task_id, None)
        if task is not None:
            self._apply_stats_delta(task.completed, -1)
        return task

    def set_completed(self, task: Task, completed: bool, now: datetime) -> bool:
        """タスクの完了状態を変更する

        Args:
            task: 対象タスク（このグループに属すること）
            completed: 新しい完了状態
            now: 完了日時として記録する時刻

        Returns:
            状態が変化した場合 True
        """
        if task.completed == completed:
            return False
        # Increment the new bucket before decrementing the old one
        self._apply_stats_delta(completed, 1)
        self._apply_stats_delta(task.completed, -1)
        task.completed = completed
        task.completed_at = max(now, task.created_at) if completed else None
        return True

    def _apply_stats_delta(self, completed: bool, delta: int) -> None:
        if completed:
            self.stats.complete += delta
        else:
            self.stats.incomplete += delta

    def recount_stats(self) -> GroupStats:
        """タスク集合から件数を数え直す（stats は変更しない）"""
        complete = sum(1 for task in self.tasks.values() if task.completed)
        return GroupStats(complete=complete, incomplete=len(self.tasks) - complete)


def create_group(name: str, background: Background | None = None) -> Group:
    """Group エンティティを生成する

    Args:
        name: グループ名
        background: 背景（省略時は白）

    Returns:
        タスクが空の Group エンティティ
    """
    return Group(
        id=generate_id(),
        name=name,
        background=background or default_background(),
    )
