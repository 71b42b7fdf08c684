"""Task entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import uuid4


def generate_id() -> str:
    """衝突しない ID を生成する"""
    return uuid4().hex


@dataclass
class Task:
    """タスク（ノート）エンティティ

    completed_at は completed が True の場合のみ値を持つ。
    状態の変更は所属する Group を経由して行うこと（統計値の整合性のため）。

    Attributes:
        id: タスクの一意識別子
        title: タイトル
        completed: 完了状態
        created_at: 作成日時
        completed_at: 完了日時（未完了の場合は None）
        due_date: 期限（未設定の場合は None）
        notes: ノート本文（未設定の場合は None）
    """

    id: str
    title: str
    created_at: datetime
    completed: bool = False
    completed_at: datetime | None = None
    due_date: datetime | None = None
    notes: str | None = None

    def __post_init__(self) -> None:
        """バリデーション"""
        if self.completed != (self.completed_at is not None):
            raise ValueError("completed_at must be set if and only if completed")
        if self.completed_at is not None and self.completed_at < self.created_at:
            raise ValueError("completed_at must not be earlier than created_at")

    def matches(self, query: str) -> bool:
        """タイトルまたはノートが検索語を含むか（大文字小文字を区別しない）"""
        needle = query.lower()
        return needle in self.title.lower() or needle in (self.notes or "").lower()


def create_task(title: str, now: datetime) -> Task:
    """未完了の Task エンティティを生成する

    Args:
        title: タイトル
        now: 作成日時

    Returns:
        Task エンティティ
    """
    return Task(id=generate_id(), title=title, created_at=now)
