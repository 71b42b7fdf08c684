"""SQLModel table definitions."""

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class GroupModel(SQLModel, table=True):
    """グループテーブル"""

    __tablename__ = "groups"

    id: str = Field(primary_key=True)
    position: int = Field(index=True)
    name: str
    background_kind: str = "color"
    background_value: str = "#ffffff"
    complete_count: int = 0
    incomplete_count: int = 0


class TaskModel(SQLModel, table=True):
    """タスクテーブル"""

    __tablename__ = "tasks"

    id: str = Field(primary_key=True)
    group_id: str = Field(index=True)
    position: int
    title: str
    completed: bool = False
    created_at: str  # ISO-8601
    completed_at: str | None = None
    due_date: str | None = None
    notes: str | None = None


class ActivityStatsModel(SQLModel, table=True):
    """利用状況ヒストグラムテーブル（常に1行）"""

    __tablename__ = "activity_stats"

    id: int = Field(default=1, primary_key=True)
    hourly: list[int] = Field(sa_column=Column(JSON, nullable=False))
    weekly: list[int] = Field(sa_column=Column(JSON, nullable=False))
    last_reset: str  # ISO-8601
