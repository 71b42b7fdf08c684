"""Statistics result entities."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DailyRecord:
    """1日分のタスク集計

    Attributes:
        day: 対象日（ローカル日付）
        created: その日に作成されたタスク数
        completed: その日に完了したタスク数
        total: その日の終わりまでに作成されたタスクの累計
    """

    day: date
    created: int
    completed: int
    total: int


@dataclass(frozen=True)
class ActivitySummary:
    """全体の統計サマリ

    Attributes:
        total: タスク総数
        completed: 完了タスク数
        uncompleted: 未完了タスク数
        completion_rate: 完了率（0-100 の整数、四捨五入）
        most_active_weekday: 最も操作の多い曜日名
        peak_activity_hour: 最も操作の多い時間帯（例: "3pm"）
        longest_streak: タスク作成日の最長連続日数
        hourly_activity_by_3h_block: 3時間ごとの操作回数（8要素）
        weekday_activity: 曜日ごとの操作回数（7要素、日曜始まり）
    """

    total: int
    completed: int
    uncompleted: int
    completion_rate: int
    most_active_weekday: str
    peak_activity_hour: str
    longest_streak: int
    hourly_activity_by_3h_block: list[int]
    weekday_activity: list[int]
