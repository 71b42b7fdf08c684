"""Statistics engine for activity series, completion rates and streaks."""

from collections.abc import Callable, Iterable
from datetime import date, datetime, timedelta, tzinfo

from smartnote.domain.datetime_utils import (
    WEEKDAY_NAMES,
    end_of_day,
    format_hour_label,
    local_date,
    now_local,
)
from smartnote.domain.entities import ActivitySummary, DailyRecord, Task
from smartnote.domain.services.protocols import ActivitySource, GroupSource

SERIES_DAYS = 7
HOURS_PER_BLOCK = 3


def completion_rate(completed: int, total: int) -> int:
    """完了率をパーセントの整数で返す（0.5 は切り上げ、タスクなしは 0）"""
    if total <= 0:
        return 0
    return (200 * completed + total) // (2 * total)


def index_of_max(values: list[int]) -> int:
    """最大値の位置を返す（同値の場合は最小のインデックス）"""
    return max(range(len(values)), key=lambda i: (values[i], -i))


def longest_streak(days: Iterable[date]) -> int:
    """連続した日付の最長日数を返す

    Args:
        days: 日付の集合（重複・順不同可）

    Returns:
        最長の連続日数（日付がなければ 0）
    """
    best = 0
    streak = 0
    previous: date | None = None
    for day in sorted(set(days)):
        if previous is not None and day - previous == timedelta(days=1):
            streak += 1
        else:
            streak = 1
        best = max(best, streak)
        previous = day
    return best


def group_into_blocks(hourly: list[int], size: int = HOURS_PER_BLOCK) -> list[int]:
    """時間帯ごとの値を size 時間ごとのブロックに合算する"""
    return [sum(hourly[i : i + size]) for i in range(0, len(hourly), size)]


class StatisticsEngine:
    """グループとタスクの統計を計算する

    すべて読み取り専用で、状態の変更や永続化は行わない。
    日付の判定は 24 時間幅ではなく、指定タイムゾーンのカレンダー日付で行う。
    """

    def __init__(
        self,
        groups: GroupSource,
        activity: ActivitySource,
        tz: tzinfo | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """初期化

        Args:
            groups: グループの取得元
            activity: 利用状況ヒストグラムの取得元
            tz: 日付判定に使うタイムゾーン（None の場合はシステムのローカル）
            clock: 現在時刻を返す関数
        """
        self._groups = groups
        self._activity = activity
        self._tz = tz
        self._clock = clock or (lambda: now_local(tz))

    def _series_days(self) -> list[date]:
        today = local_date(self._clock(), self._tz)
        return [
            today - timedelta(days=offset) for offset in range(SERIES_DAYS - 1, -1, -1)
        ]

    def _daily_series(self, tasks: list[Task]) -> list[DailyRecord]:
        created_days = [local_date(task.created_at, self._tz) for task in tasks]
        completed_days = [
            local_date(task.completed_at, self._tz)
            for task in tasks
            if task.completed_at is not None
        ]

        records: list[DailyRecord] = []
        for day in self._series_days():
            day_end = end_of_day(day, self._tz)
            records.append(
                DailyRecord(
                    day=day,
                    created=created_days.count(day),
                    completed=completed_days.count(day),
                    total=sum(1 for task in tasks if task.created_at <= day_end),
                )
            )
        return records

    def _all_tasks(self) -> list[Task]:
        return [
            task
            for group in self._groups.list_groups()
            for task in group.tasks.values()
        ]

    def group_daily_series(self, group_id: str) -> list[DailyRecord] | None:
        """グループの直近7日間の集計を返す

        Args:
            group_id: グループ ID

        Returns:
            古い順に並んだ7日分の DailyRecord、グループがなければ None
        """
        group = self._groups.get_group(group_id)
        if group is None:
            return None
        return self._daily_series(list(group.tasks.values()))

    def global_daily_series(self) -> list[DailyRecord]:
        """全グループを合算した直近7日間の集計を返す"""
        return self._daily_series(self._all_tasks())

    def longest_streak(self) -> int:
        """タスクが作成された日付の最長連続日数を返す"""
        return longest_streak(
            local_date(task.created_at, self._tz) for task in self._all_tasks()
        )

    def summary(self) -> ActivitySummary:
        """全体の統計サマリを返す"""
        tasks = self._all_tasks()
        total = len(tasks)
        completed = sum(1 for task in tasks if task.completed)
        activity = self._activity.stats

        return ActivitySummary(
            total=total,
            completed=completed,
            uncompleted=total - completed,
            completion_rate=completion_rate(completed, total),
            most_active_weekday=WEEKDAY_NAMES[index_of_max(activity.weekly)],
            peak_activity_hour=format_hour_label(index_of_max(activity.hourly)),
            longest_streak=self.longest_streak(),
            hourly_activity_by_3h_block=group_into_blocks(activity.hourly),
            weekday_activity=list(activity.weekly),
        )
