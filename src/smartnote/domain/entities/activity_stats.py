"""ActivityStats entity for usage histograms."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta

HOURS_PER_DAY = 24
DAYS_PER_WEEK = 7
DEFAULT_RESET_WINDOW = timedelta(days=7)


@dataclass
class ActivityStats:
    """利用状況のヒストグラム

    タスク作成やノート保存などの操作を、時間帯（0-23時）と
    曜日（日曜=0）ごとに集計する。last_reset から一定期間が経過すると
    ゼロに戻る（スライディングではなく単純なローリングウィンドウ）。

    Attributes:
        last_reset: 最後にリセットした日時
        hourly: 時間帯ごとの操作回数（24要素）
        weekly: 曜日ごとの操作回数（7要素、日曜始まり）
    """

    last_reset: datetime
    hourly: list[int] = field(default_factory=lambda: [0] * HOURS_PER_DAY)
    weekly: list[int] = field(default_factory=lambda: [0] * DAYS_PER_WEEK)

    def __post_init__(self) -> None:
        """バリデーション"""
        if len(self.hourly) != HOURS_PER_DAY:
            raise ValueError(f"hourly must have {HOURS_PER_DAY} buckets")
        if len(self.weekly) != DAYS_PER_WEEK:
            raise ValueError(f"weekly must have {DAYS_PER_WEEK} buckets")

    def is_expired(
        self, now: datetime, window: timedelta = DEFAULT_RESET_WINDOW
    ) -> bool:
        """リセット期間を過ぎているか"""
        return now - self.last_reset > window

    def reset(self, now: datetime) -> None:
        """両方のヒストグラムをゼロに戻す"""
        self.hourly = [0] * HOURS_PER_DAY
        self.weekly = [0] * DAYS_PER_WEEK
        self.last_reset = now

    def increment(self, hour: int, weekday: int) -> None:
        """指定の時間帯と曜日のカウントを1増やす

        Args:
            hour: 時間帯（0-23）
            weekday: 曜日（0=日曜 - 6=土曜）
        """
        self.hourly[hour] += 1
        self.weekly[weekday] += 1

    def copy(self) -> "ActivityStats":
        """独立したコピーを返す"""
        return ActivityStats(
            last_reset=self.last_reset,
            hourly=list(self.hourly),
            weekly=list(self.weekly),
        )
