"""ActivityTracker for recording usage histograms."""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, tzinfo
from enum import Enum

from smartnote.domain.datetime_utils import now_local, sunday_based_weekday, to_local
from smartnote.domain.entities import ActivityStats
from smartnote.domain.entities.activity_stats import DEFAULT_RESET_WINDOW
from smartnote.domain.repositories import ActivityStatsRepository
from smartnote.domain.services.state_codec import (
    deserialize_activity_stats,
    serialize_activity_stats,
)
from smartnote.infrastructure.persistence.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class ActivityAction(Enum):
    """記録対象のユーザー操作"""

    CREATE = "create"
    UPDATE = "update"


class ActivityTracker:
    """利用状況ヒストグラムの記録

    タスクデータとは独立したライフサイクルを持ち、独自のリポジトリで永続化する。
    使用前に initialize() を呼び出すこと。
    """

    def __init__(
        self,
        repository: ActivityStatsRepository,
        reset_window: timedelta = DEFAULT_RESET_WINDOW,
        tz: tzinfo | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """初期化

        Args:
            repository: ヒストグラムの永続化先
            reset_window: ヒストグラムをリセットするまでの期間
            tz: 時間帯・曜日の判定に使うタイムゾーン
            clock: 現在時刻を返す関数
        """
        self._repository = repository
        self._reset_window = reset_window
        self._tz = tz
        self._clock = clock or (lambda: now_local(tz))
        self._stats: ActivityStats | None = None

    @property
    def initialized(self) -> bool:
        return self._stats is not None

    def initialize(self) -> None:
        """保存済みのヒストグラムを読み込む

        未保存の場合はゼロで初期化して保存する。
        """
        now = self._clock()
        stats = deserialize_activity_stats(self._repository.load(), now)
        if stats is None:
            logger.info("No activity stats found, starting fresh")
            self._stats = ActivityStats(last_reset=now)
            self._save()
            return
        self._stats = stats

    @property
    def stats(self) -> ActivityStats:
        """現在のヒストグラムのコピー

        Raises:
            RuntimeError: initialize() が呼ばれていない場合
        """
        return self._require_stats().copy()

    def _require_stats(self) -> ActivityStats:
        if self._stats is None:
            raise RuntimeError("ActivityTracker is not initialized")
        return self._stats

    def record_event(self, action: ActivityAction) -> None:
        """ユーザー操作を1件記録する

        リセット期間を過ぎていれば両方のヒストグラムをゼロに戻してから
        現在の時間帯と曜日をカウントする。

        Args:
            action: 記録する操作
        """
        stats = self._require_stats()
        now = self._clock()
        if stats.is_expired(now, self._reset_window):
            logger.info("Resetting activity stats (last reset: %s)", stats.last_reset)
            stats.reset(now)

        local_now = to_local(now, self._tz)
        stats.increment(local_now.hour, sunday_based_weekday(local_now))
        logger.debug(
            "Recorded %s activity at hour=%d weekday=%d",
            action.value,
            local_now.hour,
            sunday_based_weekday(local_now),
        )
        self._save()

    def _save(self) -> None:
        try:
            self._repository.save(serialize_activity_stats(self._require_stats()))
        except PersistenceError:
            logger.exception("Failed to save activity stats")
