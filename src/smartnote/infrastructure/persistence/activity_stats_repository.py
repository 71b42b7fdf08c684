"""SQLite implementation of ActivityStatsRepository."""

from collections.abc import Callable
from contextlib import AbstractContextManager

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from smartnote.domain.repositories import RawActivityStats
from smartnote.infrastructure.persistence.exceptions import DatabaseError
from smartnote.infrastructure.persistence.models import ActivityStatsModel

STATS_ROW_ID = 1


class SQLiteActivityStatsRepository:
    """SQLite 版 ActivityStatsRepository 実装

    ヒストグラムは1行だけ保持し、保存のたびに上書きする。
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

    def load(self) -> RawActivityStats | None:
        """保存済みのヒストグラムを読み込む

        Raises:
            DatabaseError: 読み込みに失敗した場合
        """
        try:
            with self._session_factory() as session:
                model = session.get(ActivityStatsModel, STATS_ROW_ID)
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to load activity stats: {e}") from e
        if model is None:
            return None
        return {
            "hourly": list(model.hourly),
            "weekly": list(model.weekly),
            "lastReset": model.last_reset,
        }

    def save(self, stats: RawActivityStats) -> None:
        """ヒストグラムを保存する（upsert）

        Raises:
            DatabaseError: 保存に失敗した場合
        """
        try:
            with self._session_factory() as session:
                model = ActivityStatsModel(
                    id=STATS_ROW_ID,
                    hourly=list(stats["hourly"]),
                    weekly=list(stats["weekly"]),
                    last_reset=stats["lastReset"],
                )
                session.merge(model)
                session.commit()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to save activity stats: {e}") from e
