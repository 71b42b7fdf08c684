"""ActivityStatsRepository Protocol."""

from typing import Any, Protocol

RawActivityStats = dict[str, Any]


class ActivityStatsRepository(Protocol):
    """利用状況ヒストグラムの永続化ゲートウェイ

    グループの永続化とは独立したチャネルで読み書きする。
    """

    def load(self) -> RawActivityStats | None:
        """保存済みのヒストグラムを読み込む

        Returns:
            RawActivityStats、または未保存の場合 None
        """
        ...

    def save(self, stats: RawActivityStats) -> None:
        """ヒストグラムを保存する

        Args:
            stats: 保存する RawActivityStats

        Raises:
            PersistenceError: 保存に失敗した場合
        """
        ...
