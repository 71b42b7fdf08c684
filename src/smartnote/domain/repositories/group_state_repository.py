"""GroupStateRepository Protocol."""

from typing import Any, Protocol

RawState = dict[str, Any]


class GroupStateRepository(Protocol):
    """グループとタスクの永続化ゲートウェイ

    ドメインモデル全体をシリアライズした RawState を丸ごと読み書きする。
    """

    def load(self) -> RawState | None:
        """保存済みの状態を読み込む

        Returns:
            RawState、または未保存の場合 None
        """
        ...

    def save(self, state: RawState) -> None:
        """状態全体を保存する（既存の内容は置き換える）

        Args:
            state: 保存する RawState

        Raises:
            PersistenceError: 保存に失敗した場合
        """
        ...
