"""Domain exceptions."""


class SmartNoteError(Exception):
    """smartnote の基底例外"""


class MalformedImportError(SmartNoteError):
    """インポートデータの形式が不正な場合に発生する例外

    ノートの一括インポートは全件を検証してから適用するため、
    この例外が発生した場合はタスクは一件も作成されていない。
    """

    def __init__(self, reason: str) -> None:
        """初期化

        Args:
            reason: 不正と判断した理由
        """
        self.reason = reason
        super().__init__(f"Invalid notes file: {reason}")
