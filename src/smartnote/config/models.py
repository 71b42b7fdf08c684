"""設定データクラス"""

from dataclasses import dataclass
from datetime import timedelta, tzinfo
from zoneinfo import ZoneInfo


@dataclass
class StorageConfig:
    """保存先設定"""

    database_path: str


@dataclass
class ActivityConfig:
    """利用状況ヒストグラム設定"""

    reset_days: int = 7

    @property
    def reset_window(self) -> timedelta:
        return timedelta(days=self.reset_days)


@dataclass
class DisplayConfig:
    """表示設定

    Attributes:
        timezone: 日付・時間帯の判定に使う IANA タイムゾーン名
            （None の場合はシステムのローカルタイムゾーン）
    """

    timezone: str | None = None

    @property
    def tzinfo(self) -> tzinfo | None:
        if self.timezone is None:
            return None
        return ZoneInfo(self.timezone)


@dataclass
class LoggingConfig:
    """ログ設定"""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    loggers: dict[str, str] | None = None


@dataclass
class Config:
    """アプリケーション設定"""

    storage: StorageConfig
    activity: ActivityConfig
    display: DisplayConfig
    logging: LoggingConfig | None = None
