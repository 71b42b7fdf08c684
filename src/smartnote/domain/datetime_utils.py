"""Datetime utilities for calendar-based statistics."""

from datetime import date, datetime, time, tzinfo

WEEKDAY_NAMES: tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


def now_local(tz: tzinfo | None = None) -> datetime:
    """タイムゾーン付きの現在時刻を返す

    Args:
        tz: タイムゾーン（None の場合はシステムのローカルタイムゾーン）
    """
    if tz is None:
        return datetime.now().astimezone()
    return datetime.now(tz)


def to_local(dt: datetime, tz: tzinfo | None = None) -> datetime:
    """datetime を指定タイムゾーンに変換する

    naive な datetime はシステムのローカル時刻として扱う。
    """
    return dt.astimezone(tz)


def local_date(dt: datetime, tz: tzinfo | None = None) -> date:
    """datetime のローカル日付を返す"""
    return to_local(dt, tz).date()


def end_of_day(day: date, tz: tzinfo | None = None) -> datetime:
    """指定日の終わり（23:59:59.999999）を返す"""
    end = datetime.combine(day, time.max)
    if tz is None:
        return end.astimezone()
    return end.replace(tzinfo=tz)


def sunday_based_weekday(dt: datetime) -> int:
    """曜日を日曜=0 として返す"""
    return (dt.weekday() + 1) % 7


def format_hour_label(hour: int) -> str:
    """0-23 の時間を 12 時間表記に変換する（例: 0 -> "12am", 15 -> "3pm"）"""
    suffix = "am" if hour < 12 else "pm"
    return f"{hour % 12 or 12}{suffix}"
