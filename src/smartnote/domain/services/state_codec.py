"""Conversion between domain entities and their persisted raw form.

Malformed or missing fields fall back to defaults instead of raising,
so a partially corrupt state still loads.
"""

import logging
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from smartnote.domain.entities.activity_stats import (
    DAYS_PER_WEEK,
    HOURS_PER_DAY,
    ActivityStats,
)
from smartnote.domain.entities.background import (
    Background,
    BackgroundKind,
    default_background,
)
from smartnote.domain.entities.group import Group, GroupStats
from smartnote.domain.entities.task import Task
from smartnote.domain.repositories import RawActivityStats, RawState

logger = logging.getLogger(__name__)


def format_timestamp(dt: datetime | None) -> str | None:
    """datetime を ISO-8601 文字列に変換する"""
    if dt is None:
        return None
    return dt.isoformat()


def parse_timestamp(value: Any) -> datetime | None:
    """ISO-8601 文字列を datetime に変換する

    naive な値はシステムのローカル時刻として扱う。
    解釈できない値は None を返す。
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value:
        try:
            dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt


def serialize_background(background: Background) -> dict[str, str]:
    return {"kind": background.kind.value, "value": background.value}


def deserialize_background(raw: Any) -> Background:
    """背景を復元する（不正な値はデフォルトの白）"""
    if not isinstance(raw, dict):
        return default_background()
    kind = raw.get("kind", raw.get("type"))
    try:
        return Background(kind=BackgroundKind(kind), value=str(raw.get("value", "")))
    except ValueError:
        logger.warning("Invalid background %r, using default", raw)
        return default_background()


def serialize_task(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "title": task.title,
        "completed": task.completed,
        "createdAt": format_timestamp(task.created_at),
        "completedAt": format_timestamp(task.completed_at),
        "dueDate": format_timestamp(task.due_date),
        "notes": task.notes,
    }


def deserialize_task(raw: Any, now: datetime) -> Task | None:
    """タスクを復元する

    Args:
        raw: 保存されたタスク
        now: createdAt が欠落している場合に使う日時

    Returns:
        Task、または ID がなく復元できない場合 None
    """
    if not isinstance(raw, dict) or not isinstance(raw.get("id"), str):
        logger.warning("Skipping task without id: %r", raw)
        return None

    created_at = parse_timestamp(raw.get("createdAt")) or now
    completed = raw.get("completed") is True
    completed_at = parse_timestamp(raw.get("completedAt")) if completed else None
    if completed:
        completed_at = max(completed_at or created_at, created_at)

    title = raw.get("title")
    notes = raw.get("notes")
    return Task(
        id=raw["id"],
        title=title if isinstance(title, str) else "",
        created_at=created_at,
        completed=completed,
        completed_at=completed_at,
        due_date=parse_timestamp(raw.get("dueDate")),
        notes=notes if isinstance(notes, str) else None,
    )


def serialize_group(group: Group) -> dict[str, Any]:
    return {
        "id": group.id,
        "name": group.name,
        "background": serialize_background(group.background),
        "stats": {
            "complete": group.stats.complete,
            "incomplete": group.stats.incomplete,
        },
        "tasks": [serialize_task(task) for task in group.tasks.values()],
    }


def deserialize_group(raw: Any, now: datetime) -> Group | None:
    """グループを復元する

    保存された stats は信用せず、復元したタスクから数え直す。
    """
    if not isinstance(raw, dict) or not isinstance(raw.get("id"), str):
        logger.warning("Skipping group without id: %r", raw)
        return None

    name = raw.get("name")
    group = Group(
        id=raw["id"],
        name=name if isinstance(name, str) else "",
        background=deserialize_background(raw.get("background")),
    )

    raw_tasks = raw.get("tasks")
    if isinstance(raw_tasks, dict):
        raw_tasks = list(raw_tasks.values())
    if not isinstance(raw_tasks, list):
        raw_tasks = []

    for raw_task in raw_tasks:
        task = deserialize_task(raw_task, now)
        if task is None:
            continue
        if task.id in group.tasks:
            logger.warning("Skipping duplicate task %s in group %s", task.id, group.id)
            continue
        group.add_task(task)

    stored = raw.get("stats")
    if isinstance(stored, dict):
        stored_stats = GroupStats(
            complete=stored.get("complete", 0), incomplete=stored.get("incomplete", 0)
        )
        if stored_stats != group.stats:
            logger.warning(
                "Stats drift in group %s: stored=%s, actual=%s",
                group.id,
                stored_stats,
                group.stats,
            )
    return group


def serialize_groups(groups: Iterable[Group]) -> RawState:
    """グループ全体を RawState に変換する"""
    return {"groups": [serialize_group(group) for group in groups]}


def deserialize_groups(raw: RawState | None, now: datetime) -> list[Group]:
    """RawState からグループを復元する

    Args:
        raw: 保存された状態（None や不正な値は空として扱う）
        now: createdAt が欠落したタスクに使う日時

    Returns:
        復元したグループのリスト（保存順）
    """
    if not isinstance(raw, dict):
        return []
    raw_groups = raw.get("groups")
    if not isinstance(raw_groups, list):
        return []

    groups: list[Group] = []
    seen: set[str] = set()
    for raw_group in raw_groups:
        group = deserialize_group(raw_group, now)
        if group is None or group.id in seen:
            continue
        seen.add(group.id)
        groups.append(group)
    return groups


def serialize_activity_stats(stats: ActivityStats) -> RawActivityStats:
    return {
        "hourly": list(stats.hourly),
        "weekly": list(stats.weekly),
        "lastReset": format_timestamp(stats.last_reset),
    }


def _parse_buckets(value: Any, size: int) -> list[int] | None:
    if not isinstance(value, list) or len(value) != size:
        return None
    if not all(
        isinstance(v, int) and not isinstance(v, bool) and v >= 0 for v in value
    ):
        return None
    return list(value)


def deserialize_activity_stats(
    raw: RawActivityStats | None, now: datetime
) -> ActivityStats | None:
    """ヒストグラムを復元する

    Args:
        raw: 保存されたヒストグラム
        now: lastReset が欠落している場合に使う日時

    Returns:
        ActivityStats、または未保存の場合 None。
        バケットが不正な場合はゼロで初期化したものを返す。
    """
    if not isinstance(raw, dict):
        return None

    last_reset = parse_timestamp(raw.get("lastReset")) or now
    hourly = _parse_buckets(raw.get("hourly"), HOURS_PER_DAY)
    weekly = _parse_buckets(raw.get("weekly"), DAYS_PER_WEEK)
    if hourly is None or weekly is None:
        logger.warning("Malformed activity stats, resetting to zeros")
        return ActivityStats(last_reset=last_reset)
    return ActivityStats(last_reset=last_reset, hourly=hourly, weekly=weekly)
