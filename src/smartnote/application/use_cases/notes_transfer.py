"""NotesTransferUseCase for exporting and importing a group's notes."""

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from smartnote.application.services.registry import TaskRegistry
from smartnote.domain.entities import Task
from smartnote.domain.exceptions import MalformedImportError
from smartnote.domain.services.state_codec import format_timestamp

logger = logging.getLogger(__name__)

WHITESPACE_PATTERN = re.compile(r"\s+")


@dataclass(frozen=True)
class ImportedNote:
    """検証済みのインポート対象ノート

    Attributes:
        title: タイトル
        notes: ノート本文
    """

    title: str
    notes: str


def export_filename(group_name: str) -> str:
    """エクスポートファイル名を返す（例: "My Ideas" -> "my-ideas-notes.json"）"""
    slug = WHITESPACE_PATTERN.sub("-", group_name.lower())
    return f"{slug}-notes.json"


def parse_import_payload(payload: Any) -> list[ImportedNote]:
    """インポートデータを検証する

    Args:
        payload: {"groupName": ..., "notes": [{"title": ..., "notes": ...}]} 形式

    Returns:
        検証済みのノートのリスト

    Raises:
        MalformedImportError: 形式が不正な場合
    """
    if not isinstance(payload, dict):
        raise MalformedImportError("top-level value must be an object")
    entries = payload.get("notes")
    if not isinstance(entries, list):
        raise MalformedImportError("'notes' must be a list")

    notes: list[ImportedNote] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise MalformedImportError(f"notes[{index}] must be an object")
        title = entry.get("title")
        if not isinstance(title, str):
            raise MalformedImportError(f"notes[{index}].title must be a string")
        content = entry.get("notes")
        if content is None:
            content = ""
        if not isinstance(content, str):
            raise MalformedImportError(f"notes[{index}].notes must be a string")
        notes.append(ImportedNote(title=title, notes=content))
    return notes


class NotesTransferUseCase:
    """グループのノートをファイルとやり取りするユースケース

    インポートは全件を検証してから適用するため、不正なデータで
    一部だけ取り込まれることはない。
    """

    def __init__(self, registry: TaskRegistry) -> None:
        """初期化

        Args:
            registry: タスクの登録先
        """
        self._registry = registry

    def export_group(self, group_id: str) -> dict[str, Any] | None:
        """グループのノートをエクスポート形式に変換する

        Args:
            group_id: グループ ID

        Returns:
            エクスポートデータ、グループが存在しない場合は None
        """
        group = self._registry.get_group(group_id)
        if group is None:
            return None
        return {
            "groupName": group.name,
            "notes": [
                {
                    "title": task.title,
                    "notes": task.notes or "",
                    "createdAt": format_timestamp(task.created_at),
                    "completedAt": format_timestamp(task.completed_at),
                }
                for task in group.tasks.values()
            ],
        }

    def import_notes(self, group_id: str, payload: Any) -> list[Task]:
        """ノートをグループに取り込む

        各ノートごとにタスクを作成し、本文を保存する。
        作成日時はインポート時点になる。

        Args:
            group_id: 取り込み先のグループ ID
            payload: エクスポート形式のデータ

        Returns:
            作成したタスク（グループが存在しない場合は空）

        Raises:
            MalformedImportError: 形式が不正な場合（タスクは作成されない）
        """
        notes = parse_import_payload(payload)
        if self._registry.get_group(group_id) is None:
            return []

        created: list[Task] = []
        for note in notes:
            task = self._registry.create_task(group_id, note.title)
            if task is None:
                continue
            self._registry.save_notes(group_id, task.id, note.notes)
            created.append(task)
        logger.info("Imported %d notes into group %s", len(created), group_id)
        return created

    def write_export(self, group_id: str, path: str | Path) -> Path | None:
        """グループのノートを JSON ファイルに書き出す

        Args:
            group_id: グループ ID
            path: 出力先（ディレクトリの場合はグループ名からファイル名を決める）

        Returns:
            書き出したファイルのパス、グループが存在しない場合は None
        """
        data = self.export_group(group_id)
        if data is None:
            return None
        path = Path(path)
        if path.is_dir():
            path = path / export_filename(data["groupName"])
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        logger.info("Exported %d notes to %s", len(data["notes"]), path)
        return path

    def read_import(self, group_id: str, path: str | Path) -> list[Task]:
        """JSON ファイルからノートを取り込む

        Raises:
            MalformedImportError: JSON として読めない、または形式が不正な場合
        """
        try:
            with open(path, encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedImportError(f"cannot read {path}: {e}") from e
        return self.import_notes(group_id, payload)
