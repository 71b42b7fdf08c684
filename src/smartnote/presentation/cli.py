"""Command-line front end for groups, notes and statistics."""

import argparse
import json
from dataclasses import asdict, dataclass
from typing import Any

from smartnote.application.services import ActivityTracker, TaskRegistry
from smartnote.application.use_cases import NotesTransferUseCase
from smartnote.domain.entities import (
    PRESET_COLORS,
    ActivitySummary,
    Background,
    DailyRecord,
    Group,
    Task,
)
from smartnote.domain.services import StatisticsEngine


@dataclass
class App:
    """CLI から利用するサービス一式"""

    registry: TaskRegistry
    activity_tracker: ActivityTracker
    statistics: StatisticsEngine
    transfer: NotesTransferUseCase


class CommandError(Exception):
    """ユーザー入力に起因するコマンドエラー"""


class TableFormatter:
    """シンプルなテキストテーブルフォーマッター"""

    def __init__(self, max_width: int = 50) -> None:
        self._max_width = max_width

    def truncate(self, text: str, width: int | None = None) -> str:
        """テキストを指定幅で切り詰める"""
        width = width or self._max_width
        text = " ".join(text.split())
        if len(text) <= width:
            return text
        return text[: width - 3] + "..."

    def render(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: str | None = None,
    ) -> str:
        """テーブルを文字列に整形する"""
        lines: list[str] = []
        if title:
            lines.append(f"=== {title} ===")
            lines.append("")

        if not rows:
            lines.append("(no data)")
            return "\n".join(lines)

        # 列幅を計算
        widths = [len(h) for h in headers]
        for row in rows:
            for i, cell in enumerate(row):
                widths[i] = max(widths[i], len(str(cell)))

        lines.append(" | ".join(h.ljust(widths[i]) for i, h in enumerate(headers)))
        lines.append("-+-".join("-" * w for w in widths))
        for row in rows:
            lines.append(
                " | ".join(str(cell).ljust(widths[i]) for i, cell in enumerate(row))
            )
        return "\n".join(lines)


def _resolve_group(registry: TaskRegistry, ref: str) -> Group:
    """ID、グループ名、ID の前方一致の順でグループを特定する"""
    group = registry.get_group(ref)
    if group is not None:
        return group
    groups = registry.list_groups()
    matches = [g for g in groups if g.name == ref] or [
        g for g in groups if g.id.startswith(ref)
    ]
    if len(matches) == 1:
        return matches[0]
    if not matches:
        raise CommandError(f"Group not found: {ref}")
    raise CommandError(f"Ambiguous group reference: {ref}")


def _resolve_task(group: Group, ref: str) -> Task:
    """ID または ID の前方一致でタスクを特定する"""
    if ref in group.tasks:
        return group.tasks[ref]
    matches = [task for task_id, task in group.tasks.items() if task_id.startswith(ref)]
    if len(matches) == 1:
        return matches[0]
    if not matches:
        raise CommandError(f"Task not found: {ref}")
    raise CommandError(f"Ambiguous task reference: {ref}")


def _parse_background(args: argparse.Namespace) -> Background | None:
    try:
        if getattr(args, "image", None):
            return Background.image(args.image)
        if getattr(args, "color", None):
            return Background.color(args.color)
    except ValueError as e:
        raise CommandError(str(e)) from e
    return None


def _group_row(group: Group) -> dict[str, Any]:
    return {
        "id": group.id,
        "name": group.name,
        "background": {
            "kind": group.background.kind.value,
            "value": group.background.value,
        },
        "complete": group.stats.complete,
        "incomplete": group.stats.incomplete,
    }


def _task_row(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "title": task.title,
        "completed": task.completed,
        "created_at": task.created_at.isoformat(),
        "completed_at": task.completed_at.isoformat() if task.completed_at else None,
        "notes": task.notes or "",
    }


def format_groups(groups: list[Group], output_format: str) -> str:
    """グループ一覧を出力形式に変換する"""
    rows = [_group_row(group) for group in groups]
    if output_format == "json":
        return json.dumps(rows, indent=2, ensure_ascii=False)
    formatter = TableFormatter()
    return formatter.render(
        ["ID", "Name", "Background", "Done", "Open"],
        [
            [
                g["id"][:8],
                formatter.truncate(g["name"], 30),
                (
                    g["background"]["value"]
                    if g["background"]["kind"] == "color"
                    else "image"
                ),
                str(g["complete"]),
                str(g["incomplete"]),
            ]
            for g in rows
        ],
        title="Groups",
    )


def format_tasks(tasks: list[Task], output_format: str, title: str) -> str:
    """タスク一覧を出力形式に変換する"""
    rows = [_task_row(task) for task in tasks]
    if output_format == "json":
        return json.dumps(rows, indent=2, ensure_ascii=False)
    formatter = TableFormatter()
    return formatter.render(
        ["ID", "Done", "Title", "Created", "Notes (preview)"],
        [
            [
                t["id"][:8],
                "x" if t["completed"] else " ",
                formatter.truncate(t["title"], 30),
                t["created_at"][:16].replace("T", " "),
                formatter.truncate(t["notes"], 40),
            ]
            for t in rows
        ],
        title=title,
    )


def format_series(records: list[DailyRecord], output_format: str, title: str) -> str:
    """日別集計を出力形式に変換する"""
    if output_format == "json":
        return json.dumps(
            [{**asdict(r), "day": r.day.isoformat()} for r in records], indent=2
        )
    return TableFormatter().render(
        ["Day", "Created", "Completed", "Total"],
        [
            [r.day.isoformat(), str(r.created), str(r.completed), str(r.total)]
            for r in records
        ],
        title=title,
    )


def format_summary(summary: ActivitySummary, output_format: str) -> str:
    """統計サマリを出力形式に変換する"""
    if output_format == "json":
        return json.dumps(asdict(summary), indent=2)
    lines = [
        "=== Summary ===",
        "",
        f"Total notes:        {summary.total}",
        f"Completed:          {summary.completed}",
        f"Uncompleted:        {summary.uncompleted}",
        f"Completion rate:    {summary.completion_rate}%",
        f"Most active day:    {summary.most_active_weekday}",
        f"Peak activity time: {summary.peak_activity_hour}",
        f"Longest streak:     {summary.longest_streak} days",
        "",
        "Activity by 3h block: "
        + " ".join(str(v) for v in summary.hourly_activity_by_3h_block),
        "Activity by weekday:  " + " ".join(str(v) for v in summary.weekday_activity),
    ]
    return "\n".join(lines)


def create_parser() -> argparse.ArgumentParser:
    """CLIパーサーを作成"""
    parser = argparse.ArgumentParser(
        prog="smartnote",
        description="smartnote: group notes and view activity statistics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # 共通オプション
    parser.add_argument(
        "--config",
        default="config.yaml",
        help="config.yaml のパス (default: config.yaml)",
    )
    parser.add_argument(
        "--db",
        default=None,
        help="データベースファイルのパス (config より優先)",
    )
    parser.add_argument(
        "--format",
        choices=["table", "json"],
        default="table",
        help="出力形式 (default: table)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True, help="コマンド")

    subparsers.add_parser("groups", help="グループ一覧を表示")
    subparsers.add_parser("colors", help="背景色のプリセットを表示")

    create_group_parser = subparsers.add_parser("group-create", help="グループを作成")
    create_group_parser.add_argument("name", help="グループ名")
    background_group = create_group_parser.add_mutually_exclusive_group()
    background_group.add_argument("--color", help="背景色 (#RRGGBB)")
    background_group.add_argument("--image", help="背景画像の URL")

    rename_parser = subparsers.add_parser("group-rename", help="グループ名を変更")
    rename_parser.add_argument("group", help="グループ ID または名前")
    rename_parser.add_argument("name", help="新しいグループ名")

    background_parser = subparsers.add_parser(
        "group-background", help="グループの背景を変更"
    )
    background_parser.add_argument("group", help="グループ ID または名前")
    background_choice = background_parser.add_mutually_exclusive_group(required=True)
    background_choice.add_argument("--color", help="背景色 (#RRGGBB)")
    background_choice.add_argument("--image", help="背景画像の URL")

    delete_group_parser = subparsers.add_parser("group-delete", help="グループを削除")
    delete_group_parser.add_argument("group", help="グループ ID または名前")

    tasks_parser = subparsers.add_parser("tasks", help="ノート一覧を表示")
    tasks_parser.add_argument("group", help="グループ ID または名前")

    add_parser = subparsers.add_parser("add", help="ノートを追加")
    add_parser.add_argument("group", help="グループ ID または名前")
    add_parser.add_argument("title", help="タイトル")

    for name, help_text in (
        ("toggle", "ノートの完了状態を切り替え"),
        ("delete", "ノートを削除"),
    ):
        task_parser = subparsers.add_parser(name, help=help_text)
        task_parser.add_argument("group", help="グループ ID または名前")
        task_parser.add_argument("task", help="ノート ID (前方一致可)")

    complete_parser = subparsers.add_parser(
        "complete-all", help="グループ内のノートをすべて完了にする"
    )
    complete_parser.add_argument("group", help="グループ ID または名前")

    notes_parser = subparsers.add_parser("notes", help="ノート本文を表示/保存")
    notes_parser.add_argument("group", help="グループ ID または名前")
    notes_parser.add_argument("task", help="ノート ID (前方一致可)")
    notes_parser.add_argument("--set", dest="content", help="保存する本文")

    search_parser = subparsers.add_parser("search", help="ノートを検索")
    search_parser.add_argument("group", help="グループ ID または名前")
    search_parser.add_argument("query", nargs="?", default="", help="検索語")

    series_parser = subparsers.add_parser("series", help="直近7日間の集計を表示")
    series_parser.add_argument("--group", help="グループ ID または名前 (省略時は全体)")

    subparsers.add_parser("summary", help="統計サマリを表示")

    export_parser = subparsers.add_parser("export", help="ノートを JSON に書き出す")
    export_parser.add_argument("group", help="グループ ID または名前")
    export_parser.add_argument(
        "--output", default=".", help="出力先ファイルまたはディレクトリ (default: .)"
    )

    import_parser = subparsers.add_parser("import", help="JSON からノートを取り込む")
    import_parser.add_argument("group", help="グループ ID または名前")
    import_parser.add_argument("file", help="エクスポートした JSON ファイル")

    return parser


def dispatch(app: App, args: argparse.Namespace) -> str:
    """コマンドを実行し、出力する文字列を返す

    Raises:
        CommandError: グループ/ノートの指定や入力値が不正な場合
        MalformedImportError: インポートファイルが不正な場合
    """
    registry = app.registry
    output_format = args.format
    command = args.command

    if command == "groups":
        return format_groups(registry.list_groups(), output_format)

    if command == "colors":
        return "\n".join(PRESET_COLORS)

    if command == "group-create":
        name = args.name.strip()
        if not name:
            raise CommandError("Group name cannot be empty")
        group = registry.create_group(name, _parse_background(args))
        return f"Created group {group.id} ({group.name})"

    if command == "summary":
        return format_summary(app.statistics.summary(), output_format)

    if command == "series":
        if args.group is None:
            return format_series(
                app.statistics.global_daily_series(), output_format, "All groups"
            )
        group = _resolve_group(registry, args.group)
        records = app.statistics.group_daily_series(group.id) or []
        return format_series(records, output_format, group.name)

    group = _resolve_group(registry, args.group)

    if command == "group-rename":
        if not args.name.strip():
            raise CommandError("Group name cannot be empty")
        registry.rename_group(group.id, args.name)
        return f"Renamed group {group.id} to {group.name}"

    if command == "group-background":
        background = _parse_background(args)
        if background is None:
            raise CommandError("Specify --color or --image")
        registry.change_background(group.id, background)
        return f"Changed background of {group.name}"

    if command == "group-delete":
        registry.delete_group(group.id)
        return f"Deleted group {group.name}"

    if command == "tasks":
        tasks = registry.search_tasks(group.id, "")
        return format_tasks(tasks, output_format, group.name)

    if command == "search":
        tasks = registry.search_tasks(group.id, args.query)
        return format_tasks(tasks, output_format, f"{group.name}: {args.query!r}")

    if command == "add":
        task = registry.create_task(group.id, args.title)
        if task is None:
            raise CommandError(f"Group not found: {args.group}")
        return f"Added note {task.id}"

    if command == "complete-all":
        registry.mark_all_tasks_complete(group.id)
        return f"Completed all notes in {group.name}"

    if command == "export":
        path = app.transfer.write_export(group.id, args.output)
        return f"Exported notes to {path}"

    if command == "import":
        imported = app.transfer.read_import(group.id, args.file)
        return f"{len(imported)} notes have been imported successfully."

    task = _resolve_task(group, args.task)

    if command == "toggle":
        registry.toggle_task(group.id, task.id)
        state = "completed" if task.completed else "reopened"
        return f"Note {task.id} {state}"

    if command == "delete":
        registry.delete_task(group.id, task.id)
        return f"Deleted note {task.id}"

    if command == "notes":
        if args.content is not None:
            registry.save_notes(group.id, task.id, args.content)
            return f"Saved notes for {task.id}"
        return registry.get_notes(group.id, task.id)

    raise CommandError(f"Unknown command: {command}")
