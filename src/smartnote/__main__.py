"""アプリケーションのエントリポイント"""

import logging
import sys
from pathlib import Path

import yaml

from smartnote.application.services import ActivityTracker, TaskRegistry
from smartnote.application.use_cases import NotesTransferUseCase
from smartnote.config import (
    Config,
    ConfigError,
    LoggingConfig,
    StorageConfig,
    load_config,
)
from smartnote.config.models import ActivityConfig, DisplayConfig
from smartnote.domain.exceptions import MalformedImportError
from smartnote.domain.services import StatisticsEngine
from smartnote.infrastructure.persistence import (
    DatabaseManager,
    PersistenceError,
    SQLiteActivityStatsRepository,
    SQLiteGroupStateRepository,
)
from smartnote.presentation.cli import App, CommandError, create_parser, dispatch

# Default logging for early startup
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def configure_logging(config: LoggingConfig | None) -> None:
    """Configure logging based on config.

    Args:
        config: Logging configuration. If None, uses defaults.
    """
    if config is None:
        return

    # Get root logger
    root_logger = logging.getLogger()

    # Set root level
    level = getattr(logging, config.level.upper(), logging.INFO)
    root_logger.setLevel(level)

    # Update handler format if specified
    if root_logger.handlers:
        formatter = logging.Formatter(config.format)
        for handler in root_logger.handlers:
            handler.setFormatter(formatter)

    # Configure individual loggers
    if config.loggers:
        for logger_name, logger_level in config.loggers.items():
            individual_logger = logging.getLogger(logger_name)
            individual_level = getattr(logging, logger_level.upper(), logging.INFO)
            individual_logger.setLevel(individual_level)
            logger.debug(
                "Set logger '%s' to level %s", logger_name, logger_level.upper()
            )


def build_app(config: Config, db_manager: DatabaseManager) -> App:
    """依存関係を組み立て、保存済みの状態を読み込む

    Args:
        config: アプリケーション設定
        db_manager: 初期化済みのデータベース

    Returns:
        App インスタンス
    """
    tz = config.display.tzinfo

    activity_tracker = ActivityTracker(
        SQLiteActivityStatsRepository(db_manager.get_session),
        reset_window=config.activity.reset_window,
        tz=tz,
    )
    activity_tracker.initialize()

    registry = TaskRegistry(
        SQLiteGroupStateRepository(db_manager.get_session),
        activity_tracker,
    )
    registry.load()

    return App(
        registry=registry,
        activity_tracker=activity_tracker,
        statistics=StatisticsEngine(registry, activity_tracker, tz=tz),
        transfer=NotesTransferUseCase(registry),
    )


def main(argv: list[str] | None = None) -> int:
    """CLI を実行する

    Returns:
        終了コード
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    config_path = Path(args.config)
    if config_path.exists():
        try:
            config = load_config(config_path)
        except (ConfigError, yaml.YAMLError) as e:
            logger.error("Failed to load config: %s", e)
            return 1
    elif args.db:
        config = Config(
            storage=StorageConfig(database_path=args.db),
            activity=ActivityConfig(),
            display=DisplayConfig(),
        )
    else:
        logger.error("%s not found (use --config or --db)", config_path)
        return 1

    # Apply logging configuration
    configure_logging(config.logging)

    db_path = args.db or config.storage.database_path
    db_manager = DatabaseManager(db_path)

    try:
        db_manager.create_tables()
        app = build_app(config, db_manager)
        print(dispatch(app, args))
    except (CommandError, MalformedImportError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (OSError, PersistenceError) as e:
        logger.debug("Storage failure", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        db_manager.close()
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
