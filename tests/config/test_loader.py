"""設定ローダーのテスト"""

import os
from datetime import timedelta
from pathlib import Path
from typing import Generator
from zoneinfo import ZoneInfo

import pytest
import yaml

from smartnote.config import (
    ActivityConfig,
    Config,
    ConfigValidationError,
    DisplayConfig,
    EnvironmentVariableError,
    StorageConfig,
    expand_env_vars,
    load_config,
)


@pytest.fixture
def env_vars() -> Generator[dict[str, str], None, None]:
    """テスト用環境変数を設定・クリーンアップ"""
    test_vars = {
        "TEST_DATA_DIR": "/var/lib/smartnote",
        "TEST_VAR_A": "valueA",
        "TEST_VAR_B": "valueB",
    }
    for key, value in test_vars.items():
        os.environ[key] = value
    yield test_vars
    for key in test_vars:
        os.environ.pop(key, None)


def write_config(path: Path, data: object) -> Path:
    """設定ファイルを書き出す"""
    config_path = path / "config.yaml"
    config_path.write_text(yaml.dump(data, allow_unicode=True), encoding="utf-8")
    return config_path


class TestExpandEnvVars:
    """expand_env_vars関数のテスト"""

    def test_single_variable(self, env_vars: dict[str, str]) -> None:
        """単一の変数を展開できる"""
        assert expand_env_vars("${TEST_VAR_A}") == "valueA"

    def test_multiple_variables(self, env_vars: dict[str, str]) -> None:
        """複数の変数を展開できる"""
        assert expand_env_vars("${TEST_VAR_A}_${TEST_VAR_B}") == "valueA_valueB"

    def test_no_variables(self) -> None:
        """変数がない場合はそのまま返す"""
        assert expand_env_vars("plain text") == "plain text"

    def test_undefined_variable(self) -> None:
        """未設定の変数でEnvironmentVariableErrorが発生"""
        with pytest.raises(EnvironmentVariableError) as exc_info:
            expand_env_vars("${UNDEFINED_VAR_12345}")
        assert "UNDEFINED_VAR_12345" in str(exc_info.value)

    def test_empty_string(self) -> None:
        """空文字列はそのまま返す"""
        assert expand_env_vars("") == ""


class TestLoadConfig:
    """load_config関数のテスト"""

    def test_load_valid_config(self, tmp_path: Path) -> None:
        """全項目を指定した設定を読み込める"""
        config_path = write_config(
            tmp_path,
            {
                "storage": {"database_path": "./data/smartnote.db"},
                "activity": {"reset_days": 14},
                "display": {"timezone": "Asia/Tokyo"},
                "logging": {"level": "DEBUG", "loggers": {"sqlalchemy": "WARNING"}},
            },
        )

        config = load_config(config_path)

        assert config.storage.database_path == "./data/smartnote.db"
        assert config.activity.reset_window == timedelta(days=14)
        assert config.display.tzinfo == ZoneInfo("Asia/Tokyo")
        assert config.logging is not None
        assert config.logging.level == "DEBUG"
        assert config.logging.loggers == {"sqlalchemy": "WARNING"}

    def test_defaults(self, tmp_path: Path) -> None:
        """省略可能な項目はデフォルト値になる"""
        config_path = write_config(tmp_path, {"storage": {"database_path": "x.db"}})

        config = load_config(str(config_path))

        assert config.activity.reset_days == 7
        assert config.display.timezone is None
        assert config.display.tzinfo is None
        assert config.logging is None

    def test_env_var_expansion(
        self, tmp_path: Path, env_vars: dict[str, str]
    ) -> None:
        """環境変数が展開される"""
        config_path = write_config(
            tmp_path, {"storage": {"database_path": "${TEST_DATA_DIR}/notes.db"}}
        )

        config = load_config(config_path)

        assert config.storage.database_path == "/var/lib/smartnote/notes.db"

    def test_file_not_found(self, tmp_path: Path) -> None:
        """ファイルが存在しない場合FileNotFoundError"""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_undefined_env_var(self, tmp_path: Path) -> None:
        """未設定の環境変数でEnvironmentVariableError"""
        config_path = write_config(
            tmp_path, {"storage": {"database_path": "${UNDEFINED_VAR_12345}"}}
        )

        with pytest.raises(EnvironmentVariableError):
            load_config(config_path)

    def test_missing_storage_section(self, tmp_path: Path) -> None:
        """storageセクションがない場合ConfigValidationError"""
        config_path = write_config(tmp_path, {"activity": {"reset_days": 7}})

        with pytest.raises(ConfigValidationError) as exc_info:
            load_config(config_path)
        assert "storage" in str(exc_info.value)

    def test_missing_database_path(self, tmp_path: Path) -> None:
        """database_pathがない場合ConfigValidationError"""
        config_path = write_config(tmp_path, {"storage": {}})

        with pytest.raises(ConfigValidationError) as exc_info:
            load_config(config_path)
        assert "storage.database_path" in str(exc_info.value)

    @pytest.mark.parametrize("reset_days", [0, -1, "7", True])
    def test_invalid_reset_days(self, tmp_path: Path, reset_days: object) -> None:
        """reset_daysが正の整数でない場合ConfigValidationError"""
        config_path = write_config(
            tmp_path,
            {
                "storage": {"database_path": "x.db"},
                "activity": {"reset_days": reset_days},
            },
        )

        with pytest.raises(ConfigValidationError):
            load_config(config_path)

    def test_unknown_timezone(self, tmp_path: Path) -> None:
        """存在しないタイムゾーンでConfigValidationError"""
        config_path = write_config(
            tmp_path,
            {
                "storage": {"database_path": "x.db"},
                "display": {"timezone": "Mars/Olympus_Mons"},
            },
        )

        with pytest.raises(ConfigValidationError):
            load_config(config_path)

    def test_yaml_syntax_error(self, tmp_path: Path) -> None:
        """YAML構文エラー"""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("storage: [unclosed", encoding="utf-8")

        with pytest.raises(yaml.YAMLError):
            load_config(config_path)


class TestDataClasses:
    """データクラスのテスト"""

    def test_activity_config(self) -> None:
        assert ActivityConfig().reset_window == timedelta(days=7)
        assert ActivityConfig(reset_days=1).reset_window == timedelta(days=1)

    def test_display_config(self) -> None:
        assert DisplayConfig().tzinfo is None
        assert DisplayConfig(timezone="UTC").tzinfo == ZoneInfo("UTC")

    def test_config(self) -> None:
        config = Config(
            storage=StorageConfig(database_path=":memory:"),
            activity=ActivityConfig(),
            display=DisplayConfig(),
        )

        assert config.logging is None
