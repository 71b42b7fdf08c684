"""設定管理モジュール"""

from smartnote.config.loader import (
    ConfigError,
    ConfigValidationError,
    EnvironmentVariableError,
    expand_env_vars,
    load_config,
)
from smartnote.config.models import (
    ActivityConfig,
    Config,
    DisplayConfig,
    LoggingConfig,
    StorageConfig,
)

__all__ = [
    "ActivityConfig",
    "Config",
    "ConfigError",
    "ConfigValidationError",
    "DisplayConfig",
    "EnvironmentVariableError",
    "LoggingConfig",
    "StorageConfig",
    "expand_env_vars",
    "load_config",
]
