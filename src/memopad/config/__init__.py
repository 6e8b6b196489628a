"""設定管理モジュール"""

from memopad.config.loader import (
    ConfigError,
    ConfigValidationError,
    EnvironmentVariableError,
    expand_env_vars,
    load_config,
)
from memopad.config.models import Config, LoggingConfig, ServerConfig, StoreConfig

__all__ = [
    "Config",
    "ConfigError",
    "ConfigValidationError",
    "EnvironmentVariableError",
    "LoggingConfig",
    "ServerConfig",
    "StoreConfig",
    "expand_env_vars",
    "load_config",
]
