"""forever configuration.

This module provides the public API for configuration management:
loading TOML files, environment overrides, validation, and typed access.

Example:
    >>> from forever.config import Config
    >>> config = Config.load()
    >>> config.server.port
    3030
"""

from forever.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
)

from ._defaults import DEFAULT_CONFIG, DEFAULT_CONFIG_FILENAME
from ._load import safe_load_config
from ._loader import (
    ENV_PREFIX,
    deep_merge,
    parse_env_vars,
    parse_string_value,
    read_toml_file,
    set_nested_key,
)
from ._models import (
    Config,
    ConfigSource,
    ConfigSourceName,
    EventsConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    ServerConfig,
    SupervisorConfig,
)

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_CONFIG_FILENAME",
    "ENV_PREFIX",
    "Config",
    "ConfigError",
    "ConfigLoadError",
    "ConfigSource",
    "ConfigSourceName",
    "ConfigValidationError",
    "EventsConfig",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "ServerConfig",
    "SupervisorConfig",
    "deep_merge",
    "parse_env_vars",
    "parse_string_value",
    "read_toml_file",
    "safe_load_config",
    "set_nested_key",
]
