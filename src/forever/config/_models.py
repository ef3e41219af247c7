# pyright: reportExplicitAny=false, reportAny=false
"""Configuration models.

This module provides the Pydantic models for each configuration section
and the Config container that merges and validates them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError

from forever.exceptions import ConfigValidationError

from ._defaults import DEFAULT_CONFIG, DEFAULT_CONFIG_FILENAME
from ._loader import copy_value, deep_merge, parse_env_vars, read_toml_file


class LogLevel(StrEnum):
    """Log level threshold values, most verbose first."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class ConfigSourceName(StrEnum):
    """Configuration source names, highest precedence first."""

    CLI = "cli"
    ENV = "env"
    FILE = "file"
    DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class ConfigSource:
    """Represents a configuration source.

    Attributes:
        name: The source type identifier.
        path: Path to the config file, or None for non-file sources.
        values: Configuration values from this source.
    """

    name: ConfigSourceName
    path: Path | None
    values: dict[str, Any]


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty logs to stderr).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.JSON
    file: str = ""


class EventsConfig(BaseModel):
    """Event store configuration section.

    Attributes:
        url: Redis connection URL.
        key: Stream key lifecycle events are appended to.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True, extra="ignore", coerce_numbers_to_str=True
    )

    url: str = ""
    key: str = ""


class ServerConfig(BaseModel):
    """Status server configuration section.

    Attributes:
        enabled: Whether to serve the status endpoint.
        host: Address to bind.
        port: Port to bind.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    enabled: bool = True
    host: str = "127.0.0.1"
    port: int = Field(default=3030, ge=0, le=65535)


class SupervisorConfig(BaseModel):
    """Supervisor behaviour configuration section.

    Attributes:
        abort_on_event_error: End supervision when a restart event cannot
            be appended. When false the failure is logged and the command
            is restarted anyway.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    abort_on_event_error: bool = True


class Config(BaseModel):
    """Configuration container with typed access.

    Use the factory methods rather than the constructor.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    events: EventsConfig = Field(default_factory=EventsConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    supervisor: SupervisorConfig = Field(default_factory=SupervisorConfig)

    _data: dict[str, Any] = PrivateAttr(default_factory=dict)
    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())

    @classmethod
    def _build(
        cls,
        data: dict[str, Any],
        sources: tuple[ConfigSource, ...] = (),
        *,
        validate: bool = True,
    ) -> Self:
        merged = deep_merge(DEFAULT_CONFIG, data)
        source_label = ", ".join(
            str(s.path) if s.path else s.name.value for s in sources
        )
        try:
            config = cls.model_validate(merged)
        except ValidationError as e:
            if validate:
                error = e.errors()[0]
                key = ".".join(str(part) for part in error["loc"])
                msg = f"Invalid configuration value for '{key}': {error['msg']}"
                raise ConfigValidationError(
                    msg,
                    key=key,
                    value=error.get("input"),
                    source=source_label or None,
                ) from e
            merged = copy_value(DEFAULT_CONFIG)
            config = cls.model_validate(merged)

        config._data = merged
        config._sources = sources
        return config

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, validate: bool = True) -> Self:
        """Create configuration from a dictionary.

        Args:
            data: Dictionary of configuration values.
            validate: Raise on invalid values. When False, invalid data
                falls back to the defaults.

        Raises:
            ConfigValidationError: If validation fails (when validate=True).
        """
        return cls._build(data, validate=validate)

    @classmethod
    def from_file(cls, path: Path, *, validate: bool = True) -> Self:
        """Load configuration from a specific TOML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If validation fails.
        """
        data = read_toml_file(path)
        source = ConfigSource(name=ConfigSourceName.FILE, path=path, values=data)
        return cls._build(data, (source,), validate=validate)

    @classmethod
    def load(
        cls,
        *,
        config_path: Path | None = None,
        include_file: bool = True,
        include_env: bool = True,
        cli_overrides: dict[str, Any] | None = None,
    ) -> Self:
        """Load merged configuration from all sources.

        Sources are merged in precedence order defaults -> file -> env -> cli.
        Without an explicit ``config_path``, ``forever.toml`` in the current
        directory is used when present. ``include_file=False`` skips the file
        source entirely.

        Raises:
            FileNotFoundError: If an explicit config file does not exist.
            ConfigLoadError: If the config file cannot be parsed.
            ConfigValidationError: If the merged config fails validation.
        """
        sources: list[ConfigSource] = [
            ConfigSource(name=ConfigSourceName.DEFAULT, path=None, values=DEFAULT_CONFIG)
        ]

        path = config_path if include_file else None
        if path is None and include_file:
            candidate = Path.cwd() / DEFAULT_CONFIG_FILENAME
            path = candidate if candidate.is_file() else None
        if path is not None:
            sources.append(
                ConfigSource(
                    name=ConfigSourceName.FILE, path=path, values=read_toml_file(path)
                )
            )

        if include_env:
            env_values = parse_env_vars()
            if env_values:
                sources.append(
                    ConfigSource(name=ConfigSourceName.ENV, path=None, values=env_values)
                )

        if cli_overrides:
            sources.append(
                ConfigSource(name=ConfigSourceName.CLI, path=None, values=cli_overrides)
            )

        merged: dict[str, Any] = {}
        for source in sources:
            merged = deep_merge(merged, source.values)

        return cls._build(merged, tuple(reversed(sources)))

    @property
    def sources(self) -> list[ConfigSource]:
        """Return the contributing sources, highest precedence first."""
        return list(self._sources)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-notation key.

        Examples:
            >>> config.get("server.port")
            3030
            >>> config.get("nonexistent", "fallback")
            'fallback'
        """
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def to_dict(self) -> dict[str, Any]:
        """Return a deep copy of the merged configuration data."""
        return copy_value(self._data)
