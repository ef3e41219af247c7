"""forever exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path


class ForeverError(Exception):
    """Base exception for forever errors."""


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(ForeverError):
    """Invalid or unreadable configuration."""


class ConfigLoadError(ConfigError):
    """A configuration file could not be read as TOML."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Store the message and where in the file the problem is."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """A configuration value has the wrong type or is out of range."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        source: str | None = None,
    ) -> None:
        """Store the message and the offending setting."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.source: str | None = source


# =============================================================================
# Supervisor Exceptions
# =============================================================================


class SupervisorError(ForeverError):
    """Failures that end supervision."""


class SpawnError(SupervisorError):
    """Raised when the supervised command cannot be started.

    Attributes:
        command: The command that failed to start.
        cause: The OSError raised by the spawn attempt.
    """

    def __init__(
        self,
        message: str,
        *,
        command: tuple[str, ...] = (),
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.command: tuple[str, ...] = command
        self.cause: Exception | None = cause


class EventSinkError(SupervisorError):
    """Raised when the event store cannot be reached or appended to.

    Attributes:
        key: The event stream key, if the failure concerned a stream.
        cause: The Redis error behind the failure, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.key: str | None = key
        self.cause: Exception | None = cause
