"""Exit codes and error reporting shared by the CLI."""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Never

if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "ExitCode",
    "exit_with_error",
    "get_error_console",
]


class ExitCode(IntEnum):
    """Process exit statuses of the forever command."""

    SUCCESS = 0
    FATAL_ERROR = 1
    USAGE_ERROR = 2


def get_error_console() -> Console:
    from rich.console import Console  # noqa: PLC0415

    return Console(stderr=True)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.FATAL_ERROR,
    *,
    console: Console | None = None,
) -> Never:
    """Report ``message`` as an error and end the process with ``code``.

    Writes to ``console``, or to a fresh stderr console when None.

    Raises:
        SystemExit: Always.
    """
    (console or get_error_console()).print(f"[red]Error:[/red] {message}")
    raise SystemExit(code)
