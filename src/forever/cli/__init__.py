"""The forever command-line interface."""

from ._app import app, create_app, main
from ._runner import build_supervisor, run_forever
from ._shared import ExitCode, exit_with_error

__all__ = [
    "ExitCode",
    "app",
    "build_supervisor",
    "create_app",
    "exit_with_error",
    "main",
    "run_forever",
]
