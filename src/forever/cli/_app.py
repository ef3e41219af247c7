"""The command-line interface for forever."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from forever.config import safe_load_config, set_nested_key
from forever.exceptions import ForeverError

from ._runner import run_forever
from ._shared import ExitCode, exit_with_error

HELP = "Keep a command running: restart it whenever it exits."


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="forever",
        help=HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.default
    def forever(  # noqa: PLR0913  # pyright: ignore[reportUnusedFunction]
        *command: Annotated[str, Parameter(allow_leading_hyphen=True)],
        redis_url: Annotated[
            str | None,
            Parameter(name=["--redis-url", "-r"], help="Redis connection URL"),
        ] = None,
        log_key: Annotated[
            str | None,
            Parameter(name=["--log-key", "-l"], help="Redis stream key for events"),
        ] = None,
        host: Annotated[
            str | None, Parameter(help="Status server bind address")
        ] = None,
        port: Annotated[int | None, Parameter(help="Status server port")] = None,
        no_server: Annotated[
            bool, Parameter(name="--no-server", help="Disable the status server")
        ] = False,
        dry_run: Annotated[
            bool,
            Parameter(
                name="--dry-run", help="Keep events in memory instead of Redis"
            ),
        ] = False,
        verbose: Annotated[bool, Parameter(help="Enable debug logging")] = False,
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
    ) -> None:
        """Supervise COMMAND, restarting it every time it exits.

        Args:
            command: Command to supervise, given after ``--``.
            redis_url: Redis connection URL for the event stream.
            log_key: Redis stream key lifecycle events are appended to.
            host: Status server bind address.
            port: Status server port.
            no_server: Disable the status server.
            dry_run: Keep events in memory instead of connecting to Redis.
            verbose: Enable debug logging.
            config: Explicit path to config file.
        """
        # Build CLI overrides from flags
        cli_overrides: dict[str, object] = {}
        flag_values: dict[str, object | None] = {
            "events.url": redis_url,
            "events.key": log_key,
            "server.host": host,
            "server.port": port,
            "server.enabled": False if no_server else None,
            "logging.level": "debug" if verbose else None,
        }
        for key_path, value in flag_values.items():
            if value is not None:
                set_nested_key(cli_overrides, key_path, value)

        loaded_config, _ = safe_load_config(
            config_path=config, cli_overrides=cli_overrides
        )

        if not command:
            exit_with_error(
                "No command given. Pass it after '--'.",
                ExitCode.USAGE_ERROR,
                console=error_console,
            )
        if not dry_run and not loaded_config.events.url:
            exit_with_error(
                "No Redis URL given. Use --redis-url or set events.url.",
                ExitCode.USAGE_ERROR,
                console=error_console,
            )
        if not dry_run and not loaded_config.events.key:
            exit_with_error(
                "No stream key given. Use --log-key or set events.key.",
                ExitCode.USAGE_ERROR,
                console=error_console,
            )

        try:
            run_forever(loaded_config, command, dry_run=dry_run, console=console)
        except ForeverError as e:
            exit_with_error(str(e), ExitCode.FATAL_ERROR, console=error_console)

    return app


app = create_app()


def main() -> None:
    """Default entrypoint for the `forever` CLI."""
    app()


if __name__ == "__main__":
    main()
