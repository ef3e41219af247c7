"""Entry point wiring configuration to a running supervisor.

This module builds the event sink, shared state, restart loop, shutdown
watcher and status server from a Config and runs them with anyio.
"""

from __future__ import annotations
from contextlib import ExitStack
from typing import TYPE_CHECKING

import anyio

from forever.server import StatusServer, create_app
from forever.supervisor import (
    ConsoleReporter,
    MemoryEventSink,
    RedisStreamSink,
    RuntimeState,
    ShutdownWatcher,
    StopFlag,
    Supervisor,
    SupervisorLoop,
)
from forever.utils import create_logger, get_hostname, open_log_file

if TYPE_CHECKING:
    from collections.abc import Sequence
    from typing import TextIO

    from rich.console import Console
    from structlog.typing import FilteringBoundLogger

    from forever.config import Config
    from forever.supervisor import EventSink

DRY_RUN_KEY = "forever"


def _config_logger(
    config: Config, stream: TextIO | None = None
) -> FilteringBoundLogger:
    return create_logger(
        level=config.logging.level.value,
        log_format=config.logging.format.value,  # type: ignore[arg-type]
        stream=stream,
    )


def build_supervisor(
    config: Config,
    command: Sequence[str],
    sink: EventSink,
    *,
    reporter: ConsoleReporter | None = None,
    logger: FilteringBoundLogger | None = None,
) -> Supervisor:
    """Assemble a Supervisor for ``command`` from ``config``.

    Args:
        config: Loaded configuration.
        command: Executable followed by its arguments.
        sink: Event sink for lifecycle events.
        reporter: Reporter for operator notices. Uses a new ConsoleReporter
            if None.
        logger: Structured logger. Logs to stderr with the configured level
            and format if None.

    Returns:
        A Supervisor ready to run.
    """
    if reporter is None:
        reporter = ConsoleReporter()
    if logger is None:
        logger = _config_logger(config)
    logger = logger.bind(command=" ".join(command))

    hostname = get_hostname()
    reporter.notice(f"Hostname: {hostname}")
    logger.info("hostname_resolved", hostname=hostname)

    state = RuntimeState(hostname)
    stop_flag = StopFlag()
    loop = SupervisorLoop(
        command,
        state,
        stop_flag,
        sink,
        config.events.key or DRY_RUN_KEY,
        reporter=reporter,
        logger=logger,
        abort_on_event_error=config.supervisor.abort_on_event_error,
    )
    watcher = ShutdownWatcher(stop_flag, reporter=reporter, logger=logger)

    server: StatusServer | None = None
    if config.server.enabled:
        server = StatusServer.for_app(
            create_app(state),
            host=config.server.host,
            port=config.server.port,
        )
        reporter.notice(
            f"Status available at http://{config.server.host}:{config.server.port}/info"
        )

    return Supervisor(loop, watcher, server=server, logger=logger)


def run_forever(
    config: Config,
    command: Sequence[str],
    *,
    dry_run: bool = False,
    console: Console | None = None,
) -> None:
    """Connect to the event store and supervise ``command`` until stopped.

    The log file and the event store connection are closed on return,
    whether supervision ended normally or with an error.

    Args:
        config: Loaded configuration.
        command: Executable followed by its arguments.
        dry_run: Keep events in memory instead of connecting to Redis.
        console: Console for notices. Uses a new Console if None.

    Raises:
        EventSinkError: If the event store is unreachable or the initial
            event cannot be appended.
        SpawnError: If the command cannot be started.
    """
    reporter = ConsoleReporter(console)

    with ExitStack() as stack:
        stream: TextIO | None = None
        if config.logging.file:
            stream = stack.enter_context(open_log_file(config.logging.file))
        logger = _config_logger(config, stream)

        sink: EventSink
        if dry_run:
            sink = MemoryEventSink()
        else:
            redis_sink = RedisStreamSink.connect(config.events.url)
            _ = stack.callback(redis_sink.close)
            reporter.notice("Connected to redis")
            sink = redis_sink

        supervisor = build_supervisor(
            config, command, sink, reporter=reporter, logger=logger
        )
        anyio.run(supervisor.run)
