"""Coordinator running the supervisor's concurrent parts.

This module provides the Supervisor class, which runs the blocking restart
loop in a worker thread alongside the shutdown watcher and the status
server using anyio for structured concurrency.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, final

import anyio
import anyio.to_thread
import structlog

from forever.exceptions import SupervisorError

if TYPE_CHECKING:
    import uvicorn
    from structlog.typing import FilteringBoundLogger

    from ._loop import SupervisorLoop
    from ._watcher import ShutdownWatcher


@final
class Supervisor:
    """Runs the restart loop, the shutdown watcher and the status server.

    The restart loop blocks while it waits for the child, so it gets its
    own worker thread. The watcher and the status server share the event
    loop. When the restart loop returns, the watcher is cancelled and the
    status server is asked to exit.
    """

    __slots__ = ("_logger", "_loop", "_server", "_watcher")

    def __init__(
        self,
        loop: SupervisorLoop,
        watcher: ShutdownWatcher,
        *,
        server: uvicorn.Server | None = None,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize the supervisor.

        Args:
            loop: The restart loop to run.
            watcher: The shutdown watcher feeding the loop's stop flag.
            server: Status server to run alongside, or None for no server.
            logger: Structured logger. Uses structlog's default if None.
        """
        self._loop = loop
        self._watcher = watcher
        self._server = server
        self._logger: FilteringBoundLogger = logger or structlog.get_logger()

    @property
    def loop(self) -> SupervisorLoop:
        """Return the restart loop."""
        return self._loop

    async def _serve(self, server: uvicorn.Server) -> None:
        config = server.config
        self._logger.info("status_server_starting", host=config.host, port=config.port)
        try:
            await server.serve()
        except SystemExit as e:
            # uvicorn exits the process when it cannot bind; supervision
            # carries on without the status endpoint.
            self._logger.error(
                "status_server_failed", host=config.host, port=config.port, code=e.code
            )
            return
        self._logger.info("status_server_stopped")

    async def run(self) -> None:
        """Run until the restart loop stops.

        Raises:
            SupervisorError: If the restart loop failed.
        """
        failure: SupervisorError | None = None

        async with anyio.create_task_group() as tg:
            if self._server is not None:
                tg.start_soon(self._serve, self._server)

            async with anyio.create_task_group() as watchers:
                watchers.start_soon(self._watcher.watch)
                try:
                    await anyio.to_thread.run_sync(self._loop.run)
                except SupervisorError as e:
                    failure = e
                finally:
                    watchers.cancel_scope.cancel()

            if self._server is not None:
                self._server.should_exit = True

        if failure is not None:
            raise failure
