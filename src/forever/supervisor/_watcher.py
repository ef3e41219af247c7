"""Shutdown signal watcher.

This module provides the ShutdownWatcher, which turns interrupt signals
into a set StopFlag. Shutdown is cooperative: the watcher never touches
the supervised child, so the restart loop ends only after the current
child exits on its own.
"""

from __future__ import annotations

import signal
from typing import TYPE_CHECKING, final

import anyio
import structlog

if TYPE_CHECKING:
    from collections.abc import Sequence

    from structlog.typing import FilteringBoundLogger

    from ._protocol import Reporter
    from ._state import StopFlag


@final
class ShutdownWatcher:
    """Sets the stop flag whenever an interrupt signal arrives.

    Keeps watching after the first signal so repeated deliveries are
    absorbed instead of falling through to the default handler.
    """

    __slots__ = ("_logger", "_reporter", "_signals", "_stop_flag")

    def __init__(
        self,
        stop_flag: StopFlag,
        *,
        signals: Sequence[signal.Signals] = (signal.SIGINT,),
        reporter: Reporter | None = None,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize the watcher.

        Args:
            stop_flag: Flag to set on signal receipt.
            signals: Signals that request shutdown.
            reporter: Optional console reporter.
            logger: Structured logger. Uses structlog's default if None.
        """
        self._stop_flag = stop_flag
        self._signals = tuple(signals)
        self._reporter = reporter
        self._logger: FilteringBoundLogger = logger or structlog.get_logger()

    def handle_signal(self, signum: int) -> None:
        """Record a received signal by setting the stop flag."""
        first = self._stop_flag.set()
        if self._reporter is not None:
            self._reporter.notice("Ctrl-c received!")
        self._logger.info(
            "shutdown_requested", signal=signal.Signals(signum).name, first=first
        )

    async def watch(self) -> None:
        """Watch for signals until cancelled."""
        with anyio.open_signal_receiver(*self._signals) as signals:
            async for signum in signals:
                self.handle_signal(signum)
