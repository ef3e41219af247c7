"""The restart loop that keeps a command running.

This module provides SupervisorLoop, which spawns the supervised command,
waits for it to exit, records the cycle in the shared RuntimeState and the
EventSink, and spawns it again until a shutdown has been requested.
"""

from __future__ import annotations

import subprocess
from typing import TYPE_CHECKING, final

import structlog

from forever.exceptions import EventSinkError, SpawnError
from forever.utils import now_millis

from ._models import Event, RuntimeInfo, SupervisorPhase, make_label

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from structlog.typing import FilteringBoundLogger

    from ._protocol import EventSink, Reporter
    from ._state import RuntimeState, StopFlag

    Popen = Callable[[list[str]], subprocess.Popen[bytes]]


def _count_restart(info: RuntimeInfo) -> None:
    info.count_restart()


@final
class SupervisorLoop:
    """Spawns a command and restarts it every time it exits.

    The loop is the only writer of the RuntimeState. It never signals or
    kills the child: a shutdown request only prevents the next spawn, so
    the loop ends after the current child exits on its own.

    Exit status is reported but never consulted; a crash and a clean exit
    both lead to a restart.

    Attributes:
        command: Executable and arguments of the supervised command.
        log_key: Stream key events are appended under.
        label: Per-run label attached to every event.
    """

    __slots__ = (
        "_abort_on_event_error",
        "_child_pid",
        "_clock",
        "_logger",
        "_phase",
        "_popen",
        "_reporter",
        "_sink",
        "_state",
        "_stop_flag",
        "command",
        "label",
        "log_key",
    )

    def __init__(  # noqa: PLR0913
        self,
        command: Sequence[str],
        state: RuntimeState,
        stop_flag: StopFlag,
        sink: EventSink,
        log_key: str,
        *,
        label: str | None = None,
        clock: Callable[[], int] = now_millis,
        reporter: Reporter | None = None,
        logger: FilteringBoundLogger | None = None,
        abort_on_event_error: bool = True,
        popen: Popen = subprocess.Popen,
    ) -> None:
        """Initialize the loop.

        Args:
            command: Executable followed by its arguments.
            state: Shared runtime state to update.
            stop_flag: Flag that ends the loop after the current child exits.
            sink: Event store for lifecycle events.
            log_key: Stream key for lifecycle events.
            label: Event label. Derived from the state's hostname if None.
            clock: Returns the current time in milliseconds since epoch.
            reporter: Optional console reporter.
            logger: Structured logger. Uses structlog's default if None.
            abort_on_event_error: Whether a failed restart event ends
                supervision. When False the failure is logged and the
                command is restarted anyway.
            popen: Process factory used to spawn the command.

        Raises:
            ValueError: If ``command`` is empty.
        """
        if not command:
            msg = "command must contain at least an executable"
            raise ValueError(msg)

        self.command: tuple[str, ...] = tuple(command)
        self.log_key = log_key
        self.label = label if label is not None else make_label(state.hostname)
        self._state = state
        self._stop_flag = stop_flag
        self._sink = sink
        self._clock = clock
        self._reporter = reporter
        self._logger: FilteringBoundLogger = logger or structlog.get_logger()
        self._abort_on_event_error = abort_on_event_error
        self._popen = popen
        self._phase = SupervisorPhase.NOT_STARTED
        self._child_pid: int | None = None

    @property
    def phase(self) -> SupervisorPhase:
        """Return the current lifecycle phase."""
        return self._phase

    @property
    def child_pid(self) -> int | None:
        """Return the PID of the running child, None between children."""
        return self._child_pid

    @property
    def command_line(self) -> str:
        return " ".join(self.command)

    def _append(self, message: str) -> None:
        self._sink.append(self.log_key, self.label, message)
        if self._reporter is not None:
            self._reporter.event(Event(label=self.label, message=message))
        self._logger.info(
            "event_appended", key=self.log_key, label=self.label, msg=message
        )

    def _notice(self, message: str) -> None:
        if self._reporter is not None:
            self._reporter.notice(message)

    def _spawn(self) -> subprocess.Popen[bytes]:
        self._phase = SupervisorPhase.SPAWNING
        self._notice(f"Running command: {self.command_line}")
        try:
            process = self._popen(list(self.command))
        except OSError as e:
            self._logger.error(
                "spawn_failed", command=list(self.command), error=str(e)
            )
            msg = f"Failed to start command '{self.command_line}': {e}"
            raise SpawnError(msg, command=self.command, cause=e) from e

        pid = process.pid
        now = self._clock()
        _ = self._state.write(lambda info: info.mark_started(pid, now))
        self._child_pid = pid
        self._phase = SupervisorPhase.RUNNING
        self._logger.info("child_started", pid=pid, start_time=now)
        return process

    def _wait(self, process: subprocess.Popen[bytes]) -> int:
        returncode = process.wait()
        now = self._clock()
        _ = self._state.write(lambda info: info.mark_exited(now))
        self._child_pid = None
        self._phase = SupervisorPhase.EXITED
        self._notice(f"Command exited with status: {returncode}")
        self._logger.info(
            "child_exited", pid=process.pid, returncode=returncode, last_restart=now
        )
        return returncode

    def _record_restart(self) -> None:
        self._phase = SupervisorPhase.RESTARTING
        try:
            self._append(f"Command exited, restarting: {self.command_line}")
        except EventSinkError as e:
            if self._abort_on_event_error:
                self._logger.error("restart_event_failed", error=str(e))
                raise
            self._logger.error("restart_event_failed", error=str(e), continuing=True)
        snapshot = self._state.write(_count_restart)
        self._logger.info("restart_counted", restarts=snapshot.restarts)

    def run(self) -> None:
        """Supervise the command until a shutdown is requested.

        Blocks for as long as the command keeps being restarted. Returns
        once a child exits while the stop flag is set.

        Raises:
            EventSinkError: If the initial event cannot be appended, or a
                restart event cannot be appended while
                ``abort_on_event_error`` is set.
            SpawnError: If the command cannot be started.
        """
        self._append(f"Starting command: {self.command_line}")

        while True:
            process = self._spawn()
            _ = self._wait(process)

            if self._stop_flag.is_set():
                self._phase = SupervisorPhase.STOPPED
                self._logger.info("supervisor_stopped")
                return

            self._record_restart()
