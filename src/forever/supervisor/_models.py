"""Data models for the supervisor.

This module defines the core data types for supervising a command:
- SupervisorPhase: Lifecycle phases of the restart loop
- RuntimeInfo: Mutable runtime status of the supervised child
- RuntimeSnapshot: Immutable point-in-time copy of RuntimeInfo
- Event: Immutable lifecycle event record
"""

from dataclasses import asdict, dataclass
from enum import StrEnum


class SupervisorPhase(StrEnum):
    """Restart loop lifecycle phases.

    Phases follow the cycle
    NOT_STARTED -> SPAWNING -> RUNNING -> EXITED -> RESTARTING -> SPAWNING,
    leaving the cycle from EXITED to STOPPED once a shutdown was requested:
    - NOT_STARTED: The loop has not spawned anything yet
    - SPAWNING: The command is being launched
    - RUNNING: The child is running
    - EXITED: The child has exited and the stop flag is being checked
    - RESTARTING: The restart is being recorded before the next spawn
    - STOPPED: The loop has finished; terminal
    """

    NOT_STARTED = "not_started"
    SPAWNING = "spawning"
    RUNNING = "running"
    EXITED = "exited"
    RESTARTING = "restarting"
    STOPPED = "stopped"


@dataclass(frozen=True, slots=True)
class RuntimeSnapshot:
    """Immutable point-in-time copy of the supervised child's status.

    Attributes:
        hostname: Machine running the supervisor.
        pid: Process ID of the most recently spawned child.
        up: Whether the current child is running.
        start_time: Milliseconds since epoch of the most recent spawn.
        last_restart: Milliseconds since epoch of the most recent exit.
        restarts: Number of completed restart cycles.
    """

    hostname: str
    pid: int
    up: bool
    start_time: int
    last_restart: int
    restarts: int

    def to_dict(self) -> dict[str, object]:
        """Return the snapshot as a plain dictionary."""
        return asdict(self)


@dataclass(slots=True)
class RuntimeInfo:
    """Mutable runtime status of the supervised child.

    Only the supervisor loop mutates this record, and only through
    RuntimeState.write(). ``pid`` and ``start_time`` are meaningful only
    while ``up`` is true.

    Attributes:
        hostname: Machine running the supervisor, fixed at construction.
        pid: Process ID of the most recently spawned child.
        up: Whether the current child is running.
        start_time: Milliseconds since epoch of the most recent spawn.
        last_restart: Milliseconds since epoch of the most recent exit.
        restarts: Number of completed restart cycles.
    """

    hostname: str
    pid: int = 0
    up: bool = False
    start_time: int = 0
    last_restart: int = 0
    restarts: int = 0

    def mark_started(self, pid: int, now: int) -> None:
        self.pid = pid
        self.up = True
        self.start_time = now

    def mark_exited(self, now: int) -> None:
        self.up = False
        self.last_restart = now

    def count_restart(self) -> None:
        self.restarts += 1

    def snapshot(self) -> RuntimeSnapshot:
        """Return an immutable copy of the current values."""
        return RuntimeSnapshot(
            hostname=self.hostname,
            pid=self.pid,
            up=self.up,
            start_time=self.start_time,
            last_restart=self.last_restart,
            restarts=self.restarts,
        )


@dataclass(frozen=True, slots=True)
class Event:
    """Immutable lifecycle event sent to an EventSink.

    Attributes:
        label: Per-run label identifying the supervisor instance.
        message: Human-readable description of the lifecycle transition.
    """

    label: str
    message: str


def make_label(hostname: str) -> str:
    """Build the per-run event label for ``hostname``."""
    return f"supervised-by({hostname})"
