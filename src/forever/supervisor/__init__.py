"""Supervisor package for keeping a single command running.

This package restarts a command every time it exits, records lifecycle
events to an append-only event store, and keeps a concurrently readable
status record for the HTTP status endpoint.

Key Components:
    - RuntimeInfo / RuntimeSnapshot: Runtime status of the supervised child
    - RuntimeState: Reader/writer-locked shared status
    - StopFlag: One-way gate that ends the restart loop
    - EventSink: Protocol for the append-only event store
    - RedisStreamSink / MemoryEventSink: EventSink implementations
    - ConsoleReporter: Console notices
    - SupervisorLoop: The blocking restart loop
    - ShutdownWatcher: Interrupt signal to stop flag bridge
    - Supervisor: Runs loop, watcher and status server together
    - create_status_router: FastAPI endpoint factory

Example:
    >>> from forever.supervisor import (
    ...     MemoryEventSink, RuntimeState, StopFlag, SupervisorLoop,
    ... )
    >>> state, stop = RuntimeState("host"), StopFlag()
    >>> loop = SupervisorLoop(["sleep", "1"], state, stop, MemoryEventSink(), "log")
    >>> loop.run()  # Blocks until a child exits after stop.set()
"""

from ._api import WELCOME_TEXT, RuntimeInfoResponse, create_status_router
from ._loop import SupervisorLoop
from ._models import (
    Event,
    RuntimeInfo,
    RuntimeSnapshot,
    SupervisorPhase,
    make_label,
)
from ._output import ConsoleReporter
from ._protocol import EventSink, Reporter
from ._sinks import MemoryEventSink, RedisStreamSink
from ._state import ReadWriteLock, RuntimeState, StopFlag
from ._supervisor import Supervisor
from ._watcher import ShutdownWatcher

__all__ = [
    "WELCOME_TEXT",
    "ConsoleReporter",
    "Event",
    "EventSink",
    "MemoryEventSink",
    "ReadWriteLock",
    "RedisStreamSink",
    "Reporter",
    "RuntimeInfo",
    "RuntimeInfoResponse",
    "RuntimeSnapshot",
    "RuntimeState",
    "ShutdownWatcher",
    "StopFlag",
    "Supervisor",
    "SupervisorLoop",
    "SupervisorPhase",
    "create_status_router",
    "make_label",
]
