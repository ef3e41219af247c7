"""Shared runtime state for the supervisor.

This module provides the two pieces of state shared between the
supervisor loop, the shutdown watcher, and the status endpoint:
- RuntimeState: Reader/writer-locked RuntimeInfo with snapshot reads
- StopFlag: One-way boolean gate that ends the restart loop
"""

from __future__ import annotations

import contextlib
import copy
import threading
from typing import TYPE_CHECKING, final

from ._models import RuntimeInfo, RuntimeSnapshot

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@final
class ReadWriteLock:
    """Lock allowing many concurrent readers or one exclusive writer.

    Writers waiting for the lock block newly arriving readers, so a steady
    stream of status requests cannot starve the supervisor loop.
    """

    __slots__ = ("_cond", "_readers", "_writer", "_writers_waiting")

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writers_waiting = 0
        self._writer = False

    @contextlib.contextmanager
    def read_locked(self) -> Iterator[None]:
        """Hold the lock in shared mode for the duration of the block."""
        with self._cond:
            while self._writer or self._writers_waiting:
                _ = self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextlib.contextmanager
    def write_locked(self) -> Iterator[None]:
        """Hold the lock in exclusive mode for the duration of the block."""
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    _ = self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


@final
class RuntimeState:
    """Concurrently readable runtime status of the supervised child.

    Readers get consistent snapshots and never observe a partially applied
    update. Writers apply a read-modify-write function to a working copy
    under exclusive access; the copy replaces the current record only when
    the function returns normally.
    """

    __slots__ = ("_info", "_lock")

    def __init__(self, hostname: str) -> None:
        """Initialize the state for a supervisor running on ``hostname``.

        Args:
            hostname: Machine name, immutable for the lifetime of the state.
        """
        self._info = RuntimeInfo(hostname=hostname)
        self._lock = ReadWriteLock()

    @property
    def hostname(self) -> str:
        """Return the hostname the state was created with."""
        return self._info.hostname

    def read(self) -> RuntimeSnapshot:
        """Return a consistent point-in-time copy of the runtime info."""
        with self._lock.read_locked():
            return self._info.snapshot()

    def write(self, fn: Callable[[RuntimeInfo], None]) -> RuntimeSnapshot:
        """Atomically update the runtime info.

        Args:
            fn: Function that mutates the RuntimeInfo it is given.

        Returns:
            Snapshot of the committed values.

        Raises:
            ValueError: If ``fn`` changed the hostname.
        """
        with self._lock.write_locked():
            working = copy.copy(self._info)
            fn(working)
            if working.hostname != self._info.hostname:
                msg = "hostname cannot change after construction"
                raise ValueError(msg)
            self._info = working
            return working.snapshot()


@final
class StopFlag:
    """Shared boolean that, once set, stops the restart loop.

    Created unset. The only transition is unset -> set; setting again is
    harmless.
    """

    __slots__ = ("_event", "_lock")

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()

    def set(self) -> bool:
        """Set the flag.

        Returns:
            True if this call performed the transition, False if the flag
            was already set.
        """
        with self._lock:
            if self._event.is_set():
                return False
            self._event.set()
            return True

    def is_set(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the flag is set or ``timeout`` seconds elapse."""
        return self._event.wait(timeout)
