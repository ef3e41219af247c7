"""Protocol definitions for the supervisor.

This module defines the interfaces that decouple the supervisor core
from its collaborators:
- EventSink: Append-only event store
- Reporter: Human-facing console notices
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ._models import Event


@runtime_checkable
class EventSink(Protocol):
    """Protocol for the append-only lifecycle event store.

    Events are appended to a stream identified by a key. The store is
    write-only from the supervisor's point of view: nothing is read back
    and no control decision depends on it.
    """

    def append(self, key: str, label: str, message: str) -> None:
        """Append a ``label``/``message`` pair to the stream ``key``.

        Args:
            key: Identifier of the event stream.
            label: Per-run label identifying the supervisor.
            message: Human-readable lifecycle message.

        Raises:
            EventSinkError: If the event could not be appended.
        """
        ...


@runtime_checkable
class Reporter(Protocol):
    """Protocol for human-facing progress notices."""

    def notice(self, message: str) -> None:
        """Report an informational notice."""
        ...

    def event(self, event: Event) -> None:
        """Report a lifecycle event that was sent to the event store."""
        ...
