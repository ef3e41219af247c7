"""EventSink implementations.

This module provides concrete implementations of the EventSink protocol:
- RedisStreamSink: Appends events to a Redis stream with XADD
- MemoryEventSink: Keeps events in memory (tests and dry runs)
"""

from __future__ import annotations

from typing import final

import redis
import redis.exceptions

from forever.exceptions import EventSinkError

from ._models import Event


@final
class RedisStreamSink:
    """Event sink backed by a Redis stream.

    Each event becomes one stream entry with ``label`` and ``msg`` fields.
    Redis assigns the entry ID.
    """

    __slots__ = ("_client",)

    def __init__(self, client: redis.Redis) -> None:
        """Initialize the sink with an already connected client.

        Args:
            client: Redis client used for appends.
        """
        self._client = client

    @classmethod
    def connect(cls, url: str) -> RedisStreamSink:
        """Connect to the Redis server at ``url`` and verify the connection.

        Args:
            url: Redis connection URL, e.g. ``redis://localhost:6379/0``.

        Returns:
            A sink using the new connection.

        Raises:
            EventSinkError: If the URL is invalid or the server is unreachable.
        """
        try:
            client = redis.Redis.from_url(url, decode_responses=True)
            _ = client.ping()
        except (ValueError, redis.exceptions.RedisError) as e:
            msg = f"Failed to connect to event store at {url}: {e}"
            raise EventSinkError(msg, cause=e) from e
        return cls(client)

    def append(self, key: str, label: str, message: str) -> None:
        """Append an entry to the stream ``key``.

        Raises:
            EventSinkError: If the XADD command fails.
        """
        try:
            _ = self._client.xadd(key, {"label": label, "msg": message}, id="*")
        except redis.exceptions.RedisError as e:
            msg = f"Failed to append event to stream '{key}': {e}"
            raise EventSinkError(msg, key=key, cause=e) from e

    def close(self) -> None:
        self._client.close()


@final
class MemoryEventSink:
    """Event sink that records events in a list."""

    __slots__ = ("entries",)

    def __init__(self) -> None:
        self.entries: list[tuple[str, Event]] = []

    def append(self, key: str, label: str, message: str) -> None:
        self.entries.append((key, Event(label=label, message=message)))

    def messages(self, key: str | None = None) -> list[str]:
        """Return appended messages, optionally only those for ``key``."""
        return [
            event.message
            for entry_key, event in self.entries
            if key is None or entry_key == key
        ]
