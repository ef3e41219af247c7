"""Host and clock helpers."""

import socket

import pendulum

UNKNOWN_HOSTNAME = "unknown"


def get_hostname() -> str:
    """Return the name of the machine running the supervisor.

    Returns ``"unknown"`` when the hostname cannot be determined.
    """
    try:
        hostname = socket.gethostname().strip()
    except OSError:
        return UNKNOWN_HOSTNAME
    return hostname or UNKNOWN_HOSTNAME


def now_millis() -> int:
    """Return the current time in milliseconds since the Unix epoch."""
    now = pendulum.now("UTC")
    return now.int_timestamp * 1000 + now.microsecond // 1000
