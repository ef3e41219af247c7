"""Default configuration values.

This module defines the built-in default configuration values that are used
when no other configuration sources provide values.
"""

from typing import Any

DEFAULT_CONFIG_FILENAME = "forever.toml"

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "logging": {
        "level": "info",
        "format": "json",
        "file": "",
    },
    "events": {
        "url": "",
        "key": "",
    },
    "server": {
        "enabled": True,
        "host": "127.0.0.1",
        "port": 3030,
    },
    "supervisor": {
        "abort_on_event_error": True,
    },
}
