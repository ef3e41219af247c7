"""HTTP status server for forever."""

from ._app import DEFAULT_HOST, DEFAULT_PORT, StatusServer, create_app

__all__ = ["DEFAULT_HOST", "DEFAULT_PORT", "StatusServer", "create_app"]
