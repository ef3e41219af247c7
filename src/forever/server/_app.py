"""Status application and server factory."""

from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING, override

import uvicorn
from fastapi import FastAPI

from forever.supervisor import create_status_router

if TYPE_CHECKING:
    from collections.abc import Generator

    from forever.supervisor import RuntimeState

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3030


def create_app(state: RuntimeState) -> FastAPI:
    """Create the FastAPI status application.

    Args:
        state: The RuntimeState to expose.

    Returns:
        A FastAPI application serving ``/`` and ``/info``.
    """
    app = FastAPI(
        title="forever",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.include_router(create_status_router(state))
    return app


class StatusServer(uvicorn.Server):
    """Uvicorn server that leaves signal handling to the ShutdownWatcher.

    A stock uvicorn server would take over SIGINT and shut itself down,
    while the status must stay available until the last child exits.
    """

    @override
    @contextlib.contextmanager
    def capture_signals(self) -> Generator[None]:
        yield

    @classmethod
    def for_app(
        cls,
        app: FastAPI,
        *,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        log_level: str = "warning",
    ) -> StatusServer:
        """Build a server for ``app`` bound to ``host``:``port``."""
        config = uvicorn.Config(
            app=app,
            host=host,
            port=port,
            log_level=log_level,
            access_log=False,
        )
        return cls(config)
