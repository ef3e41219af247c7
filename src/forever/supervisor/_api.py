"""FastAPI status endpoints for the supervisor.

This module provides the read-only REST surface over the shared
RuntimeState. Nothing here can change the supervisor's behaviour.
"""

# pyright: reportUnusedFunction=false
# FastAPI route handlers are registered via decorators, not direct calls

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, NonNegativeInt

from ._state import RuntimeState

WELCOME_TEXT = "Welcome to ForEver"


class RuntimeInfoResponse(BaseModel):
    """Response model for the supervised child's runtime status."""

    hostname: str
    pid: NonNegativeInt
    up: bool
    start_time: NonNegativeInt
    last_restart: NonNegativeInt
    restarts: NonNegativeInt


def create_status_router(state: RuntimeState) -> APIRouter:
    """Create a FastAPI router exposing the supervisor's status.

    Handlers are synchronous so the brief shared-lock read runs in the
    threadpool rather than on the event loop.

    Args:
        state: The RuntimeState to report.

    Returns:
        A FastAPI APIRouter with the status endpoints.
    """
    router = APIRouter(tags=["status"])

    @router.get("/", response_class=PlainTextResponse)
    def get_root() -> str:
        return WELCOME_TEXT

    @router.get("/info", response_model=RuntimeInfoResponse)
    def get_info() -> RuntimeInfoResponse:
        """Get the current runtime status."""
        snapshot = state.read()
        return RuntimeInfoResponse(
            hostname=snapshot.hostname,
            pid=snapshot.pid,
            up=snapshot.up,
            start_time=snapshot.start_time,
            last_restart=snapshot.last_restart,
            restarts=snapshot.restarts,
        )

    return router
