"""Shared test fixtures for forever tests."""

import pytest
from _support import FakePopen, RecordingReporter, TickingClock

from forever.supervisor import RuntimeState, StopFlag


@pytest.fixture
def state() -> RuntimeState:
    return RuntimeState("test-host")


@pytest.fixture
def stop_flag() -> StopFlag:
    return StopFlag()


@pytest.fixture
def fake_popen() -> FakePopen:
    return FakePopen()


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()
