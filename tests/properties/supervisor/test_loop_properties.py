"""Property-based tests for the restart loop and runtime state."""

from _support import RESTART_PREFIX, FakePopen, StopAfterRestartsSink, TickingClock
from hypothesis import given, settings, strategies as st

from forever.supervisor import (
    RuntimeInfo,
    RuntimeState,
    StopFlag,
    SupervisorLoop,
    SupervisorPhase,
)

# =============================================================================
# Strategies
# =============================================================================

exit_status = st.integers(min_value=-15, max_value=255)

pid = st.integers(min_value=1, max_value=4_194_304)

state_op = st.one_of(
    st.tuples(st.just("start"), pid),
    st.tuples(st.just("exit"), st.just(0)),
    st.tuples(st.just("restart"), st.just(0)),
)


# =============================================================================
# Restart Loop Properties
# =============================================================================


@given(restarts=st.integers(min_value=0, max_value=25), returncode=exit_status)
@settings(max_examples=50)
def test_restart_count_equals_exits_before_stop(restarts: int, returncode: int) -> None:
    """Property: every exit except the terminal one is counted and logged."""
    state = RuntimeState("prop-host")
    stop_flag = StopFlag()
    if restarts == 0:
        _ = stop_flag.set()
    sink = StopAfterRestartsSink(stop_flag, restarts=restarts)
    popen = FakePopen(returncode=returncode)
    loop = SupervisorLoop(
        ["worker"],
        state,
        stop_flag,
        sink,
        "events",
        clock=TickingClock(),
        popen=popen,  # pyright: ignore[reportArgumentType]
    )

    loop.run()

    snapshot = state.read()
    assert snapshot.restarts == restarts
    assert popen.spawn_count == restarts + 1
    assert sink.restart_count == restarts
    assert sum(not m.startswith(RESTART_PREFIX) for m in sink.messages()) == 1
    assert snapshot.up is False
    assert snapshot.pid == popen.pids[-1]
    assert loop.phase == SupervisorPhase.STOPPED


@given(restarts=st.integers(min_value=1, max_value=15))
@settings(max_examples=30)
def test_timestamps_never_go_backwards(restarts: int) -> None:
    """Property: each child starts after the previous one exited."""
    state = RuntimeState("prop-host")
    stop_flag = StopFlag()
    observed: list[tuple[int, int]] = []

    def record() -> None:
        snapshot = state.read()
        observed.append((snapshot.start_time, snapshot.last_restart))

    sink = StopAfterRestartsSink(stop_flag, restarts=restarts)
    SupervisorLoop(
        ["worker"],
        state,
        stop_flag,
        sink,
        "events",
        clock=TickingClock(),
        popen=FakePopen(on_wait=record),  # pyright: ignore[reportArgumentType]
    ).run()

    for start_time, last_restart in observed[1:]:
        assert start_time > last_restart
    final = state.read()
    assert final.last_restart >= final.start_time


# =============================================================================
# Runtime State Properties
# =============================================================================


@given(ops=st.lists(state_op, max_size=60))
def test_state_matches_reference_model(ops: list[tuple[str, int]]) -> None:
    """Property: committed state equals sequential application of the writes."""
    state = RuntimeState("prop-host")
    expected_pid = 0
    expected_up = False
    expected_restarts = 0
    now = 0

    for op, value in ops:
        now += 1
        if op == "start":
            _ = state.write(lambda info, v=value, t=now: info.mark_started(v, t))
            expected_pid, expected_up = value, True
        elif op == "exit":
            _ = state.write(lambda info, t=now: info.mark_exited(t))
            expected_up = False
        else:
            _ = state.write(RuntimeInfo.count_restart)
            expected_restarts += 1

    snapshot = state.read()
    assert snapshot.hostname == "prop-host"
    assert snapshot.pid == expected_pid
    assert snapshot.up is expected_up
    assert snapshot.restarts == expected_restarts


@given(ops=st.lists(state_op, max_size=40))
def test_restarts_never_decrease(ops: list[tuple[str, int]]) -> None:
    """Property: the restart counter is monotonic across any write sequence."""
    state = RuntimeState("prop-host")
    previous = 0

    for op, value in ops:
        if op == "start":
            _ = state.write(lambda info, v=value: info.mark_started(v, 1))
        elif op == "exit":
            _ = state.write(lambda info: info.mark_exited(2))
        else:
            _ = state.write(RuntimeInfo.count_restart)
        current = state.read().restarts
        assert current >= previous
        previous = current
