import threading

import pytest

from forever.supervisor import ReadWriteLock, RuntimeInfo, RuntimeState, StopFlag


class TestRuntimeState:
    def test_initial_snapshot(self, state: RuntimeState) -> None:
        snapshot = state.read()

        assert snapshot.hostname == "test-host"
        assert snapshot.up is False
        assert snapshot.restarts == 0

    def test_write_commits_update(self, state: RuntimeState) -> None:
        committed = state.write(lambda info: info.mark_started(99, 1_234))

        assert committed.pid == 99
        assert state.read() == committed

    def test_write_that_raises_is_not_visible(self, state: RuntimeState) -> None:
        def half_update(info: RuntimeInfo) -> None:
            info.pid = 55
            msg = "boom"
            raise RuntimeError(msg)

        with pytest.raises(RuntimeError, match="boom"):
            _ = state.write(half_update)

        assert state.read().pid == 0

    def test_hostname_cannot_change(self, state: RuntimeState) -> None:
        def rename(info: RuntimeInfo) -> None:
            info.hostname = "elsewhere"
            info.up = True

        with pytest.raises(ValueError, match="hostname"):
            _ = state.write(rename)

        snapshot = state.read()
        assert snapshot.hostname == "test-host"
        assert snapshot.up is False

    def test_read_returns_copy(self, state: RuntimeState) -> None:
        before = state.read()

        _ = state.write(lambda info: info.count_restart())

        assert before.restarts == 0
        assert state.read().restarts == 1

    def test_readers_never_see_partial_updates(self, state: RuntimeState) -> None:
        stop = threading.Event()
        violations: list[object] = []

        def writer() -> None:
            for i in range(1, 2_000):
                _ = state.write(lambda info, i=i: info.mark_started(i, i))
                _ = state.write(lambda info, i=i: info.mark_exited(i))
            stop.set()

        def reader() -> None:
            while not stop.is_set():
                snapshot = state.read()
                if snapshot.up and snapshot.pid == 0:
                    violations.append(snapshot)
                if snapshot.pid != snapshot.start_time:
                    violations.append(snapshot)

        threads = [threading.Thread(target=reader) for _ in range(3)]
        threads.append(threading.Thread(target=writer))
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        assert violations == []


class TestReadWriteLock:
    def test_readers_share_the_lock(self) -> None:
        lock = ReadWriteLock()
        second_reader_done = threading.Event()

        def second_reader() -> None:
            with lock.read_locked():
                second_reader_done.set()

        with lock.read_locked():
            thread = threading.Thread(target=second_reader)
            thread.start()
            assert second_reader_done.wait(timeout=2)
        thread.join()

    def test_writer_excludes_readers(self) -> None:
        lock = ReadWriteLock()
        reader_done = threading.Event()

        def reader() -> None:
            with lock.read_locked():
                reader_done.set()

        with lock.write_locked():
            thread = threading.Thread(target=reader)
            thread.start()
            assert not reader_done.wait(timeout=0.1)

        assert reader_done.wait(timeout=2)
        thread.join()

    def test_writer_waits_for_readers(self) -> None:
        lock = ReadWriteLock()
        writer_done = threading.Event()

        def writer() -> None:
            with lock.write_locked():
                writer_done.set()

        with lock.read_locked():
            thread = threading.Thread(target=writer)
            thread.start()
            assert not writer_done.wait(timeout=0.1)

        assert writer_done.wait(timeout=2)
        thread.join()

    def test_writers_exclude_each_other(self) -> None:
        lock = ReadWriteLock()
        counter = [0]

        def bump() -> None:
            for _ in range(500):
                with lock.write_locked():
                    value = counter[0]
                    counter[0] = value + 1

        threads = [threading.Thread(target=bump) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert counter[0] == 2_000


class TestStopFlag:
    def test_starts_unset(self, stop_flag: StopFlag) -> None:
        assert stop_flag.is_set() is False

    def test_first_set_reports_transition(self, stop_flag: StopFlag) -> None:
        assert stop_flag.set() is True
        assert stop_flag.set() is False
        assert stop_flag.is_set() is True

    def test_wait_times_out_when_unset(self, stop_flag: StopFlag) -> None:
        assert stop_flag.wait(timeout=0.01) is False

    def test_wait_returns_once_set_from_other_thread(self, stop_flag: StopFlag) -> None:
        timer = threading.Timer(0.05, stop_flag.set)
        timer.start()

        assert stop_flag.wait(timeout=2) is True
        timer.join()
