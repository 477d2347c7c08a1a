from __future__ import annotations

import threading

from omdb_field.editor.debounce import Debouncer


def test_flush_runs_only_the_last_call() -> None:
    calls: list[str] = []
    debouncer = Debouncer(calls.append, wait=60)

    debouncer.call("a")
    debouncer.call("b")
    debouncer.call("c")
    assert calls == []
    assert debouncer.pending is True

    assert debouncer.flush() is True
    assert calls == ["c"]
    assert debouncer.pending is False
    assert debouncer.flush() is False


def test_cancel_drops_pending_call() -> None:
    calls: list[str] = []
    debouncer = Debouncer(calls.append, wait=60)

    debouncer.call("a")
    debouncer.cancel()

    assert debouncer.pending is False
    assert debouncer.flush() is False
    assert calls == []


def test_timer_fires_after_wait() -> None:
    done = threading.Event()
    calls: list[str] = []

    def record(value: str) -> None:
        calls.append(value)
        done.set()

    debouncer = Debouncer(record, wait=0.01)
    debouncer.call("x")

    assert done.wait(timeout=5)
    assert calls == ["x"]
    assert debouncer.pending is False


def test_timer_errors_are_logged_not_raised() -> None:
    done = threading.Event()

    def boom(_value: str) -> None:
        done.set()
        raise RuntimeError("boom")

    debouncer = Debouncer(boom, wait=0.01)
    debouncer.call("x")

    assert done.wait(timeout=5)
