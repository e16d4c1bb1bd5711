from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator, List

import pytest

from wordcount_margin.runtime import telemetry
from wordcount_margin.scheduler import (
    PendingWorkSignal,
    SchedulerStoppedError,
    UpdateCancelled,
    UpdateScheduler,
)

WAIT = 5.0


def test_signal_collapses_repeated_sets() -> None:
    signal = PendingWorkSignal()

    for _ in range(5):
        signal.set()
    signal.wait()

    assert not signal.is_set


def test_signal_wait_raises_after_cancel() -> None:
    signal = PendingWorkSignal()
    signal.set()
    signal.cancel()

    with pytest.raises(UpdateCancelled):
        signal.wait()


def test_signal_cancel_wakes_blocked_waiter() -> None:
    signal = PendingWorkSignal()
    outcome: List[str] = []

    def waiter() -> None:
        try:
            signal.wait()
            outcome.append("woke")
        except UpdateCancelled:
            outcome.append("cancelled")

    thread = threading.Thread(target=waiter)
    thread.start()
    signal.cancel()
    thread.join(WAIT)

    assert not thread.is_alive()
    assert outcome == ["cancelled"]


def test_initial_request_publishes_once() -> None:
    published: List[str] = []
    done = threading.Event()

    def publish(label: str) -> None:
        published.append(label)
        done.set()

    scheduler = UpdateScheduler(lambda: "label", publish)
    scheduler.start()
    assert done.wait(WAIT)
    scheduler.shutdown()

    assert published == ["label"]
    assert scheduler.passes == 1


def test_rapid_requests_coalesce_into_one_pass() -> None:
    started = threading.Event()
    gate = threading.Event()
    second_published = threading.Event()
    calls: List[int] = []

    def recompute() -> str:
        calls.append(len(calls))
        if len(calls) == 1:
            started.set()
            gate.wait(WAIT)
        return f"pass {len(calls)}"

    def publish(label: str) -> None:
        if label == "pass 2":
            second_published.set()

    scheduler = UpdateScheduler(recompute, publish)
    scheduler.start()
    assert started.wait(WAIT)

    for _ in range(25):
        scheduler.request_update()
    gate.set()

    assert second_published.wait(WAIT)
    scheduler.shutdown()

    assert len(calls) == 2


def test_recompute_failure_keeps_loop_alive() -> None:
    attempts: List[int] = []
    published: List[str] = []
    failed = threading.Event()
    recovered = threading.Event()

    def recompute() -> str:
        attempts.append(1)
        if len(attempts) == 1:
            failed.set()
            raise RuntimeError("snapshot went stale")
        return "fresh"

    def publish(label: str) -> None:
        published.append(label)
        recovered.set()

    scheduler = UpdateScheduler(recompute, publish)
    scheduler.start()
    assert failed.wait(WAIT)
    scheduler.request_update()

    assert recovered.wait(WAIT)
    scheduler.shutdown()

    assert published == ["fresh"]
    assert scheduler.passes == 1


def test_publish_failure_is_swallowed() -> None:
    calls: List[str] = []
    first = threading.Event()
    second = threading.Event()

    def publish(label: str) -> None:
        calls.append(label)
        if len(calls) == 1:
            first.set()
            raise ValueError("sink unavailable")
        second.set()

    scheduler = UpdateScheduler(lambda: "label", publish)
    scheduler.start()
    assert first.wait(WAIT)
    scheduler.request_update()

    assert second.wait(WAIT)
    scheduler.shutdown()

    assert calls == ["label", "label"]


def test_shutdown_joins_thread_and_stops_publishing() -> None:
    published: List[str] = []
    first = threading.Event()

    def publish(label: str) -> None:
        published.append(label)
        first.set()

    scheduler = UpdateScheduler(lambda: "label", publish)
    scheduler.start()
    assert first.wait(WAIT)

    scheduler.shutdown()

    assert not scheduler.running
    count_after_shutdown = len(published)
    with pytest.raises(SchedulerStoppedError):
        scheduler.request_update()
    assert len(published) == count_after_shutdown


def test_result_finished_after_shutdown_is_discarded() -> None:
    started = threading.Event()
    gate = threading.Event()
    published: List[str] = []

    def recompute() -> str:
        started.set()
        gate.wait(WAIT)
        return "late"

    scheduler = UpdateScheduler(recompute, published.append)
    scheduler.start()
    assert started.wait(WAIT)

    releaser = threading.Timer(0.05, gate.set)
    releaser.start()
    scheduler.shutdown()
    releaser.join()

    assert published == []
    assert not scheduler.running


def test_shutdown_is_idempotent() -> None:
    scheduler = UpdateScheduler(lambda: "label", lambda label: None)
    scheduler.start()

    scheduler.shutdown()
    scheduler.shutdown()

    assert not scheduler.running


def test_start_after_shutdown_is_rejected() -> None:
    scheduler = UpdateScheduler(lambda: "label", lambda label: None)
    scheduler.shutdown()

    with pytest.raises(SchedulerStoppedError):
        scheduler.start()


class RecordingLogger:
    def __init__(self) -> None:
        self.components: List[str] = []
        self.messages: List[str] = []

    def add_context(self, key: str, value: str) -> None:
        pass

    def remove_context(self, key: str) -> None:
        pass

    @contextmanager
    def track_component(self, name: str) -> Iterator[None]:
        self.components.append(name)
        yield

    @contextmanager
    def profile(self, name: str) -> Iterator[None]:
        yield

    def debug_with(self, message: str, pairs: list) -> None:
        self.messages.append(message)

    info_with = warning_with = error_with = debug_with


def test_each_pass_is_tracked_as_scheduler_component(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    logger = RecordingLogger()
    monkeypatch.setattr(telemetry, "get_logger", lambda name=None: logger)
    done = threading.Event()

    scheduler = UpdateScheduler(lambda: "label", lambda label: done.set())
    scheduler.start()
    assert done.wait(WAIT)
    scheduler.shutdown()

    assert logger.components == ["scheduler"]
    assert "event::scheduler.stopped" in logger.messages
