"""Background thread that recomputes the label whenever it is signalled."""

from __future__ import annotations

import threading
from typing import Callable, Optional

from wordcount_margin.runtime import telemetry

from .signal import PendingWorkSignal, UpdateCancelled

LOGGER_NAME = "wordcount_margin.scheduler"


class SchedulerStoppedError(RuntimeError):
    """Raised when work is requested from a scheduler that was shut down."""


class UpdateScheduler:
    """Runs ``recompute`` on a dedicated thread and hands results to ``publish``.

    The scheduler alternates between waiting on its ``PendingWorkSignal`` and
    running one recomputation pass. Requests that arrive while a pass is
    running, or while one is already pending, fold into the next pass.
    One request is queued at construction so the first pass runs as soon as
    the thread starts.
    """

    def __init__(
        self,
        recompute: Callable[[], str],
        publish: Callable[[str], None],
        *,
        name: str = "wordcount-updater",
    ) -> None:
        self.name = name
        self._recompute = recompute
        self._publish = publish
        self._signal = PendingWorkSignal()
        self._thread: Optional[threading.Thread] = None
        self._stopped = False
        self._passes = 0
        self._signal.set()

    @property
    def passes(self) -> int:
        """Number of recomputation passes that ran to completion."""

        return self._passes

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._stopped:
            raise SchedulerStoppedError(f"Scheduler '{self.name}' is shut down")
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        telemetry.record_event(
            "scheduler.started",
            level="debug",
            data={"scheduler": self.name},
            logger_name=LOGGER_NAME,
        )

    def request_update(self) -> None:
        if self._stopped:
            raise SchedulerStoppedError(f"Scheduler '{self.name}' is shut down")
        self._signal.set()

    def shutdown(self, timeout: Optional[float] = None) -> None:
        """Cancel the loop and block until the thread has exited.

        Safe to call more than once; only the first call signals and joins.
        """

        if self._stopped:
            return
        self._stopped = True
        self._signal.cancel()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        alive = thread is not None and thread.is_alive()
        telemetry.record_event(
            "scheduler.stopped",
            level="warning" if alive else "debug",
            data={"scheduler": self.name, "passes": self._passes, "alive": alive},
            logger_name=LOGGER_NAME,
        )

    def _run(self) -> None:
        while True:
            try:
                self._signal.wait()
            except UpdateCancelled:
                return
            self._run_pass()

    def _run_pass(self) -> None:
        try:
            with telemetry.span(
                name="scheduler::recompute",
                logger_name=LOGGER_NAME,
                component="scheduler",
                metadata={"scheduler": self.name},
            ) as handle:
                label = self._recompute()
                if self._signal.cancelled:
                    # Shutdown began mid-pass; the result must not reach the host.
                    handle.cancel("shutdown")
                    return
                handle.add_metadata("label", label)
        except Exception as exc:
            self._report("scheduler.recompute_failed", exc)
            return

        try:
            self._publish(label)
        except Exception as exc:
            self._report("scheduler.publish_failed", exc)
            return
        self._passes += 1

    def _report(self, event: str, exc: Exception) -> None:
        telemetry.record_event(
            event,
            level="warning",
            data={"scheduler": self.name, "error": repr(exc)},
            logger_name=LOGGER_NAME,
        )


__all__ = ["LOGGER_NAME", "SchedulerStoppedError", "UpdateScheduler"]
