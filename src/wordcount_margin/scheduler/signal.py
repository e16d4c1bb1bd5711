"""Single-slot wake primitive used to coalesce update requests."""

from __future__ import annotations

import threading


class UpdateCancelled(Exception):
    """Raised from ``PendingWorkSignal.wait`` once the signal is cancelled."""


class PendingWorkSignal:
    """Auto-reset flag: any number of ``set`` calls wake exactly one ``wait``.

    The flag holds at most one pending request, so a burst of notifications
    collapses into a single wake-up. ``cancel`` is sticky and wins over a
    pending request.
    """

    def __init__(self) -> None:
        self._condition = threading.Condition()
        self._pending = False
        self._cancelled = False

    @property
    def is_set(self) -> bool:
        with self._condition:
            return self._pending

    @property
    def cancelled(self) -> bool:
        with self._condition:
            return self._cancelled

    def set(self) -> None:
        with self._condition:
            self._pending = True
            self._condition.notify()

    def cancel(self) -> None:
        with self._condition:
            self._cancelled = True
            self._condition.notify_all()

    def wait(self) -> None:
        """Block until a request is pending, then consume it."""

        with self._condition:
            while not (self._pending or self._cancelled):
                self._condition.wait()
            if self._cancelled:
                raise UpdateCancelled()
            self._pending = False


__all__ = ["PendingWorkSignal", "UpdateCancelled"]
