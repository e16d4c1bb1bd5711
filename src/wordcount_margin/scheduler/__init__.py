"""Debounced background recomputation."""

from .signal import PendingWorkSignal, UpdateCancelled
from .updater import SchedulerStoppedError, UpdateScheduler

__all__ = [
    "PendingWorkSignal",
    "SchedulerStoppedError",
    "UpdateCancelled",
    "UpdateScheduler",
]
