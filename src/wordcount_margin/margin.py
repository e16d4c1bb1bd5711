"""The word count margin: host bindings, label state and lifecycle."""

from __future__ import annotations

import threading
from contextlib import AbstractContextManager
from typing import Callable, List, Optional

from wordcount_margin.config import MarginSettings
from wordcount_margin.counting import count
from wordcount_margin.host import (
    SELECTION_CHANGED,
    TEXT_CHANGED,
    TextViewHost,
    counting_ranges,
)
from wordcount_margin.runtime import telemetry
from wordcount_margin.scheduler import UpdateScheduler

MARGIN_NAME = "WordCountMargin"
LOGGER_NAME = "wordcount_margin.margin"

LabelListener = Callable[[str], None]


class MarginDisposedError(RuntimeError):
    """Raised when a disposed margin is asked to do work."""

    def __init__(self, margin_name: str = MARGIN_NAME) -> None:
        super().__init__(f"Margin '{margin_name}' has been disposed")
        self.margin_name = margin_name


class WordCountMargin(AbstractContextManager["WordCountMargin"]):
    """Shows ``Chars / Words / Lines`` for the selection or the whole document.

    The margin subscribes to the host's text and selection notifications and
    forwards each one to an ``UpdateScheduler``. The scheduler thread pulls a
    fresh snapshot, counts it and stores the label here; label listeners are
    invoked on that thread, so UI hosts must marshal the update themselves.
    """

    def __init__(
        self,
        host: TextViewHost,
        *,
        settings: Optional[MarginSettings] = None,
        autostart: bool = True,
    ) -> None:
        self.host = host
        self.settings = settings or MarginSettings.from_env()
        self._label_text = ""
        self._listeners: List[LabelListener] = []
        self._lock = threading.Lock()
        self._disposed = False

        if self.settings.enabled:
            self.host.subscribe(TEXT_CHANGED, self._on_host_changed)
            self.host.subscribe(SELECTION_CHANGED, self._on_host_changed)
        self._scheduler = UpdateScheduler(
            self._compute_label,
            self._set_label_text,
            name=f"{MARGIN_NAME}-updater",
        )
        telemetry.record_event(
            "margin.created", level="debug", logger_name=LOGGER_NAME
        )
        if autostart:
            self.start()

    @property
    def label_text(self) -> str:
        return self._label_text

    @property
    def enabled(self) -> bool:
        self._throw_if_disposed()
        return self.settings.enabled

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def scheduler(self) -> UpdateScheduler:
        return self._scheduler

    def start(self) -> None:
        """Start the updater thread. A disabled margin never starts it."""

        self._throw_if_disposed()
        if not self.settings.enabled:
            return
        self._scheduler.start()

    def request_update(self) -> None:
        self._throw_if_disposed()
        self._scheduler.request_update()

    def add_label_listener(self, listener: LabelListener) -> None:
        self._throw_if_disposed()
        with self._lock:
            self._listeners.append(listener)

    def remove_label_listener(self, listener: LabelListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def get_text_view_margin(self, margin_name: str) -> Optional["WordCountMargin"]:
        """Return ``self`` when ``margin_name`` matches, ignoring case."""

        return self if margin_name.casefold() == MARGIN_NAME.casefold() else None

    def dispose(self) -> None:
        if self._disposed:
            return
        if self.settings.enabled:
            self.host.unsubscribe(TEXT_CHANGED, self._on_host_changed)
            self.host.unsubscribe(SELECTION_CHANGED, self._on_host_changed)
        self._scheduler.shutdown(self.settings.shutdown_timeout)
        self._disposed = True
        telemetry.record_event(
            "margin.disposed",
            level="debug",
            data={"passes": self._scheduler.passes},
            logger_name=LOGGER_NAME,
        )

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.dispose()
        return False

    def _on_host_changed(self, payload: object | None) -> None:
        del payload
        self.request_update()

    def _compute_label(self) -> str:
        return count(counting_ranges(self.host)).format_label()

    def _set_label_text(self, value: str) -> None:
        if value == self._label_text:
            return
        self._label_text = value
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(value)

    def _throw_if_disposed(self) -> None:
        if self._disposed:
            raise MarginDisposedError(MARGIN_NAME)


__all__ = ["LabelListener", "MARGIN_NAME", "MarginDisposedError", "WordCountMargin"]
