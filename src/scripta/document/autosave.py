"""Debounced autosave for a :class:`DocumentStore`."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Protocol

from scripta.config import get_logger
from scripta.document.store import DocumentStore

logger = get_logger(__name__)


class Timer(Protocol):
    """The part of :class:`threading.Timer` the scheduler relies on."""

    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], Timer]


class AutosaveScheduler:
    """Save the store once it has been quiet for ``delay`` seconds.

    Every change that leaves the script dirty cancels the pending write and
    schedules a new one, so a burst of edits produces a single save of the
    final state. The timer callback runs on the timer's thread; hosts that
    drive the store from an event loop should pass a ``timer_factory`` that
    schedules on that loop instead.
    """

    def __init__(
        self,
        store: DocumentStore,
        delay: float | None = None,
        timer_factory: TimerFactory = threading.Timer,
    ) -> None:
        self.store = store
        self.delay = store.settings.autosave_delay if delay is None else delay
        self._timer_factory = timer_factory
        self._timer: Timer | None = None
        self._lock = threading.Lock()
        self._unsubscribe: Callable[[], None] | None = store.subscribe(
            self._on_change
        )

    @property
    def pending(self) -> bool:
        """Whether a save is scheduled."""
        return self._timer is not None

    def _on_change(self) -> None:
        if not self.store.is_dirty:
            return
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = self._timer_factory(self.delay, self._fire)
            self._timer.start()

    def _fire(self) -> None:
        with self._lock:
            self._timer = None
        if not self.store.save():
            logger.warning("Autosave failed, retrying after the next edit")

    def flush(self) -> bool:
        """Write a pending save immediately.

        Returns:
            True if nothing was pending or the save succeeded.
        """
        with self._lock:
            timer, self._timer = self._timer, None
        if timer is None:
            return True
        timer.cancel()
        return self.store.save()

    def close(self) -> None:
        """Cancel any pending save and stop listening to the store."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
