"""
Health Data (Step Counts)
=========================
This module connects the application to a source of daily step counts.

Why is this file needed?
------------------------
1. Isolation: The platform health service (sensors, permissions, queries) is
   an injected collaborator. The app and its tests only depend on the
   two-method `StepCountProvider` protocol.
2. Threading: Providers may notify from any thread. The controller hops back
   to the Qt thread through a queued signal before touching the UI.
3. Failure policy: A failed query is logged and the last known count stays.
   Nothing is retried and no exception reaches the views.

Classes:
    StepCountProvider: The collaborator protocol.
    InMemoryStepCountProvider: Dict-backed provider for the demo and tests.
    StepCountController: Fetches today's count and emits it to the UI.
"""
from __future__ import annotations

from collections import defaultdict
from datetime import date
import logging
import threading
from typing import Callable, Protocol

from PySide6.QtCore import QObject, Qt, Signal, Slot

logger = logging.getLogger(__name__)


class StepCountProvider(Protocol):
    """Read cumulative step counts from some source (HealthKit, Google Fit, ...)."""
    def fetch_cumulative_count(self, day: date) -> int: ...
    def observe(self, on_change: Callable[[], None]) -> None: ...


class InMemoryStepCountProvider:
    """
    Step samples kept in memory, keyed by day.

    `record()` may be called from any thread; observers are notified on the
    calling thread.
    """
    def __init__(self, counts: dict[date, int] | None = None) -> None:
        self._counts: dict[date, int] = defaultdict(int, counts or {})
        self._observers: list[Callable[[], None]] = []
        self._lock = threading.Lock()

    def fetch_cumulative_count(self, day: date) -> int:
        with self._lock:
            return self._counts.get(day, 0)

    def observe(self, on_change: Callable[[], None]) -> None:
        with self._lock:
            self._observers.append(on_change)

    def record(self, steps: int, day: date | None = None) -> None:
        """Add a sample of `steps` to `day` (today by default) and notify observers."""
        if steps < 0:
            raise ValueError(f"Step samples must be non-negative, got {steps}.")
        day = day or date.today()
        with self._lock:
            self._counts[day] += steps
            observers = list(self._observers)
        for callback in observers:
            callback()


class StepCountController(QObject):
    """Keeps today's step count in sync with a `StepCountProvider`."""
    step_count_changed = Signal(int)

    # internal: observer callbacks -> Qt thread
    _refresh_requested = Signal()

    def __init__(
        self,
        provider: StepCountProvider,
        today: Callable[[], date] = date.today,
        parent: QObject | None = None
    ) -> None:
        super().__init__(parent)
        self.provider = provider
        self._today = today
        self._step_count = 0
        self._observing = False
        self._refresh_requested.connect(self.refresh, Qt.ConnectionType.QueuedConnection)

    @property
    def step_count(self) -> int:
        return self._step_count

    def start(self) -> None:
        """Fetch once and subscribe to updates. Safe to call more than once."""
        if not self._observing:
            try:
                self.provider.observe(self._on_samples_changed)
                self._observing = True
            except Exception as e:
                logger.error(f"Could not observe step samples: {e}")
        self.refresh()

    @Slot()
    def refresh(self) -> None:
        """Query today's cumulative count. On failure the count is left unchanged."""
        day = self._today()
        try:
            count = int(self.provider.fetch_cumulative_count(day))
        except Exception as e:
            logger.warning(f"Error fetching step count for {day.isoformat()}: {e}")
            return

        if count < 0:
            logger.warning(f"Ignoring negative step count {count} for {day.isoformat()}.")
            return

        if count != self._step_count:
            self._step_count = count
            logger.debug(f"Step count for {day.isoformat()}: {count}")
            self.step_count_changed.emit(count)

    def _on_samples_changed(self) -> None:
        # May run on the provider's thread
        self._refresh_requested.emit()
