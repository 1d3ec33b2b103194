"""Tests for the step-count collaborator and its Qt controller."""

from __future__ import annotations

from datetime import date
import logging
import threading
from typing import Callable

import pytest
from PySide6.QtWidgets import QApplication

from stepstracker.controller.health import InMemoryStepCountProvider, StepCountController

DAY = date(2025, 10, 24)


def _today() -> date:
    return DAY


class FailingProvider:
    """Collaborator whose platform service is unavailable."""

    def fetch_cumulative_count(self, day: date) -> int:
        raise RuntimeError("health data not available")

    def observe(self, on_change: Callable[[], None]) -> None:
        raise PermissionError("authorization denied")


class FlakyProvider:
    """Succeeds once, then fails every query."""

    def __init__(self, count: int) -> None:
        self.count = count
        self.calls = 0

    def fetch_cumulative_count(self, day: date) -> int:
        self.calls += 1
        if self.calls > 1:
            raise TimeoutError("query timed out")
        return self.count

    def observe(self, on_change: Callable[[], None]) -> None:
        pass


class TestInMemoryProvider:
    def test_counts_are_per_day(self):
        provider = InMemoryStepCountProvider({DAY: 1200})
        provider.record(300, DAY)
        provider.record(50, date(2025, 10, 25))
        assert provider.fetch_cumulative_count(DAY) == 1500
        assert provider.fetch_cumulative_count(date(2025, 10, 25)) == 50
        assert provider.fetch_cumulative_count(date(2025, 10, 23)) == 0

    def test_observers_are_notified(self):
        provider = InMemoryStepCountProvider()
        calls: list[int] = []
        provider.observe(lambda: calls.append(1))
        provider.record(10, DAY)
        provider.record(20, DAY)
        assert len(calls) == 2

    def test_negative_sample_rejected(self):
        with pytest.raises(ValueError):
            InMemoryStepCountProvider().record(-1, DAY)


class TestStepCountController:
    def test_start_fetches_todays_count(self, qapp: QApplication):
        provider = InMemoryStepCountProvider({DAY: 4321})
        controller = StepCountController(provider, today=_today)
        received: list[int] = []
        controller.step_count_changed.connect(received.append)

        controller.start()

        assert controller.step_count == 4321
        assert received == [4321]

    def test_new_samples_trigger_refetch(self, qapp: QApplication):
        provider = InMemoryStepCountProvider({DAY: 1000})
        controller = StepCountController(provider, today=_today)
        controller.start()

        provider.record(250, DAY)
        qapp.processEvents()

        assert controller.step_count == 1250

    def test_samples_from_another_thread(self, qapp: QApplication):
        provider = InMemoryStepCountProvider()
        controller = StepCountController(provider, today=_today)
        controller.start()

        worker = threading.Thread(target=provider.record, args=(75, DAY))
        worker.start()
        worker.join()
        qapp.processEvents()

        assert controller.step_count == 75

    def test_unchanged_count_is_not_re_emitted(self, qapp: QApplication):
        provider = InMemoryStepCountProvider({DAY: 10})
        controller = StepCountController(provider, today=_today)
        received: list[int] = []
        controller.step_count_changed.connect(received.append)

        controller.start()
        controller.refresh()

        assert received == [10]

    def test_start_twice_observes_once(self, qapp: QApplication):
        provider = InMemoryStepCountProvider()
        controller = StepCountController(provider, today=_today)
        controller.start()
        controller.start()
        assert len(provider._observers) == 1

    def test_failures_are_logged_not_raised(self, qapp: QApplication, caplog: pytest.LogCaptureFixture):
        controller = StepCountController(FailingProvider(), today=_today)

        with caplog.at_level(logging.WARNING, logger="stepstracker.controller.health"):
            controller.start()

        assert controller.step_count == 0
        messages = [r.getMessage() for r in caplog.records]
        assert any("authorization denied" in m for m in messages)
        assert any("health data not available" in m for m in messages)

    def test_failed_query_keeps_last_count(self, qapp: QApplication):
        provider = FlakyProvider(count=800)
        controller = StepCountController(provider, today=_today)
        received: list[int] = []
        controller.step_count_changed.connect(received.append)

        controller.start()
        controller.refresh()

        assert provider.calls == 2
        assert controller.step_count == 800
        assert received == [800]
