"""Shared fixtures for the test suite."""

from __future__ import annotations

import os

# Must be set before the first Qt import
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication

from stepstracker.config import SpiralConfig
from stepstracker.model.spiral import SpiralProgressModel


@pytest.fixture(scope="session")
def qapp() -> QApplication:
    """One QApplication for the whole session (offscreen platform)."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


@pytest.fixture()
def config() -> SpiralConfig:
    return SpiralConfig()


@pytest.fixture()
def model(config: SpiralConfig) -> SpiralProgressModel:
    return SpiralProgressModel(config)
