"""
Application Initialization
==========================
Builds the model, the controllers and the main window, then starts the Qt
event loop.

It acts as the "Dependency Injection" root:
1. Instantiates the spiral model and the central Store.
2. Instantiates the goal input adapter and the step-count controller around
   an injected step-count provider.
3. Passes them into the main window so they can communicate.

Run with: python -m stepstracker
"""
from __future__ import annotations

import argparse
import logging
import random
import sys

from PySide6.QtCore import QTimer

from stepstracker.app.application import create_app
from stepstracker.app.goal_input import GoalInput
from stepstracker.app.state import Store
from stepstracker.app.ui.main_window import MainWindow
from stepstracker.config import SpiralConfig, GoalInputConfig
from stepstracker.controller.health import InMemoryStepCountProvider, StepCountController
from stepstracker.logging_config import setup_logging
from stepstracker.model.goal import GoalRange
from stepstracker.model.spiral import SpiralProgressModel

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="stepstracker", description="Watch-face style step tracker.")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None, help="Also write logs to this file.")
    parser.add_argument(
        "--demo-interval",
        type=int,
        default=3000,
        help="Milliseconds between simulated step samples (0 disables the simulation).",
    )
    return parser.parse_args(argv)


def start_demo_walker(provider: InMemoryStepCountProvider, interval_ms: int) -> QTimer | None:
    """Feed the in-memory provider with random step samples, like a walk in progress."""
    if interval_ms <= 0:
        return None
    timer = QTimer()
    timer.setInterval(interval_ms)
    timer.timeout.connect(lambda: provider.record(random.randint(5, 60)))
    timer.start()
    logger.info(f"Simulating step samples every {interval_ms} ms.")
    return timer


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the application."""
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    setup_logging(level=getattr(logging, args.log_level), log_file=args.log_file)

    app = create_app()

    spiral_config = SpiralConfig()
    input_config = GoalInputConfig()

    goal_input = GoalInput(GoalRange.from_config(spiral_config), input_config)
    store = Store(SpiralProgressModel(spiral_config), initial_goal=goal_input.goal)

    provider = InMemoryStepCountProvider()
    step_counts = StepCountController(provider)

    win = MainWindow(store, goal_input, step_counts)
    win.show()

    step_counts.start()
    walker = start_demo_walker(provider, args.demo_interval)

    exit_code = app.exec()
    if walker is not None:
        walker.stop()
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
