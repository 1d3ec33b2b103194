"""
Main window: the goal-setting spiral first, then the progress ring.
"""
from __future__ import annotations

from PySide6.QtCore import Slot
from PySide6.QtWidgets import QMainWindow, QStackedWidget

from stepstracker.app.application import VISIBLE_APP_NAME
from stepstracker.app.goal_input import GoalInput
from stepstracker.app.state import Store, Stage
from stepstracker.app.ui.progress_view import ProgressRingView
from stepstracker.app.ui.spiral_view import SpiralView
from stepstracker.config import VIEWPORT_SIZE
from stepstracker.controller.health import StepCountController


class MainWindow(QMainWindow):
    def __init__(
        self,
        store: Store,
        goal_input: GoalInput,
        step_counts: StepCountController | None = None
    ) -> None:
        super().__init__()
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(VIEWPORT_SIZE, VIEWPORT_SIZE)

        self.store = store
        self.goal_input = goal_input
        # the input adapter owns the quantized goal
        store.set_goal(goal_input.goal)

        self.stack = QStackedWidget(self)
        self.spiral_view = SpiralView(store, goal_input, parent=self.stack)
        self.progress_view = ProgressRingView(store, parent=self.stack)
        self.stack.addWidget(self.spiral_view)
        self.stack.addWidget(self.progress_view)
        self.setCentralWidget(self.stack)

        # goal input -> store
        goal_input.goal_changed.connect(store.set_goal)
        goal_input.goal_confirmed.connect(store.confirm_goal)

        if step_counts is not None:
            step_counts.step_count_changed.connect(store.set_step_count)

        store.stage_changed.connect(self._on_stage_changed)
        self._on_stage_changed(int(store.stage))

    @Slot(int)
    def _on_stage_changed(self, stage: int) -> None:
        if Stage(stage) == Stage.GOAL_SETTING:
            self.stack.setCurrentWidget(self.spiral_view)
            self.spiral_view.setFocus()
        else:
            self.stack.setCurrentWidget(self.progress_view)
