from __future__ import annotations

from enum import IntEnum
import logging

from PySide6.QtCore import QObject, Signal

from stepstracker.config import INITIAL_GOAL
from stepstracker.model.progress import DailyProgress
from stepstracker.model.spiral import SpiralProgressModel, SpiralState

logger = logging.getLogger(__name__)


class Stage(IntEnum):
    """The screens of the app, in order."""
    GOAL_SETTING = 0
    PROGRESS = 1


class Store(QObject):
    """
    Central state store with signals for view sync.

    Views never compute geometry themselves: every goal change produces a new
    immutable `SpiralState` which is emitted as a whole.
    """
    spiral_changed = Signal(object)
    progress_changed = Signal(object)
    stage_changed = Signal(int)

    def __init__(self, model: SpiralProgressModel | None = None, initial_goal: float = INITIAL_GOAL) -> None:
        super().__init__()
        self.model = model or SpiralProgressModel()
        self._stage = Stage.GOAL_SETTING
        self._spiral = self.model.derive_state(initial_goal)
        self._progress = DailyProgress(daily_goal=self._spiral.display_goal)

    @property
    def stage(self) -> Stage:
        return self._stage

    @property
    def spiral(self) -> SpiralState:
        return self._spiral

    @property
    def progress(self) -> DailyProgress:
        return self._progress

    def set_goal(self, goal: float) -> None:
        if self._stage != Stage.GOAL_SETTING:
            logger.debug(f"Ignoring goal {goal:.0f}: goal already confirmed.")
            return
        self._spiral = self.model.derive_state(goal)
        self.spiral_changed.emit(self._spiral)

    def confirm_goal(self, goal: int) -> None:
        """Freeze the goal and move on to the progress screen."""
        if self._stage != Stage.GOAL_SETTING:
            return
        self._progress = self._progress.with_goal(goal)
        logger.info(f"Daily goal set to {goal} steps.")
        self.progress_changed.emit(self._progress)
        self._set_stage(Stage.PROGRESS)

    def set_step_count(self, step_count: int) -> None:
        if step_count == self._progress.step_count:
            return
        self._progress = self._progress.with_step_count(step_count)
        self.progress_changed.emit(self._progress)

    def _set_stage(self, stage: Stage) -> None:
        if stage != self._stage:
            self._stage = stage
            logger.info(f"Switching to stage {stage.name}.")
            self.stage_changed.emit(int(stage))
