"""
Goal Input (Rotary Adapter)
===========================
Maps rotary input (watch crown, mouse wheel, arrow keys) onto the goal.

Why is this file needed?
------------------------
1. Quantization: Deltas are turned into whole `step_size` increments and the
   goal is kept inside its range (see `GoalRange`).
2. Emphasis: While the user keeps turning, `active` is true. It falls back
   to false after an idle window with no input. The view uses it for the
   ripple on the newest dots; it carries no other meaning.
3. Confirmation: A drag past a small threshold reveals "Continue". Releasing
   that drag, or pressing Continue, fires `goal_confirmed` exactly once and
   freezes the goal.
"""
from __future__ import annotations

import logging

from PySide6.QtCore import QObject, QTimer, Signal, Slot

from stepstracker.config import GoalInputConfig
from stepstracker.model.goal import GoalRange

logger = logging.getLogger(__name__)


class GoalInput(QObject):
    goal_changed = Signal(float)
    active_changed = Signal(bool)
    continue_visible_changed = Signal(bool)
    goal_confirmed = Signal(int)

    def __init__(
        self,
        goal_range: GoalRange,
        config: GoalInputConfig | None = None,
        parent: QObject | None = None
    ) -> None:
        super().__init__(parent)
        self.goal_range = goal_range
        self.config = config or GoalInputConfig()

        self._goal = goal_range.quantize(self.config.initial_goal)
        self._active = False
        self._continue_visible = False
        self._confirmed = False
        self._drag_offset = 0.0

        # idle reset; restarting supersedes the pending timeout
        self._idle_timer = QTimer(self)
        self._idle_timer.setSingleShot(True)
        self._idle_timer.setInterval(self.config.idle_reset_ms)
        self._idle_timer.timeout.connect(self._on_idle_timeout)

    # ------------------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------------------

    @property
    def goal(self) -> float:
        return self._goal

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def is_continue_visible(self) -> bool:
        return self._continue_visible

    @property
    def is_confirmed(self) -> bool:
        return self._confirmed

    # ------------------------------------------------------------------------------
    # Rotary input
    # ------------------------------------------------------------------------------

    @Slot(float)
    def apply_delta(self, delta: float) -> None:
        """Move the goal by `delta` steps of `step_size` (negative turns down)."""
        if self._confirmed:
            logger.debug("Goal is confirmed; ignoring rotary input.")
            return
        self._update_goal(self.goal_range.step(self._goal, delta))

    @Slot(float)
    def set_goal(self, goal: float) -> None:
        if self._confirmed:
            logger.debug("Goal is confirmed; ignoring new goal.")
            return
        self._update_goal(self.goal_range.quantize(goal))

    def _update_goal(self, new_goal: float) -> None:
        if new_goal == self._goal:
            return
        self._goal = new_goal
        logger.debug(f"Goal -> {new_goal:.0f}")
        self._set_active(True)
        self._idle_timer.start()
        self.goal_changed.emit(new_goal)

    @Slot()
    def _on_idle_timeout(self) -> None:
        self._set_active(False)

    def _set_active(self, active: bool) -> None:
        if active != self._active:
            self._active = active
            self.active_changed.emit(active)

    # ------------------------------------------------------------------------------
    # Confirmation gesture
    # ------------------------------------------------------------------------------

    @Slot(float)
    def drag_moved(self, offset: float) -> None:
        """Vertical drag distance from the press point, in points."""
        if self._confirmed:
            return
        self._drag_offset = offset
        self._set_continue_visible(offset > self.config.confirm_drag_threshold)

    @Slot()
    def drag_ended(self) -> None:
        """Releasing a drag held past the threshold confirms the goal."""
        sustained = self._drag_offset > self.config.confirm_drag_threshold
        self._drag_offset = 0.0
        if self._confirmed:
            return
        if sustained:
            self.confirm()
        else:
            self._set_continue_visible(False)

    @Slot()
    def confirm(self) -> None:
        if self._confirmed:
            return
        self._confirmed = True
        self._idle_timer.stop()
        self._set_active(False)
        self._set_continue_visible(False)
        goal = int(round(self._goal))
        logger.info(f"Goal confirmed: {goal} steps.")
        self.goal_confirmed.emit(goal)

    def _set_continue_visible(self, visible: bool) -> None:
        if visible != self._continue_visible:
            self._continue_visible = visible
            self.continue_visible_changed.emit(visible)
