"""
Goal Range
==========
Clamping and quantization of the daily step goal.

The goal is only ever changed in whole `step_size` increments, and it never
leaves [min_goal, max_goal]. Both rules live here so the Qt input adapter and
the spiral model agree on what a valid goal is.
"""
from __future__ import annotations

from dataclasses import dataclass

from stepstracker.config import SpiralConfig


@dataclass(frozen=True)
class GoalRange:
    min_goal: float
    max_goal: float
    step_size: float

    def __post_init__(self) -> None:
        if self.step_size <= 0.0:
            raise ValueError(f"step_size must be positive, got {self.step_size}.")
        if self.max_goal < self.min_goal:
            raise ValueError(f"max_goal ({self.max_goal}) is below min_goal ({self.min_goal}).")

    @classmethod
    def from_config(cls, config: SpiralConfig) -> GoalRange:
        return cls(config.min_goal, config.max_goal, config.step_size)

    def clamp(self, goal: float) -> float:
        return min(max(goal, self.min_goal), self.max_goal)

    def quantize(self, goal: float) -> float:
        """Snap to the nearest multiple of `step_size`, then clamp."""
        return self.clamp(round(goal / self.step_size) * self.step_size)

    def step(self, goal: float, delta: float) -> float:
        """
        Apply a rotary delta, measured in steps of `step_size`.

        Examples:
            >>> GoalRange(200, 40000, 200).step(10000, 3)
            10600.0
            >>> GoalRange(200, 40000, 200).step(300, -5)
            200
        """
        return self.quantize(goal + delta * self.step_size)
