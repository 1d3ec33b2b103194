"""
Daily progress values shown by the progress ring once a goal is confirmed.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DailyProgress:
    step_count: int = 0
    daily_goal: int = 10000

    @property
    def fraction(self) -> float:
        """Trim of the progress ring, in [0, 1]."""
        if self.daily_goal <= 0:
            return 0.0
        return min(max(self.step_count / self.daily_goal, 0.0), 1.0)

    @property
    def percent(self) -> int:
        """Percentage of the goal reached. Not capped at 100."""
        if self.daily_goal <= 0:
            return 0
        return int(self.step_count / self.daily_goal * 100)

    def count_label(self) -> str:
        return f"{self.step_count:,}"

    def goal_label(self) -> str:
        return f"of {self.daily_goal:,}"

    def percent_label(self) -> str:
        return f"{self.percent}% of goal"

    def with_step_count(self, step_count: int) -> DailyProgress:
        return DailyProgress(step_count=step_count, daily_goal=self.daily_goal)

    def with_goal(self, daily_goal: int) -> DailyProgress:
        return DailyProgress(step_count=self.step_count, daily_goal=daily_goal)
