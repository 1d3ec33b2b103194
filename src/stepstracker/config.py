"""
Configuration & Constants
=========================
This module serves as the central registry for global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (goal range, radii, timings)
   scattered throughout the model and the views.
2. Validation: The dataclasses below check their values once, so the model
   can rely on sane geometry (no zero spacing, no inverted goal range).

Exports:
    SpiralConfig: Goal range + spiral geometry used by SpiralProgressModel.
    GoalInputConfig: Timing and gesture thresholds used by GoalInput.
"""
from __future__ import annotations

from dataclasses import dataclass

# Goal range (steps)
MIN_GOAL: float = 200.0
MAX_GOAL: float = 40000.0  # 4 layers x 10,000 steps
STEP_SIZE: float = 200.0
INITIAL_GOAL: float = 10000.0

# Spiral layers
LAYER_THRESHOLD: float = 10000.0
MAX_LAYERS: int = 4  # 1 base layer + 3 additional layers
SPIRAL_TURNS: float = 2.0  # turns per layer

# Spiral geometry (points)
BASE_RADIUS: float = 65.0
LAYER_SPACING: float = 14.0
DOT_SPACING: float = 8.0
DOT_DIAMETER: float = 4.0
MAX_VISIBLE_RADIUS: float = 120.0

# Ripple on the most recently filled dots
RIPPLE_SPAN: int = 10

# Goal input
IDLE_RESET_MS: int = 500
CONFIRM_DRAG_THRESHOLD: float = 20.0

# Watch face viewport (px)
VIEWPORT_SIZE: int = 300


@dataclass(frozen=True)
class SpiralConfig:
    """Constants of the goal range and of the spiral geometry."""
    min_goal: float = MIN_GOAL
    max_goal: float = MAX_GOAL
    step_size: float = STEP_SIZE
    layer_threshold: float = LAYER_THRESHOLD
    max_layers: int = MAX_LAYERS
    spiral_turns: float = SPIRAL_TURNS
    dot_spacing: float = DOT_SPACING
    base_radius: float = BASE_RADIUS
    layer_spacing: float = LAYER_SPACING
    max_visible_radius: float = MAX_VISIBLE_RADIUS

    def __post_init__(self) -> None:
        if self.min_goal < 0.0:
            raise ValueError(f"min_goal must be non-negative, got {self.min_goal}.")
        if self.max_goal < self.min_goal:
            raise ValueError(f"max_goal ({self.max_goal}) is below min_goal ({self.min_goal}).")
        if self.max_layers < 1:
            raise ValueError(f"max_layers must be at least 1, got {self.max_layers}.")

        positive = {
            "step_size": self.step_size,
            "layer_threshold": self.layer_threshold,
            "spiral_turns": self.spiral_turns,
            "dot_spacing": self.dot_spacing,
            "layer_spacing": self.layer_spacing,
            "max_visible_radius": self.max_visible_radius,
        }
        for name, value in positive.items():
            if value <= 0.0:
                raise ValueError(f"{name} must be positive, got {value}.")

        if self.base_radius < 0.0:
            raise ValueError(f"base_radius must be non-negative, got {self.base_radius}.")


@dataclass(frozen=True)
class GoalInputConfig:
    initial_goal: float = INITIAL_GOAL
    idle_reset_ms: int = IDLE_RESET_MS
    confirm_drag_threshold: float = CONFIRM_DRAG_THRESHOLD

    def __post_init__(self) -> None:
        if self.idle_reset_ms <= 0:
            raise ValueError(f"idle_reset_ms must be positive, got {self.idle_reset_ms}.")
        if self.confirm_drag_threshold < 0.0:
            raise ValueError(
                f"confirm_drag_threshold must be non-negative, got {self.confirm_drag_threshold}."
            )
