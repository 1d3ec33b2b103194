"""
Spiral Progress Model
=====================
Turns a goal value into everything the spiral view needs to draw itself.

Why is this file needed?
------------------------
1. Separation: The geometry (dot positions, colours, zoom) is computed here,
   without Qt, so it can be unit tested on its own. The view only paints.
2. Determinism: `derive_state` is a pure function of the goal and the
   configuration. The same goal always yields the same dots.

Layout
------
The goal is split into layers of `layer_threshold` steps. Only the layers up
to the current one are shown, and the dots run along ONE continuous spiral
across all visible layers: `spiral_turns` revolutions per layer, with the
radius growing by `layer_spacing` per layer. The first `filled_dot_count`
dots are the achieved part of the spiral.

The number of dots depends on the number of visible layers, so the dot
sequence is rebuilt on every update rather than patched.

Classes:
    SpiralDot: A single dot (position, layer, filled flag, colour).
    SpiralState: Immutable result of `SpiralProgressModel.derive_state`.
    SpiralProgressModel: The calculator itself.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from typing import TYPE_CHECKING

import numpy as np

from stepstracker.config import SpiralConfig, RIPPLE_SPAN
from stepstracker.model.colors import RGB, PALETTE, color_at
from stepstracker.model.geometry_primitives import Point, polar_to_cartesian

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpiralDot:
    position: Point
    layer: int
    is_filled: bool
    color: RGB


@dataclass(frozen=True)
class SpiralState:
    """Render state of the spiral for a single goal value."""
    goal: float
    current_layer: int
    layer_progress: float
    visible_layers: int
    fill_fraction: float
    total_dot_count: int
    filled_dot_count: int
    outer_radius: float
    zoom_scale: float
    current_color: RGB
    dots: tuple[SpiralDot, ...] = field(repr=False)

    @property
    def display_goal(self) -> int:
        """The number shown in the centre of the spiral."""
        return int(round(self.goal))

    @property
    def is_beyond_first_layer(self) -> bool:
        """The label is drawn larger once the goal reaches the second layer."""
        return self.current_layer > 0

    @property
    def filled_dots(self) -> tuple[SpiralDot, ...]:
        return self.dots[:self.filled_dot_count]

    @property
    def unfilled_dots(self) -> tuple[SpiralDot, ...]:
        return self.dots[self.filled_dot_count:]


class SpiralProgressModel:
    """
    Computes `SpiralState` values from a goal.

    The model holds only its (frozen) configuration and palette, so a single
    instance can be shared between threads.
    """
    def __init__(
        self,
        config: SpiralConfig | None = None,
        palette: tuple[RGB, ...] = PALETTE
    ) -> None:
        self.config = config or SpiralConfig()
        self.palette = palette

    # ------------------------------------------------------------------------------
    # Layer decomposition
    # ------------------------------------------------------------------------------

    def clamp_goal(self, goal: float) -> float:
        cfg = self.config
        return min(max(float(goal), cfg.min_goal), cfg.max_goal)

    def current_layer(self, goal: float) -> int:
        cfg = self.config
        layer = math.floor(self.clamp_goal(goal) / cfg.layer_threshold)
        return min(max(layer, 0), cfg.max_layers - 1)

    def layer_progress(self, goal: float) -> float:
        """Fraction of the current layer covered by the goal, in [0, 1]."""
        cfg = self.config
        goal = self.clamp_goal(goal)
        layer_goal = goal - self.current_layer(goal) * cfg.layer_threshold
        return min(max(layer_goal / cfg.layer_threshold, 0.0), 1.0)

    def visible_layers(self, goal: float) -> int:
        return min(self.current_layer(goal) + 1, self.config.max_layers)

    def fill_fraction(self, goal: float) -> float:
        """Fraction of the whole rendered spiral that is filled, in [0, 1]."""
        filled_layers = self.current_layer(goal) + self.layer_progress(goal)
        return min(max(filled_layers / self.visible_layers(goal), 0.0), 1.0)

    # ------------------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------------------

    def total_dot_count(self, visible_layers: int) -> int:
        """
        Number of dots along the spiral, from its length and the dot spacing.

        The spiral length is approximated by circles at the average radius of
        the visible layers. Never less than 1.
        """
        cfg = self.config
        avg_radius = cfg.base_radius + visible_layers * cfg.layer_spacing / 2.0
        total_turns = visible_layers * cfg.spiral_turns
        circumference = 2.0 * math.pi * avg_radius * total_turns
        return max(1, int(circumference / cfg.dot_spacing))

    def outer_radius(self, visible_layers: int) -> float:
        """Extent of the figure: the last dot ring plus one layer of headroom."""
        cfg = self.config
        # dots end at base + visible * spacing; the extra spacing is the margin zoom fits
        return cfg.base_radius + visible_layers * cfg.layer_spacing + cfg.layer_spacing

    def zoom_scale(self, visible_layers: int) -> float:
        """Uniform scale in (0, 1] that fits the outer radius into the viewport."""
        outer = self.outer_radius(visible_layers)
        if outer <= self.config.max_visible_radius:
            return 1.0
        return self.config.max_visible_radius / outer

    def spiral_coordinates(
        self,
        total_dot_count: int,
        visible_layers: int
    ) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.int_], npt.NDArray[np.float64]]:
        """
        Positions of all dots along the spiral.

        Args:
            total_dot_count: Number of dots (>= 1).
            visible_layers: Number of layers the spiral spans.

        Returns:
            (xy, layers, within) where `xy` has shape (N, 2), `layers` is the
            layer of every dot and `within` its progress inside that layer.
        """
        cfg = self.config
        n = max(1, total_dot_count)

        p = np.arange(n, dtype=np.float64) / n
        turns = p * visible_layers * cfg.spiral_turns

        layer_turns = turns / cfg.spiral_turns
        layers = np.floor(layer_turns).astype(np.int_)
        within = layer_turns - layers

        radii = cfg.base_radius + layers * cfg.layer_spacing + within * cfg.layer_spacing
        angles = turns * 2.0 * np.pi

        return polar_to_cartesian(radii, angles), layers, within

    def color_at(self, layer: int, progress: float) -> RGB:
        return color_at(layer, progress, self.palette)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def derive_state(self, goal: float) -> SpiralState:
        """Compute the full render state for `goal` (clamped to the goal range)."""
        goal = self.clamp_goal(goal)

        current_layer = self.current_layer(goal)
        layer_progress = self.layer_progress(goal)
        visible_layers = self.visible_layers(goal)
        fill_fraction = self.fill_fraction(goal)

        total = self.total_dot_count(visible_layers)
        filled = min(int(round(total * fill_fraction)), total)

        xy, layers, within = self.spiral_coordinates(total, visible_layers)
        dots = tuple(
            SpiralDot(
                position=Point(x, y),
                layer=layer,
                is_filled=i < filled,
                color=self.color_at(layer, w),
            )
            for i, ((x, y), layer, w) in enumerate(zip(xy.tolist(), layers.tolist(), within.tolist()))
        )

        state = SpiralState(
            goal=goal,
            current_layer=current_layer,
            layer_progress=layer_progress,
            visible_layers=visible_layers,
            fill_fraction=fill_fraction,
            total_dot_count=total,
            filled_dot_count=filled,
            outer_radius=self.outer_radius(visible_layers),
            zoom_scale=self.zoom_scale(visible_layers),
            current_color=self.color_at(current_layer, layer_progress),
            dots=dots,
        )
        logger.debug(
            "Spiral for goal %.0f: layer %d (%.2f), %d/%d dots, zoom %.3f",
            goal, current_layer, layer_progress, filled, total, state.zoom_scale
        )
        return state


def ripple_scale(index: int, filled_dot_count: int, active: bool, span: int = RIPPLE_SPAN) -> float:
    """
    Size multiplier of a filled dot while the goal is being adjusted.

    The last `span` filled dots swell, the newest one to twice its size,
    fading by 0.1 per dot towards the older end. Other dots keep scale 1.
    """
    if not active or index >= filled_dot_count or index < 0:
        return 1.0
    distance_from_end = filled_dot_count - 1 - index
    if distance_from_end >= span:
        return 1.0
    return 2.0 - distance_from_end * 0.1
