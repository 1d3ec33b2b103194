"""
Spiral Colours
==============
A smooth rainbow across the spiral layers.

Each layer spans two palette steps, so layer 0 runs red -> yellow, layer 1
yellow -> cyan, and so on. The colour at the end of one layer equals the
colour at the start of the next one.
"""
from __future__ import annotations

from dataclasses import dataclass
import math


@dataclass(frozen=True)
class RGB:
    """An sRGB colour with channels in [0, 1]."""
    r: float
    g: float
    b: float

    def interpolated(self, other: RGB, amount: float) -> RGB:
        """Linear blend towards `other`; `amount` is clamped to [0, 1]."""
        t = min(max(amount, 0.0), 1.0)
        return RGB(
            self.r + (other.r - self.r) * t,
            self.g + (other.g - self.g) * t,
            self.b + (other.b - self.b) * t,
        )


WHITE = RGB(1.0, 1.0, 1.0)

# Watch system colours, in order along the spiral.
PALETTE: tuple[RGB, ...] = (
    RGB(1.000, 0.231, 0.188),  # red: layer 0 start
    RGB(1.000, 0.584, 0.000),  # orange
    RGB(1.000, 0.800, 0.000),  # yellow: layer 1
    RGB(0.204, 0.780, 0.349),  # green
    RGB(0.196, 0.678, 0.902),  # cyan: layer 2
    RGB(0.000, 0.478, 1.000),  # blue
    RGB(0.686, 0.322, 0.871),  # purple: layer 3
    RGB(1.000, 0.176, 0.333),  # pink: overflow
)

STEPS_PER_LAYER = 2


def color_at(layer: int, progress: float, palette: tuple[RGB, ...] = PALETTE) -> RGB:
    """
    Colour of the spiral at a given layer and progress within that layer.

    Args:
        layer: Zero-based spiral layer.
        progress: Progress within the layer, nominally in [0, 1].
        palette: Ordered reference colours.

    Returns:
        The colour interpolated between the two neighbouring reference colours.
        Indices before the first or past the last colour are clamped.
    """
    if not palette:
        raise ValueError("Palette must contain at least one colour.")

    last = len(palette) - 1
    index = max(0.0, layer * STEPS_PER_LAYER + progress * STEPS_PER_LAYER)
    lower = math.floor(index)

    if lower >= last:
        return palette[last]

    return palette[lower].interpolated(palette[lower + 1], index - lower)
