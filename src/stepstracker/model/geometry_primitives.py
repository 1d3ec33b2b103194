"""
Geometric Primitives for the spiral layout.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING
import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class Point:
    """
    A cartesian offset from the centre of the watch face.

    Screen Y grows downwards; the model does not care, the renderer maps it.
    """
    x: float
    y: float


def polar_to_cartesian(
    radii: npt.NDArray[np.float64],
    angles: npt.NDArray[np.float64]
) -> npt.NDArray[np.float64]:
    """
    Convert matching arrays of radii and angles to an (N, 2) array of (x, y).

    Args:
        radii: Distances from the centre.
        angles: Angles in radians, measured from +X towards +Y.

    Returns:
        An array of shape (N, 2).
    """
    radii = np.asarray(radii, dtype=np.float64)
    angles = np.asarray(angles, dtype=np.float64)
    if radii.shape != angles.shape:
        raise ValueError(f"Shape mismatch: radii {radii.shape} vs angles {angles.shape}.")
    return np.c_[radii * np.cos(angles), radii * np.sin(angles)]
