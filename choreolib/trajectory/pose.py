"""
Planar pose type shared by samples, trajectories and drivebases.
"""

from typing import NamedTuple

import numpy as np


class Pose2d(NamedTuple):
    """Field pose: x, y in meters, heading in radians (0 along +X)."""

    x: float
    y: float
    heading: float = 0.0

    @property
    def translation(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=np.float64)
