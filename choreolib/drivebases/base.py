"""
Interfaces between trajectory playback and the robot's drivetrain and localizer.

Movement vectors are planar (x forward, y left) in the units the drivetrain
expects; angles are radians.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

import numpy as np
from spatialmath import SO2

from choreolib.trajectory import Pose2d


@runtime_checkable
class Localizer(Protocol):
    """Source of the robot's current field pose and heading."""

    @property
    def pose(self) -> Pose2d: ...

    @property
    def angle(self) -> float: ...


class Driveable(ABC):
    """
    A drivetrain that can be commanded robot-relative or field-relative.

    Subclasses implement ``set``; the remaining helpers convert their inputs
    into a robot-relative movement vector.
    """

    @abstractmethod
    def set(self, movement: Sequence[float], turn_speed: float) -> None:
        """Apply a robot-relative movement vector and turn rate."""

    def set_field(self, movement: Sequence[float], turn_speed: float, angle: float) -> None:
        """Apply a field-relative movement vector for a robot whose heading is ``angle``."""
        vec = np.array([movement[0], movement[1]], dtype=np.float64)
        # field frame to robot frame: undo the robot heading
        rotated = SO2(-angle).A @ vec
        self.set(rotated, turn_speed)

    def drive(self, movement: Pose2d, turn_speed: float) -> None:
        self.set(movement.translation, turn_speed)

    def drive_field(self, movement: Pose2d, turn_speed: float, angle: float) -> None:
        self.set_field(movement.translation, turn_speed, angle)
