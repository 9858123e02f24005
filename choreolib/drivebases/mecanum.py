"""
Mecanum drivetrain: mixes a planar movement vector and a turn rate into four wheel powers.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import Protocol

from choreolib.config import TRACE_ENABLED

from .base import Driveable

logger = logging.getLogger(__name__)


class Motor(Protocol):
    def set_power(self, power: float) -> None: ...


class MecanumDrive(Driveable):
    """Four-motor mecanum drive, wheels ordered FL, FR, BL, BR."""

    def __init__(self, front_left: Motor, front_right: Motor, back_left: Motor, back_right: Motor) -> None:
        self.front_left = front_left
        self.front_right = front_right
        self.back_left = back_left
        self.back_right = back_right

    @staticmethod
    def wheel_powers(movement: Sequence[float], turn_speed: float) -> tuple[float, float, float, float]:
        """Return (FL, FR, BL, BR) powers for a robot-relative movement and turn rate."""
        strafe = -float(movement[1])
        forward = -float(movement[0])

        r = math.hypot(-strafe, forward)
        robot_angle = math.atan2(forward, -strafe) + math.pi / 4

        fl = r * math.cos(robot_angle) + turn_speed
        fr = r * math.sin(robot_angle) - turn_speed
        bl = r * math.sin(robot_angle) + turn_speed
        br = r * math.cos(robot_angle) - turn_speed
        return fl, fr, bl, br

    def set(self, movement: Sequence[float], turn_speed: float) -> None:
        fl, fr, bl, br = self.wheel_powers(movement, turn_speed)
        if TRACE_ENABLED:
            logger.trace(f"mecanum powers fl={fl:.3f} fr={fr:.3f} bl={bl:.3f} br={br:.3f}")  # type: ignore[attr-defined]
        self.front_left.set_power(fl)
        self.front_right.set_power(fr)
        self.back_left.set_power(bl)
        self.back_right.set_power(br)
