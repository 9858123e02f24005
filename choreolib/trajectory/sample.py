"""
Base abstraction for a single timestamped trajectory sample.

Each drivetrain kind provides one concrete subclass. A trajectory only relies
on the operations declared here, so it stays generic over the sample kind.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TypeVar

from .pose import Pose2d

S = TypeVar("S", bound="TrajectorySample")


class TrajectorySample(ABC):
    """Immutable kinematic snapshot of the robot at one timestamp."""

    __slots__ = ()

    @property
    @abstractmethod
    def timestamp(self) -> float:
        """Seconds since the beginning of the trajectory."""

    @property
    @abstractmethod
    def pose(self) -> Pose2d:
        """Field pose at this sample."""

    @abstractmethod
    def offset_by(self: S, timestamp_offset: float) -> S:
        """Return a copy of this sample with its timestamp shifted by ``timestamp_offset``."""

    @abstractmethod
    def interpolate(self: S, ahead: S, timestamp: float) -> S:
        """
        Linearly blend this sample towards ``ahead`` at ``timestamp``.

        The blend factor is ``(timestamp - self.timestamp) / (ahead.timestamp - self.timestamp)``
        and is not clamped, so timestamps outside the pair extrapolate. The caller
        must not pass a pair with equal timestamps.
        """
