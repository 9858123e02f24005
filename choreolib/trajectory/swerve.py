"""
Swerve drivetrain sample.

Module forces are stored as read-only numpy arrays ordered [FL, FR, BL, BR].
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import numpy as np

from choreolib.config import MODULE_COUNT

from .pose import Pose2d
from .sample import TrajectorySample

_SCALAR_FIELDS = ("t", "x", "y", "heading", "vx", "vy", "omega", "ax", "ay", "alpha")


def _zero_forces() -> np.ndarray:
    forces = np.zeros((MODULE_COUNT,), dtype=np.float64)
    forces.setflags(write=False)
    return forces


_EMPTY_MODULE_FORCES = _zero_forces()


def module_forces(values: Any) -> np.ndarray:
    """
    Normalize a per-module force sequence.

    Anything that is not exactly MODULE_COUNT numbers (None, wrong length,
    non-numeric entries) becomes all zeros.
    """
    if values is None:
        return _EMPTY_MODULE_FORCES
    try:
        forces = np.array(values, dtype=np.float64)
    except (TypeError, ValueError):
        return _EMPTY_MODULE_FORCES
    if forces.shape != (MODULE_COUNT,):
        return _EMPTY_MODULE_FORCES
    forces.setflags(write=False)
    return forces


@dataclass(frozen=True, eq=False)
class SwerveSample(TrajectorySample):
    """
    A single swerve robot sample in a trajectory.

    Fields:
      - t: timestamp relative to the beginning of the trajectory (s)
      - x, y: position relative to the field origin (m)
      - heading: heading (rad), 0 along +X
      - vx, vy: field-relative velocity (m/s)
      - omega: angular velocity (rad/s)
      - ax, ay: field-relative acceleration (m/s^2)
      - alpha: angular acceleration (rad/s^2)
      - fx, fy: per-module force (N), [FL, FR, BL, BR]
    """

    t: float
    x: float
    y: float
    heading: float
    vx: float = 0.0
    vy: float = 0.0
    omega: float = 0.0
    ax: float = 0.0
    ay: float = 0.0
    alpha: float = 0.0
    fx: np.ndarray | None = None
    fy: np.ndarray | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "fx", module_forces(self.fx))
        object.__setattr__(self, "fy", module_forces(self.fy))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SwerveSample:
        """Build a sample from a trajectory file sample object; missing scalars read as 0."""
        scalars = {name: float(data.get(name, 0.0)) for name in _SCALAR_FIELDS}
        return cls(fx=data.get("fx"), fy=data.get("fy"), **scalars)

    def as_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {name: getattr(self, name) for name in _SCALAR_FIELDS}
        out["fx"] = self.fx.tolist()
        out["fy"] = self.fy.tolist()
        return out

    @property
    def timestamp(self) -> float:
        return self.t

    @property
    def pose(self) -> Pose2d:
        return Pose2d(self.x, self.y, self.heading)

    def offset_by(self, timestamp_offset: float) -> SwerveSample:
        return SwerveSample(
            self.t + timestamp_offset,
            self.x,
            self.y,
            self.heading,
            self.vx,
            self.vy,
            self.omega,
            self.ax,
            self.ay,
            self.alpha,
            self.fx,
            self.fy,
        )

    def interpolate(self, ahead: SwerveSample, timestamp: float) -> SwerveSample:
        scale = (timestamp - self.t) / (ahead.t - self.t)

        def lerp(a: float, b: float) -> float:
            return a + (b - a) * scale

        return SwerveSample(
            timestamp,
            lerp(self.x, ahead.x),
            lerp(self.y, ahead.y),
            lerp(self.heading, ahead.heading),
            lerp(self.vx, ahead.vx),
            lerp(self.vy, ahead.vy),
            lerp(self.omega, ahead.omega),
            lerp(self.ax, ahead.ax),
            lerp(self.ay, ahead.ay),
            lerp(self.alpha, ahead.alpha),
            self.fx + (ahead.fx - self.fx) * scale,
            self.fy + (ahead.fy - self.fy) * scale,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SwerveSample):
            return NotImplemented
        return (
            all(getattr(self, name) == getattr(other, name) for name in _SCALAR_FIELDS)
            and np.array_equal(self.fx, other.fx)
            and np.array_equal(self.fy, other.fy)
        )
