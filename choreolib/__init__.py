"""
choreolib Python Package

Loads Choreo trajectory files and serves interpolated robot states to a
real-time control loop.

Key components:
- Trajectory: time-ordered samples with time, split and nearest-point queries
- SwerveSample: swerve drivetrain sample with linear interpolation
- ChoreoLoader: reads the deployment's project and trajectory files
- TrajectoryCache: loads each trajectory (and split) once per name
"""

from ._version import __version__
from .cache import TrajectoryCache
from .loader import ChoreoLoader, load_trajectory_string
from .trajectory import (
    DriveType,
    EventMarker,
    Pose2d,
    ProjectFile,
    SwerveSample,
    Trajectory,
    TrajectorySample,
)
from .utils.errors import ChoreoConfigError, TrajectoryLoadError

__all__ = [
    "__version__",
    "ChoreoConfigError",
    "ChoreoLoader",
    "DriveType",
    "EventMarker",
    "Pose2d",
    "ProjectFile",
    "SwerveSample",
    "Trajectory",
    "TrajectoryCache",
    "TrajectoryLoadError",
    "TrajectorySample",
    "load_trajectory_string",
]
