"""
Trajectory data model: poses, samples, event markers, project metadata and the
Trajectory container.
"""

from .events import EventMarker
from .pose import Pose2d
from .project import DriveType, ProjectFile
from .sample import TrajectorySample
from .swerve import SwerveSample
from .trajectory import Trajectory

__all__ = [
    "DriveType",
    "EventMarker",
    "Pose2d",
    "ProjectFile",
    "SwerveSample",
    "Trajectory",
    "TrajectorySample",
]
