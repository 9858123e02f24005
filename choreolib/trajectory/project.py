"""
Project-level metadata shared by every trajectory in a deployment.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any


class DriveType(Enum):
    """Drivetrain kinds a project file can declare."""
    SWERVE = "Swerve"
    DIFFERENTIAL = "Differential"


@dataclass(frozen=True)
class ProjectFile:
    """Contents of the deployment's .chor file that matter for loading trajectories."""

    version: str
    type: str
    name: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProjectFile:
        return cls(version=str(data["version"]), type=str(data["type"]), name=str(data.get("name", "")))

    @property
    def drive_type(self) -> DriveType | None:
        """Declared drivetrain, or None when the type string is not recognized."""
        try:
            return DriveType(self.type)
        except ValueError:
            return None
