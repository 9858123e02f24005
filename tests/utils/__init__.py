"""
Test utilities package.

Provides builders for samples, trajectories and .traj documents.
"""

from .builders import sample_dict, swerve, trajectory_document

__all__ = [
    "sample_dict",
    "swerve",
    "trajectory_document",
]
