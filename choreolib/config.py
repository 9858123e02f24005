"""
Central configuration for choreolib constants and environment overrides.
"""

import logging
import os
from pathlib import Path

# Below DEBUG; used for per-tick sampling and wheel power logs
TRACE: int = 5


def _register_trace_level() -> None:
    logging.addLevelName(TRACE, "TRACE")
    if hasattr(logging.Logger, "trace"):
        return

    def trace(self, msg, *args, **kwargs):
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)

    logging.Logger.trace = trace  # type: ignore[attr-defined]
    logging.TRACE = TRACE  # type: ignore[attr-defined]


_register_trace_level()

TRACE_ENABLED = str(os.getenv("CHOREOLIB_TRACE", "0")).lower() in ("1", "true", "yes", "on")

logger = logging.getLogger(__name__)

# File format version this library understands (project and trajectory files)
SPEC_VERSION: str = "v2025.0.0"

TRAJECTORY_FILE_EXTENSION: str = ".traj"
PROJECT_FILE_EXTENSION: str = ".chor"

# Cache key separator for split trajectories; cannot appear in a valid trajectory name
SPLIT_KEY_SEPARATOR: str = ".:."

# Segments shorter than this (seconds) are not interpolated
MIN_SEGMENT_DT_S: float = 1e-6

# Swerve module count, forces ordered [FL, FR, BL, BR]
MODULE_COUNT: int = 4

LOG_LEVEL_DEFAULT: str = "INFO"

# Deploy directory holding the .chor project file and the .traj files
CHOREO_DIR: Path = Path(os.getenv("CHOREOLIB_DIR", str(Path("deploy") / "choreo")))
