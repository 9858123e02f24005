"""
Loading of the deployment's project file and trajectory files.

ChoreoLoader owns the deploy directory and the memoized project file. Fatal
configuration problems raise ChoreoConfigError; a trajectory file that is
missing or malformed is logged and reported as None so the caller can carry on
without it.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from choreolib.config import (
    CHOREO_DIR,
    PROJECT_FILE_EXTENSION,
    SPEC_VERSION,
    TRAJECTORY_FILE_EXTENSION,
)
from choreolib.trajectory import (
    DriveType,
    EventMarker,
    ProjectFile,
    SwerveSample,
    Trajectory,
)
from choreolib.utils.errors import ChoreoConfigError, TrajectoryLoadError

logger = logging.getLogger(__name__)


def strip_extension(trajectory_name: str) -> str:
    if trajectory_name.endswith(TRAJECTORY_FILE_EXTENSION):
        return trajectory_name[: -len(TRAJECTORY_FILE_EXTENSION)]
    return trajectory_name


def _normalize_splits(raw: Any) -> list[int]:
    """Validate split start indices and make sure the first split starts at sample 0."""
    splits = list(raw or [])
    for i in splits:
        if isinstance(i, bool) or not isinstance(i, int) or i < 0:
            raise ValueError(f"invalid split index {i!r}")
    if any(b < a for a, b in zip(splits, splits[1:])):
        raise ValueError(f"split indices must be non-decreasing: {splits}")
    if not splits or splits[0] != 0:
        splits.insert(0, 0)
    return splits


def _parse_events(raw: Any) -> list[EventMarker]:
    """Parse markers, dropping those with a negative timestamp or an empty name."""
    events = [EventMarker.from_dict(item) for item in (raw or [])]
    kept = [e for e in events if e.is_valid]
    if len(kept) != len(events):
        logger.debug(f"Discarded {len(events) - len(kept)} invalid event marker(s)")
    return kept


def load_trajectory_string(text: str, project: ProjectFile) -> Trajectory:
    """
    Build a trajectory from the JSON text of a .traj file.

    Raises:
        json.JSONDecodeError: text is not JSON
        TrajectoryLoadError: the document does not have the trajectory shape
        ChoreoConfigError: version mismatch or unsupported drive type
    """
    document = json.loads(text)
    try:
        if not isinstance(document, Mapping):
            raise TypeError("top level must be an object")
        name = str(document["name"])
        version = document["version"]
    except (KeyError, TypeError) as e:
        raise TrajectoryLoadError(f"missing trajectory header field: {e}") from e

    if version != SPEC_VERSION:
        raise ChoreoConfigError(
            f"{name}{TRAJECTORY_FILE_EXTENSION}: Wrong version: {version}. Expected {SPEC_VERSION}"
        )

    try:
        events = _parse_events(document.get("events"))
        body = document["trajectory"]
        splits = _normalize_splits(body.get("splits"))
        raw_samples = body["samples"]
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise TrajectoryLoadError(f"{name}: malformed trajectory body: {e!r}") from e

    drive_type = project.drive_type
    if drive_type is DriveType.SWERVE:
        try:
            samples = [SwerveSample.from_dict(s) for s in raw_samples]
        except (AttributeError, TypeError, ValueError) as e:
            raise TrajectoryLoadError(f"{name}: malformed swerve sample: {e!r}") from e
        return Trajectory(name, samples, splits, events)
    if drive_type is DriveType.DIFFERENTIAL:
        raise ChoreoConfigError("Differential samples are not supported")
    raise ChoreoConfigError(f"Unknown project type: {project.type}")


class ChoreoLoader:
    """
    Reads project and trajectory files from one deploy directory.

    The project file is parsed on first use and kept for the lifetime of the
    loader; later changes to the file on disk are not picked up.
    """

    def __init__(self, directory: str | Path | None = None) -> None:
        self._directory = Path(directory) if directory is not None else CHOREO_DIR
        self._project: ProjectFile | None = None
        self._lock = threading.Lock()

    @property
    def directory(self) -> Path:
        return self._directory

    def trajectory_path(self, trajectory_name: str) -> Path:
        """Resolve a trajectory name (extension optional) to its file in the deploy directory."""
        return self._directory / f"{strip_extension(trajectory_name)}{TRAJECTORY_FILE_EXTENSION}"

    def load_project(self) -> ProjectFile:
        """
        Return the deployment's project file, parsing it on first call.

        Raises:
            ChoreoConfigError: not exactly one project file, unreadable or
                unparseable file, or a version this library does not understand
        """
        with self._lock:
            if self._project is None:
                self._project = self._read_project()
            return self._project

    def _read_project(self) -> ProjectFile:
        project_files = sorted(self._directory.glob(f"*{PROJECT_FILE_EXTENSION}"))
        if not project_files:
            raise ChoreoConfigError(f"Could not find project file in {self._directory}")
        if len(project_files) > 1:
            names = ", ".join(p.name for p in project_files)
            raise ChoreoConfigError(f"Found multiple project files in {self._directory}: {names}")

        path = project_files[0]
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            version = data["version"]
        except OSError as e:
            raise ChoreoConfigError(f"Could not read project file {path}: {e}") from e
        except (UnicodeDecodeError, json.JSONDecodeError, KeyError, TypeError) as e:
            raise ChoreoConfigError(f"Could not parse project file {path}: {e}") from e

        if version != SPEC_VERSION:
            raise ChoreoConfigError(
                f"{PROJECT_FILE_EXTENSION} project file: Wrong version {version}. Expected {SPEC_VERSION}"
            )
        try:
            project = ProjectFile.from_dict(data)
        except KeyError as e:
            raise ChoreoConfigError(f"Project file {path} is missing field {e}") from e
        logger.info(f"Loaded project file {path.name} (type={project.type})")
        return project

    def load_trajectory(self, trajectory_name: str) -> Trajectory | None:
        """
        Load ``<directory>/<trajectory_name>.traj``.

        Returns None (after logging why) when the file is missing, unreadable or
        malformed. Fatal configuration errors propagate as ChoreoConfigError.
        """
        path = self.trajectory_path(trajectory_name)
        logger.info(f"Loading trajectory {path.resolve()}")
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.error(f"Could not find trajectory file: {path}")
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Could not read trajectory file {path}: {e}")
            return None

        try:
            return load_trajectory_string(text, self.load_project())
        except json.JSONDecodeError as e:
            logger.error(f"Could not parse trajectory file {path}: {e}")
        except TrajectoryLoadError as e:
            logger.error(f"Could not load trajectory file {path}: {e}")
        return None
