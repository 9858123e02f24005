"""
Trajectory container and its read-only queries.

A Trajectory is immutable after construction, so any number of control tasks
may query the same instance concurrently without locking.
"""

from __future__ import annotations

import logging
from bisect import bisect_left
from collections.abc import Iterable, Sequence
from typing import Generic

import numpy as np

from choreolib.config import MIN_SEGMENT_DT_S, TRACE_ENABLED

from .events import EventMarker
from .pose import Pose2d
from .sample import S

logger = logging.getLogger(__name__)


class Trajectory(Generic[S]):
    """
    A named, time-ordered sequence of samples with split indices and event markers.

    The empty case is reported as None by every query that would otherwise
    have to return a sample or pose.
    """

    __slots__ = ("_name", "_samples", "_splits", "_events", "_timestamps", "_points")

    def __init__(
        self,
        name: str,
        samples: Iterable[S],
        splits: Iterable[int] = (),
        events: Iterable[EventMarker] = (),
    ) -> None:
        self._name = name
        self._samples: tuple[S, ...] = tuple(samples)
        self._splits: tuple[int, ...] = tuple(int(i) for i in splits)
        self._events: tuple[EventMarker, ...] = tuple(events)
        # Precomputed lookup tables for the per-tick queries
        self._timestamps: tuple[float, ...] = tuple(s.timestamp for s in self._samples)
        self._points: np.ndarray = np.array(
            [(s.pose.x, s.pose.y) for s in self._samples], dtype=np.float64
        ).reshape(-1, 2)

    @property
    def name(self) -> str:
        return self._name

    @property
    def samples(self) -> tuple[S, ...]:
        return self._samples

    @property
    def splits(self) -> tuple[int, ...]:
        return self._splits

    @property
    def events(self) -> tuple[EventMarker, ...]:
        return self._events

    def __len__(self) -> int:
        return len(self._samples)

    def __repr__(self) -> str:
        return (
            f"Trajectory(name={self._name!r}, samples={len(self._samples)}, "
            f"splits={list(self._splits)}, events={len(self._events)})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Trajectory):
            return NotImplemented
        return (
            self._name == other._name
            and self._samples == other._samples
            and self._splits == other._splits
            and self._events == other._events
        )

    __hash__ = None  # type: ignore[assignment]

    # ----- Endpoints -----

    def initial_sample(self) -> S | None:
        return self._samples[0] if self._samples else None

    def final_sample(self) -> S | None:
        return self._samples[-1] if self._samples else None

    def initial_pose(self) -> Pose2d | None:
        return self._samples[0].pose if self._samples else None

    def final_pose(self) -> Pose2d | None:
        return self._samples[-1].pose if self._samples else None

    @property
    def total_time(self) -> float:
        """Timestamp of the last sample (0.0 when empty)."""
        return self._timestamps[-1] if self._timestamps else 0.0

    def poses(self) -> list[Pose2d]:
        return [s.pose for s in self._samples]

    def get_events(self, event_name: str) -> list[EventMarker]:
        """All markers named ``event_name``, in trajectory order."""
        return [e for e in self._events if e.event == event_name]

    # ----- Time-domain queries -----

    def sample_at(self, timestamp: float) -> S | None:
        """
        Return the state at ``timestamp`` seconds from the start of the trajectory.

        Times before the first sample clamp to the first sample and times at or
        past the end clamp to the last one. In between, the bracketing pair is
        linearly interpolated, except across segments shorter than
        MIN_SEGMENT_DT_S where the later sample is returned as is.
        """
        if not self._samples:
            return None
        if len(self._samples) == 1:
            return self._samples[0]
        if timestamp < self._timestamps[0]:
            return self._samples[0]
        if timestamp >= self.total_time:
            return self._samples[-1]

        # Smallest index whose timestamp is >= the query time
        i = bisect_left(self._timestamps, timestamp)
        if i == 0:
            return self._samples[0]

        behind = self._samples[i - 1]
        ahead = self._samples[i]
        if TRACE_ENABLED:
            logger.trace(  # type: ignore[attr-defined]
                f"{self._name}: t={timestamp:.4f} between samples {i - 1} and {i}"
            )
        if ahead.timestamp - behind.timestamp < MIN_SEGMENT_DT_S:
            return ahead
        return behind.interpolate(ahead, timestamp)

    # ----- Splitting -----

    def get_split(self, split_index: int) -> Trajectory[S] | None:
        """
        Return the segment starting at ``splits[split_index]`` as its own trajectory.

        The segment ends on the first sample of the next segment (inclusive), so
        consecutive segments share their boundary sample. Sample and event
        timestamps are re-based so the segment starts at 0; the result has no
        splits of its own.
        """
        if split_index < 0 or split_index >= len(self._splits):
            return None
        start = self._splits[split_index]
        if split_index + 1 < len(self._splits):
            end = self._splits[split_index + 1] + 1
        else:
            end = len(self._samples)
        sub = self._samples[start:end]
        if not sub:
            logger.warning(
                f"{self._name}: split {split_index} starts at sample {start} "
                f"but the trajectory only has {len(self._samples)} samples"
            )
            return None
        start_time = sub[0].timestamp
        end_time = sub[-1].timestamp
        return Trajectory(
            f"{self._name}[{split_index}]",
            [s.offset_by(-start_time) for s in sub],
            (),
            [
                e.offset_by(-start_time)
                for e in self._events
                if start_time <= e.timestamp <= end_time
            ],
        )

    # ----- Spatial queries -----

    def get_closest_sample(self, point: Pose2d | Sequence[float]) -> S | None:
        """
        Return the state on the path closest to ``point`` (x, y in meters).

        Every pair of consecutive samples is treated as a straight segment; the
        point is projected onto each segment with the projection clamped to the
        segment ends. The nearest segment wins (the earliest one on exact ties)
        and the clamped projection is mapped back to a timestamp along it.
        Zero-length segments are skipped.
        """
        if len(self._samples) < 2:
            return None

        target = np.array([point[0], point[1]], dtype=np.float64)
        starts = self._points[:-1]
        deltas = self._points[1:] - starts
        lengths = np.hypot(deltas[:, 0], deltas[:, 1])
        valid = lengths > 0.0
        if not np.any(valid):
            return None

        safe_lengths = np.where(valid, lengths, 1.0)
        directions = deltas / safe_lengths[:, None]
        along = np.einsum("ij,ij->i", target - starts, directions)
        along = np.clip(along, 0.0, lengths)
        projected = starts + directions * along[:, None]
        dist_sq = np.sum((projected - target) ** 2, axis=1)
        dist_sq = np.where(valid, dist_sq, np.inf)

        i = int(np.argmin(dist_sq))
        behind = self._samples[i]
        ahead = self._samples[i + 1]
        timestamp = behind.timestamp + (ahead.timestamp - behind.timestamp) * float(
            along[i] / lengths[i]
        )
        if ahead.timestamp - behind.timestamp < MIN_SEGMENT_DT_S:
            return ahead
        return behind.interpolate(ahead, timestamp)
