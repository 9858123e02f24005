"""
Event markers attached to a trajectory.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventMarker:
    """A named timestamp used to trigger side effects during playback."""

    timestamp: float
    event: str

    @classmethod
    def from_dict(cls, data: Any) -> EventMarker:
        """
        Parse a marker from a trajectory file.

        Accepts the flat form ``{"event": ..., "timestamp": ...}`` and the project
        form ``{"name": ..., "from": {"targetTimestamp": ..., "offset": {"val": ...}}}``.
        Markers that cannot be parsed come back as ``(-1, "")`` so that the
        loader's filter drops them.
        """
        try:
            if not isinstance(data, Mapping):
                raise TypeError(f"expected an object, got {type(data).__name__}")
            if "from" in data:
                origin = data["from"]
                timestamp = float(origin["targetTimestamp"]) + float(origin["offset"]["val"])
                event = data["name"]
            else:
                timestamp = float(data["timestamp"])
                event = data["event"]
            if not isinstance(event, str):
                raise TypeError(f"event name must be a string, got {type(event).__name__}")
        except (KeyError, TypeError, ValueError) as e:
            logger.debug(f"Ignoring unparseable event marker {data!r}: {e}")
            return cls(-1.0, "")
        return cls(timestamp, event)

    @property
    def is_valid(self) -> bool:
        return self.timestamp >= 0 and len(self.event) > 0

    def offset_by(self, timestamp_offset: float) -> EventMarker:
        return EventMarker(self.timestamp + timestamp_offset, self.event)
