"""
Name-keyed cache of loaded trajectories and their splits.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import MutableMapping

from choreolib.config import SPLIT_KEY_SEPARATOR
from choreolib.loader import ChoreoLoader, strip_extension
from choreolib.trajectory import Trajectory

logger = logging.getLogger(__name__)


class TrajectoryCache:
    """
    Loads each trajectory once and hands back the same instance afterwards.

    Failed loads are not cached, so a later call retries the file. Lookups and
    inserts happen under one lock, which makes the cache safe to share between
    threads. Any MutableMapping may be supplied as the backing store, e.g. a
    size-bounded mapping.
    """

    def __init__(
        self,
        loader: ChoreoLoader | None = None,
        cache: MutableMapping[str, Trajectory] | None = None,
    ) -> None:
        self._loader = loader if loader is not None else ChoreoLoader()
        self._cache: MutableMapping[str, Trajectory] = cache if cache is not None else {}
        self._lock = threading.RLock()

    @property
    def loader(self) -> ChoreoLoader:
        return self._loader

    @staticmethod
    def split_key(trajectory_name: str, split_index: int) -> str:
        return f"{trajectory_name}{SPLIT_KEY_SEPARATOR}{split_index}"

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._cache

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def load(self, trajectory_name: str, split_index: int | None = None) -> Trajectory | None:
        """
        Return the named trajectory, or one of its splits when ``split_index`` is given.

        The name may carry the .traj extension; both spellings share one entry.
        Loading a split also caches the whole trajectory it was taken from.
        Returns None when the file cannot be loaded or the split does not exist.
        """
        trajectory_name = strip_extension(trajectory_name)
        if split_index is None:
            return self._load_whole(trajectory_name)
        return self._load_split(trajectory_name, split_index)

    def _load_whole(self, trajectory_name: str) -> Trajectory | None:
        with self._lock:
            cached = self._cache.get(trajectory_name)
            if cached is not None:
                logger.debug(f"Cache hit: {trajectory_name}")
                return cached
            logger.debug(f"Cache miss: {trajectory_name}")
            trajectory = self._loader.load_trajectory(trajectory_name)
            if trajectory is not None:
                self._cache[trajectory_name] = trajectory
            return trajectory

    def _load_split(self, trajectory_name: str, split_index: int) -> Trajectory | None:
        key = self.split_key(trajectory_name, split_index)
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                logger.debug(f"Cache hit: {key}")
                return cached
            parent = self._load_whole(trajectory_name)
            if parent is None:
                return None
            split = parent.get_split(split_index)
            if split is None:
                logger.warning(f"{trajectory_name} has no split {split_index}")
                return None
            self._cache[key] = split
            return split

    def clear(self) -> None:
        """Drop every cached trajectory and split."""
        with self._lock:
            self._cache.clear()
