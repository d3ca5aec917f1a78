"""Immutable, queryable snapshot of the current platforms."""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

import numpy as np

from esheep.types import Platform


class PlatformIndex:
    """Answers collision questions against one platform snapshot.

    The snapshot never changes after construction. When the platform source
    produces a new set, a new index is built; ticks that are already running
    keep using the one they were handed.
    """

    def __init__(self, platforms: Iterable[Platform] = ()):
        """Initialize the index.

        Args:
            platforms: Platforms in priority order (first match wins).
        """
        self._platforms: tuple[Platform, ...] = tuple(platforms)
        self._by_id = {p.platform_id: p for p in self._platforms}
        self._lefts = np.array([p.left for p in self._platforms], dtype=np.float64)
        self._rights = np.array([p.right for p in self._platforms], dtype=np.float64)
        self._tops = np.array([p.top for p in self._platforms], dtype=np.float64)

    @classmethod
    def empty(cls) -> "PlatformIndex":
        """Create an index for a flat, ground-only world."""
        return cls(())

    def __len__(self) -> int:
        return len(self._platforms)

    def __iter__(self) -> Iterator[Platform]:
        return iter(self._platforms)

    @property
    def platforms(self) -> tuple[Platform, ...]:
        return self._platforms

    def get(self, platform_id: Optional[int]) -> Optional[Platform]:
        """Resolve a platform handle against this snapshot.

        Args:
            platform_id: Handle from a previous tick, or None.

        Returns:
            The platform, or None if the handle is stale.
        """
        if platform_id is None:
            return None
        return self._by_id.get(platform_id)

    def platform_under_actor(
        self,
        box: tuple[float, float, float, float],
        margin: float = 5.0,
    ) -> Optional[Platform]:
        """Find the platform an actor is standing on.

        Args:
            box: Actor bounding box as (left, bottom, right, top).
            margin: Allowed vertical distance between the actor's bottom
                and a platform's top.

        Returns:
            The first matching platform, or None.
        """
        if not self._platforms:
            return None

        left, bottom, right, _ = box
        near_top = np.abs(bottom - self._tops) <= margin
        overlaps = ~((right < self._lefts) | (left > self._rights))
        matches = np.flatnonzero(near_top & overlaps)
        if matches.size == 0:
            return None
        return self._platforms[int(matches[0])]

    def nearest_platform_below(
        self,
        x: float,
        y: float,
        max_distance: float = 1000.0,
    ) -> Optional[Platform]:
        """Find the closest platform an actor at (x, y) would fall onto.

        Args:
            x: Horizontal position of the point (usually the actor's centre).
            y: Height of the point (usually the actor's bottom).
            max_distance: Platforms this far below or further are ignored.

        Returns:
            The platform with the smallest vertical gap, or None.
        """
        if not self._platforms:
            return None

        candidates = (self._lefts <= x) & (self._rights >= x) & (self._tops < y)
        if not candidates.any():
            return None

        gaps = np.where(candidates, y - self._tops, np.inf)
        best = int(np.argmin(gaps))
        if gaps[best] >= max_distance:
            return None
        return self._platforms[best]
