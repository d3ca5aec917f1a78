"""Producers of platform rectangles."""

from __future__ import annotations

import itertools
import logging
import random
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Protocol

from esheep.engine.config import ScreenBounds
from esheep.types import Platform

logger = logging.getLogger(__name__)

# Windows smaller than this in either direction never become platforms
MIN_WINDOW_SIZE = 50.0
WINDOW_PLATFORM_THICKNESS = 10.0
RANDOM_PLATFORM_THICKNESS = 20.0

_platform_ids = itertools.count(1)


def next_platform_id() -> int:
    """Allocate a platform handle that is unique for the process."""
    return next(_platform_ids)


class PlatformSource(Protocol):
    """Anything that can produce the current list of platforms.

    Sources that are not built from windows accept the frontmost filter
    and ignore it.
    """

    frontmost_app_only: bool

    def platforms(self) -> list[Platform]:
        ...


class StaticPlatformSource:
    """Always returns the same platforms."""

    def __init__(self, platforms: Iterable[Platform] = ()):
        self._platforms = list(platforms)
        self.frontmost_app_only = False

    def platforms(self) -> list[Platform]:
        return list(self._platforms)


class RandomPlatformSource:
    """Scatters thin platforms across the screen."""

    def __init__(
        self,
        screen: ScreenBounds,
        count: int = 5,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the source.

        Args:
            screen: Screen size.
            count: Number of platforms to create per refresh.
            rng: Random source.
        """
        self._screen = screen
        self._count = count
        self._rng = rng or random.Random()
        self.frontmost_app_only = False

    def platforms(self) -> list[Platform]:
        """Create a new random set of platforms.

        Widths are between 100 and 300, and platforms keep away from the very
        top and bottom of the screen.
        """
        rng = self._rng
        width_limit = max(self._screen.width, 100.0)
        result = []
        for _ in range(self._count):
            width = rng.uniform(100.0, min(300.0, width_limit))
            x = rng.uniform(0.0, max(self._screen.width - width, 0.0))
            y = rng.uniform(100.0, max(self._screen.height - 200.0, 100.0))
            result.append(
                Platform(
                    x=x,
                    y=y,
                    width=width,
                    height=RANDOM_PLATFORM_THICKNESS,
                    platform_id=next_platform_id(),
                )
            )
        return result


@dataclass(frozen=True)
class WindowInfo:
    """An on-screen window as reported by the window system.

    Coordinates use a top-left origin with y growing downward, which is how
    window systems usually report window bounds.
    """

    owner: str
    title: str
    x: float
    y: float
    width: float
    height: float
    frontmost: bool = False


class WindowPlatformSource:
    """Turns the tops of other windows into platforms."""

    def __init__(
        self,
        list_windows: Callable[[], Iterable[WindowInfo]],
        screen_height: float,
        frontmost_app_only: bool = False,
    ):
        """Initialize the source.

        Args:
            list_windows: Callable enumerating the current windows.
            screen_height: Screen height, used to flip y to point upward.
            frontmost_app_only: Only use windows of the frontmost application.
        """
        self._list_windows = list_windows
        self._screen_height = screen_height
        self.frontmost_app_only = frontmost_app_only

    def platforms(self) -> list[Platform]:
        """Build one platform along the top edge of each eligible window."""
        result = []
        for window in self._list_windows():
            if window.width < MIN_WINDOW_SIZE or window.height < MIN_WINDOW_SIZE:
                logger.debug(
                    "Skipping small window %s (%.0fx%.0f)",
                    window.owner,
                    window.width,
                    window.height,
                )
                continue
            if self.frontmost_app_only and not window.frontmost:
                continue

            top = self._screen_height - window.y
            result.append(
                Platform(
                    x=window.x,
                    y=top - WINDOW_PLATFORM_THICKNESS,
                    width=window.width,
                    height=WINDOW_PLATFORM_THICKNESS,
                    platform_id=next_platform_id(),
                )
            )
        return result
