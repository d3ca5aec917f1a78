"""Holds the latest platform snapshot."""

from __future__ import annotations

import logging
from typing import Optional

from esheep.engine.platform_index import PlatformIndex
from .sources import PlatformSource

logger = logging.getLogger(__name__)


class PlatformRegistry:
    """Keeps the current PlatformIndex and rebuilds it on refresh.

    A refresh replaces the whole snapshot. Sheep ticking against the old
    snapshot are unaffected because a snapshot is never modified.
    """

    def __init__(self, source: Optional[PlatformSource] = None, visible: bool = True):
        """Initialize the registry.

        Args:
            source: Where platforms come from; None means ground only.
            visible: Whether the renderer should draw the platforms.
        """
        self._source = source
        self._snapshot = PlatformIndex.empty()
        self.visible = visible

    def snapshot(self) -> PlatformIndex:
        """Get the current platform snapshot."""
        return self._snapshot

    def refresh(self) -> PlatformIndex:
        """Ask the source for a fresh set of platforms.

        Returns:
            The new snapshot.
        """
        if self._source is None:
            return self._snapshot

        self._snapshot = PlatformIndex(self._source.platforms())
        logger.info("Refreshed platforms: %d", len(self._snapshot))
        return self._snapshot

    def set_visibility(self, visible: bool) -> None:
        """Toggle platform drawing. Has no effect on collisions."""
        self.visible = visible

    def set_frontmost_app_only(self, frontmost_only: bool) -> None:
        """Restrict window platforms to the frontmost application and refresh."""
        if self._source is not None:
            self._source.frontmost_app_only = frontmost_only
        self.refresh()
