"""Headless renderer for testing."""

from __future__ import annotations

import time
from typing import Iterable, Optional

from esheep.engine.config import ScreenBounds
from esheep.types import Platform
from .surface import SheepDraw


class HeadlessRenderer:
    """A headless renderer that creates an ASCII picture of the screen.

    Used for testing and the command line demo.
    """

    def __init__(self, screen: ScreenBounds, width: int = 80, height: int = 24):
        """Initialize the headless renderer.

        Args:
            screen: Size of the simulated screen.
            width: Picture width in characters.
            height: Picture height in characters.
        """
        self.screen_bounds = screen
        self.width = width
        self.height = height
        self.screen: list[list[str]] = [[" " for _ in range(width)] for _ in range(height)]
        self.last_render_time: float = 0.0
        self.rendered_sheep: dict[str, SheepDraw] = {}
        self.rendered_platforms: list[Platform] = []
        self._render_count = 0

    @property
    def render_count(self) -> int:
        return self._render_count

    def clear(self) -> None:
        """Clear the screen buffer."""
        self.screen = [[" " for _ in range(self.width)] for _ in range(self.height)]
        self.rendered_sheep.clear()
        self.rendered_platforms = []

    def render_frame(
        self,
        sheep: Iterable[SheepDraw],
        platforms: Optional[Iterable[Platform]] = None,
    ) -> None:
        """Render a complete frame.

        Args:
            sheep: Sheep to draw.
            platforms: Platforms to draw, or None when they are hidden.
        """
        self.clear()
        start_time = time.perf_counter()

        # Ground
        self.screen[self.height - 1] = list("_" * self.width)

        if platforms is not None:
            for platform in platforms:
                self.draw_platform(platform)

        for draw in sheep:
            self.draw_sheep(draw)

        self.last_render_time = time.perf_counter() - start_time
        self._render_count += 1

    def draw_platform(self, platform: Platform) -> None:
        """Draw a platform as a row of '='."""
        self.rendered_platforms.append(platform)
        row = self._to_row(platform.top)
        start = self._to_col(platform.left)
        end = self._to_col(platform.right)
        for col in range(start, end + 1):
            self.screen[row][col] = "="

    def draw_sheep(self, draw: SheepDraw) -> None:
        """Draw a sheep as an arrow pointing the way it faces."""
        self.rendered_sheep[draw.sheep_id] = draw
        row = self._to_row(draw.position.y)
        # Stand on top of whatever is drawn at this height
        row = max(row - 1, 0)
        col = self._to_col(draw.position.x)
        self.screen[row][col] = ">" if draw.flipped else "<"

    def _to_col(self, x: float) -> int:
        col = int(x * self.width / self.screen_bounds.width)
        return max(0, min(self.width - 1, col))

    def _to_row(self, y: float) -> int:
        # Screen y points up, rows count down
        row = self.height - 1 - int(y * (self.height - 1) / self.screen_bounds.height)
        return max(0, min(self.height - 1, row))

    def get_screen_string(self) -> str:
        """Get the screen as a string."""
        return "\n".join("".join(row) for row in self.screen)
