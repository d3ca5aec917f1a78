"""Platform rectangles the sheep can stand on."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Platform:
    """Axis-aligned rectangle in screen space, y measured upward."""

    x: float
    y: float
    width: float
    height: float
    platform_id: int = 0

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y

    @property
    def top(self) -> float:
        return self.y + self.height

    def contains_x(self, x: float) -> bool:
        """Check whether x lies within the horizontal span (inclusive)."""
        return self.left <= x <= self.right
