"""What a display surface receives each tick."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Protocol

from esheep.types import Platform, Position


@dataclass(frozen=True)
class SheepDraw:
    """One sheep to draw: which tile, which way it faces and where."""

    sheep_id: str
    frame: int
    flipped: bool
    position: Position


class DisplaySurface(Protocol):
    """Anything that can show sheep and platforms."""

    def render_frame(
        self,
        sheep: Iterable[SheepDraw],
        platforms: Optional[Iterable[Platform]] = None,
    ) -> None:
        ...
