"""Simulation step results and pointer input events."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class SimulationEvent(Enum):
    """Notable things that happened during a tick."""

    ANIMATION_CHANGED = "animation_changed"
    FLIPPED = "flipped"
    TELEPORTED = "teleported"
    LANDED = "landed"
    CONFUSED = "confused"
    ANIMATION_MISSING = "animation_missing"


@dataclass
class StepResult:
    """Outcome of one tick: the tile to draw and what happened."""

    frame: int
    events: list[SimulationEvent] = field(default_factory=list)

    def has(self, event: SimulationEvent) -> bool:
        return event in self.events


class PointerEventType(Enum):
    """Kinds of pointer input delivered by the display surface."""

    DOWN = "down"
    DRAG = "drag"
    UP = "up"


@dataclass(frozen=True)
class PointerEvent:
    """Pointer input in absolute screen coordinates (y upward)."""

    type: PointerEventType
    x: float = 0.0
    y: float = 0.0
