"""Mutable simulation state of one sheep."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class EdgeKind(Enum):
    """Which kind of edge caused a confusion."""

    PLATFORM = "platform"
    SCREEN = "screen"


@dataclass
class Position:
    """2D position on screen, y measured upward from the ground."""

    x: float
    y: float

    def copy(self) -> "Position":
        """Create a copy of this position."""
        return Position(self.x, self.y)


@dataclass
class EdgeState:
    """Edge awareness: the confusion timer and the at-edge flag."""

    kind: Optional[EdgeKind] = None  # Set while confused
    confused_since: float = 0.0
    was_at_edge: bool = False

    @property
    def confused(self) -> bool:
        return self.kind is not None

    def enter(self, kind: EdgeKind, now: float) -> None:
        """Start a confusion at the given edge."""
        self.kind = kind
        self.confused_since = now
        self.was_at_edge = True

    def elapsed(self, now: float) -> float:
        """Seconds spent confused so far."""
        return now - self.confused_since

    def resolve(self) -> None:
        """End the confusion but remember the actor is still at the edge."""
        self.kind = None

    def clear(self) -> None:
        """Forget both the confusion and the edge flag."""
        self.kind = None
        self.was_at_edge = False

    def copy(self) -> "EdgeState":
        return EdgeState(self.kind, self.confused_since, self.was_at_edge)


@dataclass
class BottomDwell:
    """How long the sheep has been lingering near the ground."""

    at_bottom: bool = False
    since: float = 0.0

    def start(self, now: float) -> None:
        self.at_bottom = True
        self.since = now

    def reset(self) -> None:
        self.at_bottom = False
        self.since = 0.0

    def copy(self) -> "BottomDwell":
        return BottomDwell(self.at_bottom, self.since)


@dataclass
class ActorState:
    """Everything the simulation step mutates for a single sheep."""

    position: Position
    animation_id: str
    width: float = 40.0
    height: float = 40.0
    velocity_y: float = 0.0
    is_on_platform: bool = False
    current_platform_id: Optional[int] = None  # Lookup key, never an owning reference
    flipped: bool = True  # True = facing right
    step_index: int = 0
    edge: EdgeState = field(default_factory=EdgeState)
    bottom: BottomDwell = field(default_factory=BottomDwell)
    dragging: bool = False
    frozen: bool = False  # Set when the animation data is broken
    last_frame: int = 0

    @property
    def center_x(self) -> float:
        return self.position.x + self.width / 2

    def box(self) -> tuple[float, float, float, float]:
        """Bounding box as (left, bottom, right, top)."""
        x, y = self.position.x, self.position.y
        return (x, y, x + self.width, y + self.height)

    def attach(self, platform_id: int) -> None:
        """Mark the sheep as standing on a platform."""
        self.is_on_platform = True
        self.current_platform_id = platform_id
        self.velocity_y = 0.0

    def detach(self) -> None:
        """Mark the sheep as not standing on any platform."""
        self.is_on_platform = False
        self.current_platform_id = None

    def start_animation(self, animation_id: str) -> None:
        self.animation_id = animation_id
        self.step_index = 0

    def copy(self) -> "ActorState":
        """Create a copy of this state."""
        return ActorState(
            position=self.position.copy(),
            animation_id=self.animation_id,
            width=self.width,
            height=self.height,
            velocity_y=self.velocity_y,
            is_on_platform=self.is_on_platform,
            current_platform_id=self.current_platform_id,
            flipped=self.flipped,
            step_index=self.step_index,
            edge=self.edge.copy(),
            bottom=self.bottom.copy(),
            dragging=self.dragging,
            frozen=self.frozen,
            last_frame=self.last_frame,
        )
