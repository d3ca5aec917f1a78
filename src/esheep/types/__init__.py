"""Type definitions for eSheep."""

from .animations import (
    AnimationAction,
    AnimationDef,
    AnimationSet,
    Movement,
    Transition,
)
from .platforms import Platform
from .actor import (
    ActorState,
    BottomDwell,
    EdgeKind,
    EdgeState,
    Position,
)
from .events import (
    PointerEvent,
    PointerEventType,
    SimulationEvent,
    StepResult,
)

__all__ = [
    # Animations
    "AnimationAction",
    "AnimationDef",
    "AnimationSet",
    "Movement",
    "Transition",
    # Platforms
    "Platform",
    # Actor
    "ActorState",
    "BottomDwell",
    "EdgeKind",
    "EdgeState",
    "Position",
    # Events
    "PointerEvent",
    "PointerEventType",
    "SimulationEvent",
    "StepResult",
]
