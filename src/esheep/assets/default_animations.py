"""Built-in animation set used when no animation file can be loaded."""

from __future__ import annotations

from typing import Any

from esheep.types import AnimationDef, AnimationSet, Movement, Transition

DEFAULT_TILES_X = 16
DEFAULT_TILES_Y = 11

WALK_ID = "0"
RUN_ID = "1"
IDLE_ID = "2"
FALL_ID = "3"


# Literal values of the built-in set. Intervals are in seconds.
DEFAULT_ANIMATION_DEFINITIONS: dict[str, dict] = {
    WALK_ID: {
        "name": "walk",
        "frames": [0, 1, 2, 3, 4, 5, 6, 7],
        "repeat_count": 1,
        "repeat_from": 0,
        "movement": (3, 0, 3, 0, 0.2, 0.2),
        "transitions": [(WALK_ID, 50), (RUN_ID, 30), (IDLE_ID, 20)],
        "has_border": True,
    },
    RUN_ID: {
        "name": "run",
        "frames": [8, 9, 10, 11, 12, 13],
        "repeat_count": 2,
        "repeat_from": 0,
        "movement": (5, 0, 5, 0, 0.1, 0.1),
        "transitions": [(WALK_ID, 40), (RUN_ID, 30), (IDLE_ID, 30)],
        "has_border": True,
    },
    IDLE_ID: {
        "name": "idle",
        "frames": [24, 25, 24, 25, 26, 27, 28, 29],
        "repeat_count": 1,
        "repeat_from": 4,
        "movement": (0, 0, 0, 0, 0.5, 0.5),
        "transitions": [(WALK_ID, 60), (RUN_ID, 20), (FALL_ID, 20)],
    },
    FALL_ID: {
        "name": "fall",
        "frames": [34, 35],
        "repeat_count": 5,
        "repeat_from": 0,
        "movement": (0, 3, 0, 5, 0.1, 0.1),
        "transitions": [(WALK_ID, 100)],
        "has_gravity": True,
        "has_border": True,
    },
}


def create_animation(animation_id: str) -> AnimationDef:
    """Build one built-in animation.

    Args:
        animation_id: Id in DEFAULT_ANIMATION_DEFINITIONS.

    Returns:
        The AnimationDef.
    """
    data = DEFAULT_ANIMATION_DEFINITIONS[animation_id]
    return AnimationDef(
        id=animation_id,
        name=data["name"],
        frames=tuple(data["frames"]),
        repeat_count=data["repeat_count"],
        repeat_from=data["repeat_from"],
        movement=Movement(*data["movement"]),
        transitions=tuple(Transition(next_id, weight) for next_id, weight in data["transitions"]),
        has_gravity=data.get("has_gravity", False),
        has_border=data.get("has_border", False),
    )


def create_default_animations(image: Any = None) -> AnimationSet:
    """Create the built-in walk/run/idle/fall set.

    Args:
        image: Optional sprite atlas to attach.

    Returns:
        AnimationSet starting with the walk animation.
    """
    return AnimationSet(
        (create_animation(animation_id) for animation_id in DEFAULT_ANIMATION_DEFINITIONS),
        tiles_x=DEFAULT_TILES_X,
        tiles_y=DEFAULT_TILES_Y,
        image=image,
        source="fallback",
        initial_id=WALK_ID,
    )
