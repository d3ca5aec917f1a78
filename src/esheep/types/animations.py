"""Animation definitions and the weighted transition graph."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Iterator, Mapping, Optional

from esheep.errors import AnimationDataError, UnknownAnimationError


class AnimationAction(Enum):
    """Actions fired when an animation completes."""

    FLIP = "flip"


@dataclass(frozen=True)
class Movement:
    """Per-tick displacement, interpolated from start to end of an animation."""

    start_x: float = 0.0
    start_y: float = 0.0
    end_x: float = 0.0
    end_y: float = 0.0
    start_interval: float = 0.1  # Seconds, informational only
    end_interval: float = 0.1

    def at(self, progress: float) -> tuple[float, float]:
        """Interpolate the displacement at a progress value in [0, 1].

        Args:
            progress: Fraction of the animation already played.

        Returns:
            (move_x, move_y) tuple.
        """
        move_x = self.start_x + (self.end_x - self.start_x) * progress
        move_y = self.start_y + (self.end_y - self.start_y) * progress
        return (move_x, move_y)


@dataclass(frozen=True)
class Transition:
    """Weighted edge to a successor animation."""

    next_id: str
    weight: int


@dataclass(frozen=True)
class AnimationDef:
    """Immutable description of one named motion."""

    id: str
    name: str
    frames: tuple[int, ...]
    repeat_count: int = 0
    repeat_from: int = 0
    movement: Movement = field(default_factory=Movement)
    transitions: tuple[Transition, ...] = ()
    action: Optional[AnimationAction] = None
    has_gravity: bool = False
    has_border: bool = False

    def __post_init__(self):
        # Accept lists from callers but keep the stored value hashable
        object.__setattr__(self, "frames", tuple(self.frames))
        object.__setattr__(self, "transitions", tuple(self.transitions))

        if not self.frames:
            raise AnimationDataError(f"Animation {self.id!r} has no frames")
        if self.repeat_count < 0:
            raise AnimationDataError(
                f"Animation {self.id!r} has negative repeat count {self.repeat_count}"
            )
        if not 0 <= self.repeat_from < len(self.frames):
            raise AnimationDataError(
                f"Animation {self.id!r} repeat_from {self.repeat_from} "
                f"outside 0..{len(self.frames) - 1}"
            )
        for transition in self.transitions:
            if transition.weight <= 0:
                raise AnimationDataError(
                    f"Animation {self.id!r} has non-positive weight "
                    f"{transition.weight} towards {transition.next_id!r}"
                )

    def total_steps(self) -> int:
        """Number of ticks one full play of this animation takes."""
        count = len(self.frames)
        return count + (count - self.repeat_from) * self.repeat_count

    def frame_at_step(self, step: int) -> int:
        """Resolve the sprite tile shown at a given step.

        Args:
            step: Step index within the animation.

        Returns:
            Sprite-tile index.
        """
        count = len(self.frames)
        if step < count:
            return self.frames[step]
        if self.repeat_from == 0:
            return self.frames[step % count]
        period = count - self.repeat_from
        return self.frames[self.repeat_from + (step - self.repeat_from) % period]

    def choose_next_animation(self, rng: random.Random) -> Optional[str]:
        """Pick the successor animation by weight.

        Args:
            rng: Random source.

        Returns:
            The chosen animation id, or None if this animation has no
            transitions (the caller restarts it).
        """
        if not self.transitions:
            return None

        total = sum(t.weight for t in self.transitions)
        roll = rng.randrange(total)

        accumulated = 0
        for transition in self.transitions:
            accumulated += transition.weight
            if roll < accumulated:
                return transition.next_id

        return self.transitions[-1].next_id


class AnimationSet(Mapping[str, AnimationDef]):
    """Read-only collection of animations loaded for a session."""

    def __init__(
        self,
        animations: Iterable[AnimationDef],
        tiles_x: int = 16,
        tiles_y: int = 11,
        image: Any = None,
        source: str = "fallback",
        initial_id: Optional[str] = None,
        strict: bool = True,
    ):
        """Initialize the set.

        Args:
            animations: Animation definitions; ids must be unique.
            tiles_x: Sprite atlas columns.
            tiles_y: Sprite atlas rows.
            image: Optional decoded sprite atlas (PIL image).
            source: Where the definitions came from ("xml" or "fallback").
            initial_id: Animation a new sheep starts with; defaults to the
                first animation.
            strict: Require every transition target to exist.

        Raises:
            AnimationDataError: If the set is empty, ids collide, or a
                transition points at a missing animation in strict mode.
        """
        self._animations: dict[str, AnimationDef] = {}
        for animation in animations:
            if animation.id in self._animations:
                raise AnimationDataError(f"Duplicate animation id {animation.id!r}")
            self._animations[animation.id] = animation

        if not self._animations:
            raise AnimationDataError("Animation set is empty")
        if tiles_x < 1 or tiles_y < 1:
            raise AnimationDataError(f"Invalid tile grid {tiles_x}x{tiles_y}")

        if strict:
            for animation in self._animations.values():
                for transition in animation.transitions:
                    if transition.next_id not in self._animations:
                        raise AnimationDataError(
                            f"Animation {animation.id!r} transitions to "
                            f"unknown id {transition.next_id!r}"
                        )

        self.tiles_x = tiles_x
        self.tiles_y = tiles_y
        self.image = image
        self.source = source
        self.initial_id = initial_id if initial_id is not None else next(iter(self._animations))
        if self.initial_id not in self._animations:
            raise AnimationDataError(f"Initial animation {self.initial_id!r} not in set")

    def __getitem__(self, animation_id: str) -> AnimationDef:
        return self._animations[animation_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._animations)

    def __len__(self) -> int:
        return len(self._animations)

    def get_animation(self, animation_id: str) -> AnimationDef:
        """Look up an animation, failing loudly on bad ids.

        Raises:
            UnknownAnimationError: If the id is not part of this set.
        """
        try:
            return self._animations[animation_id]
        except KeyError:
            raise UnknownAnimationError(animation_id) from None

    def find_by_name(self, name: str) -> Optional[AnimationDef]:
        """Return the first animation with the given name."""
        for animation in self._animations.values():
            if animation.name == name:
                return animation
        return None
