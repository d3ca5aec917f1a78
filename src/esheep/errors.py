"""Exception types for eSheep."""

from __future__ import annotations


class ESheepError(Exception):
    """Base class for all eSheep errors."""


class AnimationDataError(ESheepError, ValueError):
    """Raised when animation data violates its invariants."""


class UnknownAnimationError(ESheepError, KeyError):
    """Raised when an animation id is not part of the loaded set."""

    def __init__(self, animation_id: str):
        super().__init__(animation_id)
        self.animation_id = animation_id

    def __str__(self) -> str:
        return f"Unknown animation: {self.animation_id!r}"
