"""Animation data and sprite assets for eSheep."""

from __future__ import annotations

from .default_animations import (
    DEFAULT_ANIMATION_DEFINITIONS,
    create_default_animations,
)
from .animation_loader import AnimationLoader
from .placeholder_generator import PlaceholderGenerator, create_placeholder_atlas

__all__ = [
    "DEFAULT_ANIMATION_DEFINITIONS",
    "create_default_animations",
    "AnimationLoader",
    "PlaceholderGenerator",
    "create_placeholder_atlas",
]
