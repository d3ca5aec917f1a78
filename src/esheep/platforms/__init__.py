"""Platform sources and the shared platform registry."""

from __future__ import annotations

from .sources import (
    PlatformSource,
    RandomPlatformSource,
    StaticPlatformSource,
    WindowInfo,
    WindowPlatformSource,
)
from .registry import PlatformRegistry

__all__ = [
    "PlatformSource",
    "RandomPlatformSource",
    "StaticPlatformSource",
    "WindowInfo",
    "WindowPlatformSource",
    "PlatformRegistry",
]
