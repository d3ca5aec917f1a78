"""Rendering for eSheep."""

from .surface import DisplaySurface, SheepDraw
from .sprite_atlas import SpriteAtlas
from .headless import HeadlessRenderer
from .image_renderer import ImageRenderer

__all__ = [
    "DisplaySurface",
    "SheepDraw",
    "SpriteAtlas",
    "HeadlessRenderer",
    "ImageRenderer",
]
