"""Renders sheep and platforms into a Pillow image of the whole screen."""

from __future__ import annotations

import time
from typing import Iterable, Optional

from PIL import Image, ImageDraw

from esheep.engine.config import ScreenBounds
from esheep.types import Platform
from .sprite_atlas import SpriteAtlas
from .surface import SheepDraw

PLATFORM_FILL = (0, 255, 0, 77)
PLATFORM_OUTLINE = (0, 255, 0, 255)


class ImageRenderer:
    """Composites sprite tiles onto a transparent screen-sized image."""

    def __init__(self, screen: ScreenBounds, atlas: SpriteAtlas):
        """Initialize the renderer.

        Args:
            screen: Screen size in pixels.
            atlas: Sprite atlas the frame indices refer to.
        """
        self.screen_bounds = screen
        self.atlas = atlas
        self.frame: Image.Image = self._blank()
        self.last_render_time: float = 0.0

    def _blank(self) -> Image.Image:
        return Image.new(
            "RGBA",
            (int(self.screen_bounds.width), int(self.screen_bounds.height)),
            (0, 0, 0, 0),
        )

    def render_frame(
        self,
        sheep: Iterable[SheepDraw],
        platforms: Optional[Iterable[Platform]] = None,
    ) -> None:
        """Render a complete frame into self.frame.

        Args:
            sheep: Sheep to draw.
            platforms: Platforms to draw, or None when they are hidden.
        """
        start_time = time.perf_counter()
        frame = self._blank()

        if platforms is not None:
            overlay = Image.new("RGBA", frame.size, (0, 0, 0, 0))
            draw = ImageDraw.Draw(overlay)
            for platform in platforms:
                draw.rectangle(self._to_image_box(platform), fill=PLATFORM_FILL, outline=PLATFORM_OUTLINE, width=2)
            frame = Image.alpha_composite(frame, overlay)

        for item in sheep:
            tile = self.atlas.tile(item.frame, item.flipped)
            left = int(item.position.x)
            # Image rows grow downward, screen y grows upward
            top = int(self.screen_bounds.height - item.position.y - tile.height)
            frame.alpha_composite(tile, dest=(max(left, 0), max(top, 0)))

        self.frame = frame
        self.last_render_time = time.perf_counter() - start_time

    def _to_image_box(self, platform: Platform) -> tuple[int, int, int, int]:
        height = self.screen_bounds.height
        return (
            int(platform.left),
            int(height - platform.top),
            int(platform.right),
            int(height - platform.bottom),
        )
