"""Generate a placeholder sprite atlas when no sprite sheet is available."""

from __future__ import annotations

import colorsys
from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image

from .default_animations import DEFAULT_TILES_X, DEFAULT_TILES_Y

DEFAULT_TILE_SIZE = 40
BORDER_WIDTH = 2


def create_placeholder_atlas(
    tiles_x: int = DEFAULT_TILES_X,
    tiles_y: int = DEFAULT_TILES_Y,
    tile_size: int = DEFAULT_TILE_SIZE,
) -> Image.Image:
    """Build a grid of coloured tiles, one hue per tile index.

    Args:
        tiles_x: Columns.
        tiles_y: Rows.
        tile_size: Tile width and height in pixels.

    Returns:
        RGBA atlas image.
    """
    pixels = np.zeros((tiles_y * tile_size, tiles_x * tile_size, 4), dtype=np.uint8)
    tile_count = tiles_x * tiles_y

    for row in range(tiles_y):
        for col in range(tiles_x):
            hue = (row * tiles_x + col) / tile_count
            r, g, b = colorsys.hsv_to_rgb(hue, 0.7, 0.8)
            top = row * tile_size
            left = col * tile_size
            tile = pixels[top:top + tile_size, left:left + tile_size]
            tile[:] = (255, 255, 255, 255)  # White border
            tile[BORDER_WIDTH:-BORDER_WIDTH, BORDER_WIDTH:-BORDER_WIDTH] = (
                int(r * 255),
                int(g * 255),
                int(b * 255),
                255,
            )

    return Image.fromarray(pixels)


class PlaceholderGenerator:
    """Writes placeholder atlases to disk."""

    def __init__(self, output_dir: Optional[Path] = None):
        """Initialize the generator.

        Args:
            output_dir: Output directory for generated atlases.
        """
        self.output_dir = output_dir or Path("assets/sprites")

    def generate_atlas(
        self,
        name: str = "esheep",
        tiles_x: int = DEFAULT_TILES_X,
        tiles_y: int = DEFAULT_TILES_Y,
        tile_size: int = DEFAULT_TILE_SIZE,
    ) -> Path:
        """Generate and save a placeholder atlas.

        Args:
            name: File name without extension.
            tiles_x: Columns.
            tiles_y: Rows.
            tile_size: Tile size in pixels.

        Returns:
            Path to the written PNG.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        output_path = self.output_dir / f"{name}.png"
        create_placeholder_atlas(tiles_x, tiles_y, tile_size).save(output_path)
        return output_path
