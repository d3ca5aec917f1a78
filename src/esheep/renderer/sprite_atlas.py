"""Slices a sprite sheet into tiles."""

from __future__ import annotations

from PIL import Image, ImageOps


class SpriteAtlas:
    """A grid of equally sized sprite tiles, indexed row-major."""

    def __init__(self, image: Image.Image, tiles_x: int, tiles_y: int):
        """Initialize the atlas.

        Args:
            image: The sprite sheet.
            tiles_x: Columns in the sheet.
            tiles_y: Rows in the sheet.
        """
        if tiles_x < 1 or tiles_y < 1:
            raise ValueError(f"Invalid tile grid {tiles_x}x{tiles_y}")

        self.image = image.convert("RGBA")
        self.tiles_x = tiles_x
        self.tiles_y = tiles_y
        self._cache: dict[tuple[int, bool], Image.Image] = {}

    @property
    def frame_width(self) -> int:
        return self.image.width // self.tiles_x

    @property
    def frame_height(self) -> int:
        return self.image.height // self.tiles_y

    @property
    def tile_count(self) -> int:
        return self.tiles_x * self.tiles_y

    def tile(self, index: int, flipped: bool = False) -> Image.Image:
        """Get one tile.

        Sprites face left in the sheet; flipped tiles face right.

        Args:
            index: Tile index; wraps around the tile count.
            flipped: Mirror the tile horizontally.

        Returns:
            The tile image.
        """
        index %= self.tile_count
        key = (index, flipped)
        if key not in self._cache:
            col = index % self.tiles_x
            row = index // self.tiles_x
            left = col * self.frame_width
            top = row * self.frame_height
            tile = self.image.crop((left, top, left + self.frame_width, top + self.frame_height))
            if flipped:
                tile = ImageOps.mirror(tile)
            self._cache[key] = tile
        return self._cache[key]
