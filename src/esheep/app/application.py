"""Main application entry point."""

from __future__ import annotations

import argparse
import asyncio
import logging
import random
import sys
from pathlib import Path
from typing import Callable, Iterable, Optional

from esheep.assets import AnimationLoader, create_placeholder_atlas
from esheep.engine import ScreenBounds, SheepEngine
from esheep.platforms import (
    PlatformRegistry,
    PlatformSource,
    RandomPlatformSource,
    StaticPlatformSource,
    WindowInfo,
    WindowPlatformSource,
)
from esheep.renderer import HeadlessRenderer, ImageRenderer, SpriteAtlas
from esheep.types import AnimationSet

from .game_loop import GameLoop

logger = logging.getLogger(__name__)


def setup_logging(debug: bool) -> None:
    """Configure logging to stderr."""
    level = logging.DEBUG if debug else logging.WARNING
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("[%(levelname)s] %(name)s: %(message)s")
    )
    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


class Application:
    """Runs a flock of sheep on a simulated screen."""

    def __init__(
        self,
        width: int = 1280,
        height: int = 800,
        sheep_count: int = 1,
        platform_count: int = 5,
        seed: Optional[int] = None,
        animation_path: Optional[Path] = None,
        show_platforms: bool = True,
        frontmost_only: bool = False,
        tick_interval: float = 0.1,
        platform_refresh: float = 2.0,
        list_windows: Optional[Callable[[], Iterable[WindowInfo]]] = None,
    ):
        """Initialize the application.

        Args:
            width: Screen width in pixels.
            height: Screen height in pixels.
            sheep_count: Sheep to spawn.
            platform_count: Random platforms to scatter; 0 for ground only.
            seed: Seed for reproducible runs.
            animation_path: eSheep XML file; the built-in set if omitted.
            show_platforms: Draw platforms.
            frontmost_only: Only use windows of the frontmost application.
            tick_interval: Seconds between ticks.
            platform_refresh: Seconds between platform refreshes.
            list_windows: Window enumerator. When given, window tops are the
                platforms and platform_count is ignored.
        """
        self.screen = ScreenBounds(float(width), float(height))
        self.sheep_count = sheep_count
        self.platform_count = platform_count
        self.seed = seed
        self.animation_path = animation_path
        self.show_platforms = show_platforms
        self.frontmost_only = frontmost_only
        self.tick_interval = tick_interval
        self.platform_refresh = platform_refresh
        self.list_windows = list_windows

        # Components (created in initialize)
        self.animations: Optional[AnimationSet] = None
        self.atlas: Optional[SpriteAtlas] = None
        self.registry: Optional[PlatformRegistry] = None
        self.engine: Optional[SheepEngine] = None
        self.renderer: Optional[HeadlessRenderer] = None
        self.game_loop: Optional[GameLoop] = None

        self._initialized = False

    async def initialize(self) -> None:
        """Initialize all application components."""
        if self._initialized:
            return

        rng = random.Random(self.seed)

        loader = AnimationLoader(self.animation_path, rng=rng)
        self.animations = loader.load()

        image = self.animations.image
        if image is None:
            image = create_placeholder_atlas(self.animations.tiles_x, self.animations.tiles_y)
        self.atlas = SpriteAtlas(image, self.animations.tiles_x, self.animations.tiles_y)

        source: Optional[PlatformSource] = None
        if self.list_windows is not None:
            source = WindowPlatformSource(
                self.list_windows,
                self.screen.height,
                frontmost_app_only=self.frontmost_only,
            )
        elif self.platform_count > 0:
            # Random platforms are laid out once and then stay put
            layout = RandomPlatformSource(self.screen, self.platform_count, rng)
            source = StaticPlatformSource(layout.platforms())
        self.registry = PlatformRegistry(source, visible=self.show_platforms)
        self.registry.set_frontmost_app_only(self.frontmost_only)

        self.engine = SheepEngine(
            self.animations,
            self.screen,
            registry=self.registry,
            seed=rng.randrange(2**32),
            sheep_size=(float(self.atlas.frame_width), float(self.atlas.frame_height)),
        )

        self.renderer = HeadlessRenderer(self.screen)

        self.game_loop = GameLoop(
            engine=self.engine,
            renderer=self.renderer,
            tick_interval=self.tick_interval,
            platform_refresh=self.platform_refresh,
        )

        for _ in range(self.sheep_count):
            self.engine.spawn_sheep()

        self._initialized = True

    async def run(self, max_ticks: Optional[int] = None) -> None:
        """Run the main loop.

        Args:
            max_ticks: Stop after this many ticks; run until stopped if None.
        """
        await self.initialize()
        try:
            await self.game_loop.run_async(max_ticks)
        finally:
            self.game_loop.stop()

    def stop(self) -> None:
        """Stop the application."""
        if self.game_loop is not None:
            self.game_loop.stop()

    def save_frame(self, path: Path) -> Path:
        """Render the current sheep with their sprites and save a PNG.

        Args:
            path: Output file.

        Returns:
            The path written.
        """
        if self.engine is None or self.atlas is None:
            raise RuntimeError("Application is not initialized")

        image_renderer = ImageRenderer(self.screen, self.atlas)
        draws = list(self.renderer.rendered_sheep.values())
        platforms = self.registry.snapshot().platforms if self.registry.visible else None
        image_renderer.render_frame(draws, platforms)

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        image_renderer.frame.save(path)
        logger.info("Saved frame to %s", path)
        return path


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="eSheep - desktop sheep simulation")
    parser.add_argument(
        "--ticks",
        type=int,
        default=None,
        help="Stop after this many ticks (default: run until interrupted)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=1280,
        help="Screen width in pixels",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=800,
        help="Screen height in pixels",
    )
    parser.add_argument(
        "--sheep",
        type=int,
        default=1,
        help="Number of sheep",
    )
    parser.add_argument(
        "--platforms",
        type=int,
        default=5,
        help="Number of random platforms (0 for ground only)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible runs",
    )
    parser.add_argument(
        "--animations",
        type=Path,
        default=None,
        help="eSheep animation XML file",
    )
    parser.add_argument(
        "--hide-platforms",
        action="store_true",
        help="Do not draw platforms",
    )
    parser.add_argument(
        "--frontmost-only",
        action="store_true",
        help="Only use windows of the frontmost application as platforms",
    )
    parser.add_argument(
        "--ascii",
        action="store_true",
        help="Print an ASCII picture of the last frame",
    )
    parser.add_argument(
        "--save-frame",
        type=Path,
        default=None,
        help="Save the last frame as a PNG",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()
    setup_logging(args.debug)

    app = Application(
        width=args.width,
        height=args.height,
        sheep_count=args.sheep,
        platform_count=args.platforms,
        seed=args.seed,
        animation_path=args.animations,
        show_platforms=not args.hide_platforms,
        frontmost_only=args.frontmost_only,
    )

    try:
        asyncio.run(app.run(args.ticks))
    except KeyboardInterrupt:
        logger.info("Interrupted")

    if args.ascii and app.renderer is not None:
        print(app.renderer.get_screen_string())
    if args.save_frame is not None and app.engine is not None:
        app.save_frame(args.save_frame)


if __name__ == "__main__":
    main()
