"""Game loop for coordinating engine and renderer."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Callable, Optional

from esheep.renderer.surface import SheepDraw
from esheep.types import PointerEvent, StepResult

if TYPE_CHECKING:
    from esheep.engine import SheepEngine
    from esheep.renderer.surface import DisplaySurface

logger = logging.getLogger(__name__)


class GameLoop:
    """Fixed-interval loop that ticks the engine and renders every sheep."""

    def __init__(
        self,
        engine: SheepEngine,
        renderer: DisplaySurface,
        tick_interval: float = 0.1,
        platform_refresh: float = 2.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the game loop.

        Args:
            engine: The sheep engine.
            renderer: The display surface.
            tick_interval: Seconds between ticks.
            platform_refresh: Seconds between platform refreshes.
            clock: Time source for run_async().
        """
        self.engine = engine
        self.renderer = renderer
        self.tick_interval = tick_interval
        self.platform_refresh = platform_refresh
        self._clock = clock

        self._running = False
        self._last_refresh: Optional[float] = None
        self._tick_count = 0
        self.last_results: dict[str, StepResult] = {}

    @property
    def tick_count(self) -> int:
        return self._tick_count

    def tick(self, now: float) -> dict[str, StepResult]:
        """Process a single tick.

        Args:
            now: Current time in seconds.

        Returns:
            Step results keyed by sheep id.
        """
        if self._last_refresh is None or now - self._last_refresh >= self.platform_refresh:
            self.engine.refresh_platforms()
            self._last_refresh = now

        results = self.engine.update(now)
        self.last_results = results

        draws = []
        for sheep_id, result in results.items():
            sheep = self.engine.get_sheep(sheep_id)
            if sheep is None:
                continue
            draws.append(
                SheepDraw(
                    sheep_id=sheep_id,
                    frame=result.frame,
                    flipped=sheep.state.flipped,
                    position=sheep.state.position.copy(),
                )
            )

        registry = self.engine.registry
        platforms = registry.snapshot().platforms if registry.visible else None
        self.renderer.render_frame(draws, platforms)

        self._tick_count += 1
        return results

    def dispatch_pointer(self, sheep_id: str, event: PointerEvent) -> None:
        """Dispatch a pointer event to a sheep.

        Args:
            sheep_id: Target sheep.
            event: The pointer event.
        """
        self.engine.dispatch_pointer(sheep_id, event)

    def start(self) -> None:
        """Start the game loop."""
        self._running = True

    def stop(self) -> None:
        """Stop the game loop."""
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    async def run_async(self, max_ticks: Optional[int] = None) -> None:
        """Run the loop until stopped.

        Args:
            max_ticks: Stop after this many ticks; run forever if None.
        """
        self.start()
        ticks = 0
        logger.info("Game loop started (interval %.3fs)", self.tick_interval)
        try:
            while self._running and (max_ticks is None or ticks < max_ticks):
                frame_start = time.perf_counter()

                self.tick(self._clock())
                ticks += 1

                # Keep a fixed interval between ticks
                frame_time = time.perf_counter() - frame_start
                await asyncio.sleep(max(0.0, self.tick_interval - frame_time))
        finally:
            self._running = False
            logger.info("Game loop stopped after %d ticks", ticks)
