"""Coordinates all sheep against a shared platform snapshot."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Optional

from esheep.types import AnimationSet, PointerEvent, StepResult
from .config import PhysicsConfig, ScreenBounds
from .sheep import Sheep

if TYPE_CHECKING:
    from esheep.platforms import PlatformRegistry

logger = logging.getLogger(__name__)


class SheepEngine:
    """Main engine: owns the sheep and hands each tick one platform snapshot."""

    def __init__(
        self,
        animations: AnimationSet,
        screen: ScreenBounds,
        registry: Optional[PlatformRegistry] = None,
        config: Optional[PhysicsConfig] = None,
        seed: Optional[int] = None,
        sheep_size: tuple[float, float] = (40.0, 40.0),
    ):
        """Initialize the engine.

        Args:
            animations: Loaded animation definitions.
            screen: Screen size.
            registry: Platform registry; ground only if omitted.
            config: Physics settings shared by all sheep.
            seed: Seed for reproducible runs.
            sheep_size: Actor box of new sheep.
        """
        if registry is None:
            from esheep.platforms import PlatformRegistry

            registry = PlatformRegistry()

        self.animations = animations
        self.screen = screen
        self.registry = registry
        self._config = config or PhysicsConfig()
        self._rng = random.Random(seed)
        self._sheep_size = sheep_size
        self._sheep: dict[str, Sheep] = {}
        self._next_index = 1

    @property
    def sheep(self) -> list[Sheep]:
        return list(self._sheep.values())

    def spawn_sheep(self, sheep_id: Optional[str] = None) -> Sheep:
        """Create a sheep at a random position.

        Args:
            sheep_id: Optional identifier; generated if omitted.

        Returns:
            The new sheep.
        """
        if sheep_id is None:
            sheep_id = f"sheep-{self._next_index}"
            self._next_index += 1

        sheep = Sheep(
            sheep_id,
            self.animations,
            config=self._config,
            rng=random.Random(self._rng.random()),
            size=self._sheep_size,
        )
        sheep.spawn(self.screen)
        self._sheep[sheep_id] = sheep
        return sheep

    def remove_sheep(self, sheep_id: str) -> Optional[Sheep]:
        """Stop and remove a sheep.

        Returns:
            The removed sheep, or None if not found.
        """
        sheep = self._sheep.pop(sheep_id, None)
        if sheep is not None:
            sheep.stop()
        return sheep

    def get_sheep(self, sheep_id: str) -> Optional[Sheep]:
        return self._sheep.get(sheep_id)

    def refresh_platforms(self) -> None:
        """Rebuild the platform snapshot from its source."""
        self.registry.refresh()

    def update(self, now: float) -> dict[str, StepResult]:
        """Tick every sheep once.

        Args:
            now: Current time in seconds.

        Returns:
            Step results keyed by sheep id.
        """
        platforms = self.registry.snapshot()
        return {
            sheep_id: sheep.tick(platforms, self.screen, now)
            for sheep_id, sheep in list(self._sheep.items())
        }

    def dispatch_pointer(self, sheep_id: str, event: PointerEvent) -> None:
        """Route a pointer event to a sheep.

        Args:
            sheep_id: Target sheep.
            event: The pointer event.
        """
        sheep = self._sheep.get(sheep_id)
        if sheep is None:
            logger.warning("Pointer event for unknown sheep %s", sheep_id)
            return
        sheep.handle_pointer(event, self.registry.snapshot())
