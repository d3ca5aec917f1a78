"""A single sheep: its state, its simulation step and its pointer input."""

from __future__ import annotations

import logging
import random
import threading
import time
from typing import Callable, Optional

from esheep.types import (
    ActorState,
    AnimationSet,
    PointerEvent,
    PointerEventType,
    Position,
    StepResult,
)
from .config import PhysicsConfig, ScreenBounds
from .platform_index import PlatformIndex
from .simulation import SimulationStep

logger = logging.getLogger(__name__)


class Sheep:
    """One simulated sheep.

    Ticks and pointer events both mutate the sheep's state. A lock per sheep
    makes sure a drag never lands halfway through a tick when the two arrive
    from different threads.
    """

    def __init__(
        self,
        sheep_id: str,
        animations: AnimationSet,
        config: Optional[PhysicsConfig] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
        size: tuple[float, float] = (40.0, 40.0),
    ):
        """Initialize the sheep.

        Args:
            sheep_id: Unique identifier.
            animations: Loaded animation definitions.
            config: Physics settings.
            rng: Random source; a fresh Random() if omitted.
            clock: Time source used when tick() is called without a time.
            size: Actor box (width, height), normally one atlas tile.
        """
        self.id = sheep_id
        self._animations = animations
        self._step = SimulationStep(animations, config)
        self._rng = rng or random.Random()
        self._clock = clock
        self._lock = threading.Lock()
        self._listeners: list[Callable[["Sheep", StepResult], None]] = []
        self._running = True

        width, height = size
        self.state = ActorState(
            position=Position(100.0, 300.0),
            animation_id=animations.initial_id,
            width=width,
            height=height,
        )

    @property
    def config(self) -> PhysicsConfig:
        return self._step.config

    @property
    def is_running(self) -> bool:
        return self._running

    def spawn(self, screen: ScreenBounds) -> None:
        """Drop the sheep at a random spot in the upper half of the screen.

        Args:
            screen: Screen size.
        """
        with self._lock:
            state = self.state
            state.position.x = self._rng.uniform(0.0, max(screen.width - state.width, 0.0))
            low = screen.height / 2
            high = max(screen.height - state.height, low)
            state.position.y = self._rng.uniform(low, high)
            state.velocity_y = 0.0
            state.flipped = True
            state.detach()
            state.start_animation(self._animations.initial_id)
        logger.info(
            "Spawned sheep %s at (%.0f, %.0f)", self.id, state.position.x, state.position.y
        )

    def tick(
        self,
        platforms: PlatformIndex,
        screen: ScreenBounds,
        now: Optional[float] = None,
    ) -> StepResult:
        """Advance the sheep by one tick.

        Args:
            platforms: Platform snapshot for this tick.
            screen: Screen size.
            now: Current time in seconds; taken from the clock if omitted.

        Returns:
            The tile to render and the events that fired.
        """
        if not self._running:
            return StepResult(frame=self.state.last_frame)

        if now is None:
            now = self._clock()

        with self._lock:
            result = self._step.advance(self.state, platforms, screen, self._rng, now)

        for listener in self._listeners:
            listener(self, result)
        return result

    def handle_pointer(self, event: PointerEvent, platforms: PlatformIndex) -> None:
        """Apply a pointer event from the display surface.

        Args:
            event: Pointer event in screen coordinates.
            platforms: Platform snapshot used to decide what to do on release.
        """
        with self._lock:
            state = self.state
            if event.type is PointerEventType.DOWN:
                state.dragging = True
            elif event.type is PointerEventType.DRAG:
                if state.dragging:
                    state.position.x = event.x - state.width / 2
                    state.position.y = event.y - state.height / 2
            elif event.type is PointerEventType.UP:
                if state.dragging:
                    self._release(platforms)

    def _release(self, platforms: PlatformIndex) -> None:
        """Pick a landing-aware animation after a drag ends."""
        state = self.state
        cfg = self._step.config
        state.dragging = False
        state.velocity_y = 0.0
        state.edge.clear()
        state.bottom.reset()
        state.position.y = max(state.position.y, 0.0)

        support = platforms.platform_under_actor(state.box(), cfg.landing_margin)
        if support is not None:
            state.attach(support.platform_id)
            self._step.switch_animation(state, cfg.walk_animation_id)
        elif state.position.y > 0:
            state.detach()
            self._step.switch_animation(state, cfg.fall_animation_id)
        else:
            state.detach()
            self._step.switch_animation(state, cfg.walk_animation_id)

    def flip(self) -> None:
        """Turn the sheep around."""
        with self._lock:
            self.state.flipped = not self.state.flipped

    def stop(self) -> None:
        """Halt all future ticks."""
        self._running = False

    def subscribe(
        self, listener: Callable[["Sheep", StepResult], None]
    ) -> Callable[[], None]:
        """Subscribe to tick results.

        Args:
            listener: Called with the sheep and its StepResult after each tick.

        Returns:
            An unsubscribe function.
        """
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)
