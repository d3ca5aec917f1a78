"""Per-tick state machine driving one sheep."""

from __future__ import annotations

import logging
import random
from typing import Optional

from esheep.errors import UnknownAnimationError
from esheep.types import (
    ActorState,
    AnimationAction,
    AnimationDef,
    AnimationSet,
    EdgeKind,
    SimulationEvent,
    StepResult,
)
from .config import PhysicsConfig, ScreenBounds
from .platform_index import PlatformIndex

logger = logging.getLogger(__name__)


class SimulationStep:
    """Advances an ActorState by exactly one tick.

    The step is synchronous and only does arithmetic on the state and reads
    from the platform snapshot it is handed, so it can run on any scheduler.
    Animation identity doubles as behaviour: walk/run/idle are driven by the
    transition graph, fall is driven by gravity, confusion freezes the sheep
    at an edge and dragging suspends everything.
    """

    def __init__(
        self,
        animations: AnimationSet,
        config: Optional[PhysicsConfig] = None,
    ):
        """Initialize the step.

        Args:
            animations: Loaded animation definitions.
            config: Physics settings; defaults to PhysicsConfig().
        """
        self._animations = animations
        self._config = config or PhysicsConfig()

    @property
    def config(self) -> PhysicsConfig:
        return self._config

    def advance(
        self,
        state: ActorState,
        platforms: PlatformIndex,
        screen: ScreenBounds,
        rng: random.Random,
        now: float,
    ) -> StepResult:
        """Advance the simulation by one tick.

        Args:
            state: Sheep state, mutated in place.
            platforms: Platform snapshot for this tick.
            screen: Screen size.
            rng: Random source for transitions and edge decisions.
            now: Current time in seconds.

        Returns:
            The tile to render and the events that fired.
        """
        if state.dragging:
            return StepResult(frame=self._config.drag_frame)

        if state.frozen:
            return StepResult(frame=state.last_frame)

        try:
            animation = self._animations.get_animation(state.animation_id)
        except UnknownAnimationError:
            result = StepResult(frame=state.last_frame)
            self._freeze(state, state.animation_id, result)
            return result

        frame = animation.frame_at_step(state.step_index)
        state.last_frame = frame
        result = StepResult(frame=frame)

        if self._resolve_vertical(state, animation, platforms, result):
            return result

        # Scripted movement only while resting, not while falling
        if state.velocity_y == 0:
            if self._move(state, animation, platforms, screen, rng, now, result):
                return result

        self._advance_step(state, animation, rng, result)
        return result

    def switch_animation(
        self,
        state: ActorState,
        animation_id: str,
        result: Optional[StepResult] = None,
    ) -> bool:
        """Start another animation from its first step.

        Args:
            state: Sheep state.
            animation_id: Animation to start.
            result: Optional result collecting the events.

        Returns:
            False if the id is unknown (the sheep is frozen instead).
        """
        if result is None:
            result = StepResult(frame=state.last_frame)

        if animation_id not in self._animations:
            self._freeze(state, animation_id, result)
            return False

        state.start_animation(animation_id)
        result.events.append(SimulationEvent.ANIMATION_CHANGED)
        return True

    def _resolve_vertical(
        self,
        state: ActorState,
        animation: AnimationDef,
        platforms: PlatformIndex,
        result: StepResult,
    ) -> bool:
        """Support check and gravity. Returns True to end the tick early."""
        cfg = self._config

        support = platforms.platform_under_actor(state.box(), cfg.landing_margin)
        if support is not None:
            state.attach(support.platform_id)
            return False

        state.detach()
        target = platforms.nearest_platform_below(
            state.center_x, state.position.y, cfg.fall_search_distance
        )
        if target is None and state.position.y <= 0:
            # Resting on the ground
            return False

        state.velocity_y = max(state.velocity_y - cfg.gravity, -cfg.max_fall_speed)
        state.position.y += state.velocity_y

        landed = False
        if target is not None and state.position.y <= target.top:
            state.position.y = target.top
            state.attach(target.platform_id)
            landed = True

        if state.position.y <= 0:
            state.position.y = 0.0
            state.velocity_y = 0.0
            state.detach()

        if landed:
            result.events.append(SimulationEvent.LANDED)
            logger.debug("Sheep landed at y=%.1f", state.position.y)
            if animation.id == cfg.fall_animation_id:
                self.switch_animation(state, cfg.walk_animation_id, result)
                return True

        return False

    def _move(
        self,
        state: ActorState,
        animation: AnimationDef,
        platforms: PlatformIndex,
        screen: ScreenBounds,
        rng: random.Random,
        now: float,
        result: StepResult,
    ) -> bool:
        """Scripted movement plus edge and bottom handling.

        Returns:
            True to end the tick early.
        """
        cfg = self._config
        platform = platforms.get(state.current_platform_id) if state.is_on_platform else None
        max_x = screen.width - state.width

        if state.edge.confused:
            if state.edge.elapsed(now) < cfg.confused_duration:
                return True

            if state.edge.kind is EdgeKind.PLATFORM:
                state.edge.resolve()
                if platform is None:
                    # The platform went away while we were thinking about it
                    state.edge.clear()
                elif rng.random() < 0.5:
                    logger.debug("Sheep decides to jump down")
                    state.detach()
                    state.velocity_y = -1.0
                    self.switch_animation(state, cfg.fall_animation_id, result)
                    return True
                else:
                    logger.debug("Sheep decides to turn around")
                    self._flip(state, result)
            else:
                state.edge.resolve()
                self._flip(state, result)
                state.position.x = min(max(state.position.x, 0.0), max(max_x, 0.0))

        progress = state.step_index / animation.total_steps()
        move_x, move_y = animation.movement.at(progress)
        state.position.x += move_x if state.flipped else -move_x
        if state.is_on_platform or state.position.y <= 0:
            state.position.y += move_y
            if not state.is_on_platform and state.position.y < 0:
                state.position.y = 0.0

        at_edge = False

        if platform is not None:
            center = state.center_x
            if (
                center < platform.left - cfg.edge_overshoot
                or center > platform.right + cfg.edge_overshoot
            ):
                logger.debug("Sheep walked off platform %d", platform.platform_id)
                state.detach()
                state.edge.clear()
                state.velocity_y = 0.0
                self.switch_animation(state, cfg.fall_animation_id, result)
                return True

            if (
                center < platform.left + cfg.edge_threshold
                or center > platform.right - cfg.edge_threshold
            ):
                at_edge = True
                if not state.edge.was_at_edge:
                    logger.debug("Sheep confused at platform edge")
                    state.edge.enter(EdgeKind.PLATFORM, now)
                    result.events.append(SimulationEvent.CONFUSED)
                    return True

        if state.position.x <= 0 or state.position.x >= max_x:
            at_edge = True
            if not state.edge.was_at_edge:
                logger.debug("Sheep confused at screen edge")
                state.edge.enter(EdgeKind.SCREEN, now)
                result.events.append(SimulationEvent.CONFUSED)
                return True

            # Already turned once: keep walking inward, never off screen
            heading_out = (state.flipped and state.position.x >= max_x) or (
                not state.flipped and state.position.x <= 0
            )
            if heading_out:
                self._flip(state, result)
            state.position.x = min(max(state.position.x, 0.0), max(max_x, 0.0))

        if not at_edge:
            state.edge.was_at_edge = False

        top = screen.height - state.height
        if state.position.y >= top:
            state.position.y = top

        self._update_bottom_dwell(state, screen, rng, now, result)
        return False

    def _update_bottom_dwell(
        self,
        state: ActorState,
        screen: ScreenBounds,
        rng: random.Random,
        now: float,
        result: StepResult,
    ) -> None:
        """Teleport a sheep that has lingered on the ground for too long."""
        cfg = self._config

        if state.position.y > cfg.bottom_threshold or state.is_on_platform:
            state.bottom.reset()
            return

        if not state.bottom.at_bottom:
            state.bottom.start(now)
            return

        if now - state.bottom.since >= cfg.bottom_teleport_delay:
            state.position.x = rng.uniform(0.0, max(screen.width - state.width, 0.0))
            state.position.y = screen.height * cfg.teleport_height_ratio
            state.velocity_y = 0.0
            state.detach()
            state.edge.clear()
            state.bottom.reset()
            result.events.append(SimulationEvent.TELEPORTED)
            logger.debug("Teleporting sheep from bottom to x=%.1f", state.position.x)

    def _advance_step(
        self,
        state: ActorState,
        animation: AnimationDef,
        rng: random.Random,
        result: StepResult,
    ) -> None:
        """Move to the next step, firing the action and transition at the end."""
        state.step_index += 1
        if state.step_index < animation.total_steps():
            return

        if animation.action is AnimationAction.FLIP:
            self._flip(state, result)

        next_id = animation.choose_next_animation(rng)
        if next_id is None:
            state.start_animation(animation.id)
        else:
            self.switch_animation(state, next_id, result)

    def _flip(self, state: ActorState, result: StepResult) -> None:
        state.flipped = not state.flipped
        result.events.append(SimulationEvent.FLIPPED)
        logger.debug("Flipped to %s", "right" if state.flipped else "left")

    def _freeze(self, state: ActorState, animation_id: str, result: StepResult) -> None:
        logger.error(
            "Animation %r not found; sheep frozen on frame %d",
            animation_id,
            state.last_frame,
        )
        state.frozen = True
        result.events.append(SimulationEvent.ANIMATION_MISSING)
