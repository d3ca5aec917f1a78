"""Pytest configuration and fixtures."""

from __future__ import annotations

import pytest

from esheep.assets import create_default_animations
from esheep.engine import PhysicsConfig, PlatformIndex, ScreenBounds, SimulationStep
from esheep.types import ActorState, AnimationSet, Platform, Position


class ScriptedRandom:
    """Random source that replays scripted values."""

    def __init__(self, randoms=(), ranges=(), uniform=None):
        self._randoms = list(randoms)
        self._ranges = list(ranges)
        self._uniform = uniform

    def random(self) -> float:
        return self._randoms.pop(0)

    def randrange(self, stop: int) -> int:
        value = self._ranges.pop(0)
        assert 0 <= value < stop
        return value

    def uniform(self, a: float, b: float) -> float:
        return a if self._uniform is None else self._uniform


@pytest.fixture
def scripted_random():
    """Factory for scripted random sources."""
    return ScriptedRandom


@pytest.fixture
def animations() -> AnimationSet:
    """The built-in walk/run/idle/fall set."""
    return create_default_animations()


@pytest.fixture
def screen() -> ScreenBounds:
    """An 800x600 screen."""
    return ScreenBounds(800.0, 600.0)


@pytest.fixture
def config() -> PhysicsConfig:
    """Default physics settings."""
    return PhysicsConfig()


@pytest.fixture
def step(animations, config) -> SimulationStep:
    """Simulation step over the built-in animations."""
    return SimulationStep(animations, config)


@pytest.fixture
def ground_only() -> PlatformIndex:
    """A world with nothing but the ground."""
    return PlatformIndex.empty()


@pytest.fixture
def platform() -> Platform:
    """A 300 wide platform whose top is at y=200, spanning x 100..400."""
    return Platform(x=100.0, y=190.0, width=300.0, height=10.0, platform_id=1)


@pytest.fixture
def one_platform(platform) -> PlatformIndex:
    """A world with a single platform."""
    return PlatformIndex([platform])


@pytest.fixture
def make_actor():
    """Factory for actor states with 40x40 boxes."""

    def _make(x: float = 100.0, y: float = 0.0, animation_id: str = "0", **kwargs) -> ActorState:
        return ActorState(position=Position(x, y), animation_id=animation_id, **kwargs)

    return _make
