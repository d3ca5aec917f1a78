"""Simulation engine for eSheep."""

from __future__ import annotations

from .config import PhysicsConfig, ScreenBounds
from .platform_index import PlatformIndex
from .simulation import SimulationStep
from .sheep import Sheep
from .game_engine import SheepEngine

__all__ = [
    "PhysicsConfig",
    "ScreenBounds",
    "PlatformIndex",
    "SimulationStep",
    "Sheep",
    "SheepEngine",
]
