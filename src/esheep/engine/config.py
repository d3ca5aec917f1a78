"""Tuning constants for the sheep simulation."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScreenBounds:
    """Size of the screen area the sheep lives in."""

    width: float
    height: float


@dataclass(frozen=True)
class PhysicsConfig:
    """Physics, edge and teleport settings."""

    # Gravity
    gravity: float = 0.5  # Units per tick squared
    max_fall_speed: float = 10.0
    landing_margin: float = 5.0  # Vertical slack when standing on a platform
    fall_search_distance: float = 1000.0

    # Platform and screen edges
    edge_threshold: float = 20.0  # Distance from a platform edge that causes confusion
    edge_overshoot: float = 5.0  # Distance past the edge that forces a fall
    confused_duration: float = 2.0  # Seconds

    # Bottom teleport
    bottom_threshold: float = 50.0
    bottom_teleport_delay: float = 30.0  # Seconds
    teleport_height_ratio: float = 0.8

    # Well-known tiles and animations
    drag_frame: int = 2
    walk_animation_id: str = "0"
    fall_animation_id: str = "3"
