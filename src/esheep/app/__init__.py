"""Main application package."""

from __future__ import annotations

from .game_loop import GameLoop
from .application import Application, main, setup_logging

__all__ = [
    "GameLoop",
    "Application",
    "main",
    "setup_logging",
]
