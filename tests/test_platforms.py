"""Tests for platform sources and the registry."""

from __future__ import annotations

import random

from esheep.engine import ScreenBounds
from esheep.platforms import (
    PlatformRegistry,
    RandomPlatformSource,
    StaticPlatformSource,
    WindowInfo,
    WindowPlatformSource,
)


class TestRandomPlatformSource:
    """Tests for randomly scattered platforms."""

    def test_count_and_bounds(self):
        """Test random platforms fit the screen and keep off the edges."""
        screen = ScreenBounds(1280.0, 800.0)
        source = RandomPlatformSource(screen, count=20, rng=random.Random(5))
        platforms = source.platforms()
        assert len(platforms) == 20
        for platform in platforms:
            assert 100.0 <= platform.width <= 300.0
            assert platform.height == 20.0
            assert 0.0 <= platform.left
            assert platform.right <= screen.width
            assert 100.0 <= platform.y <= screen.height - 200.0

    def test_ids_are_unique(self):
        """Test each platform gets its own handle."""
        source = RandomPlatformSource(ScreenBounds(800.0, 600.0), count=10, rng=random.Random(1))
        ids = [p.platform_id for p in source.platforms() + source.platforms()]
        assert len(set(ids)) == 20


class TestWindowPlatformSource:
    """Tests for window-derived platforms."""

    def test_window_top_becomes_platform_top(self):
        """Test window coordinates are flipped to point up."""
        window = WindowInfo("Editor", "main.py", x=50, y=100, width=400, height=300)
        source = WindowPlatformSource(lambda: [window], screen_height=800)
        (platform,) = source.platforms()
        assert platform.top == 700
        assert platform.height == 10
        assert platform.left == 50
        assert platform.width == 400

    def test_small_windows_skipped(self):
        """Test windows under 50x50 never become platforms."""
        windows = [
            WindowInfo("Tiny", "", x=0, y=0, width=40, height=300),
            WindowInfo("Flat", "", x=0, y=0, width=300, height=49),
            WindowInfo("Big", "", x=0, y=0, width=300, height=300),
        ]
        source = WindowPlatformSource(lambda: windows, screen_height=800)
        assert len(source.platforms()) == 1

    def test_frontmost_only(self):
        """Test the frontmost filter keeps only frontmost windows."""
        windows = [
            WindowInfo("Front", "", x=0, y=0, width=300, height=300, frontmost=True),
            WindowInfo("Back", "", x=0, y=0, width=300, height=300),
        ]
        source = WindowPlatformSource(lambda: windows, screen_height=800, frontmost_app_only=True)
        assert len(source.platforms()) == 1


class TestPlatformRegistry:
    """Tests for the platform registry."""

    def test_starts_empty(self):
        """Test a new registry has a ground-only snapshot."""
        assert len(PlatformRegistry().snapshot()) == 0

    def test_refresh_replaces_snapshot(self, platform):
        """Test refresh builds a new snapshot and leaves the old one alone."""
        registry = PlatformRegistry(StaticPlatformSource([platform]))
        old = registry.snapshot()
        new = registry.refresh()
        assert new is registry.snapshot()
        assert len(new) == 1
        assert len(old) == 0

    def test_visibility_toggle(self):
        """Test visibility only changes the flag."""
        registry = PlatformRegistry()
        registry.set_visibility(False)
        assert registry.visible is False

    def test_frontmost_forwarded_to_source(self):
        """Test the frontmost toggle reaches the window source and refreshes."""
        windows = [
            WindowInfo("Front", "", x=0, y=0, width=300, height=300, frontmost=True),
            WindowInfo("Back", "", x=0, y=0, width=300, height=300),
        ]
        source = WindowPlatformSource(lambda: windows, screen_height=800)
        registry = PlatformRegistry(source)
        registry.refresh()
        assert len(registry.snapshot()) == 2

        registry.set_frontmost_app_only(True)
        assert source.frontmost_app_only is True
        assert len(registry.snapshot()) == 1
