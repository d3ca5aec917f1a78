#!/usr/bin/env python3
"""Run a few seconds of simulation and save the last frame to view."""

import asyncio
from pathlib import Path

from esheep.app import Application


def main():
    app = Application(width=800, height=500, sheep_count=3, seed=7, tick_interval=0.0)

    # About ten simulated seconds
    asyncio.run(app.run(max_ticks=100))

    output = Path(__file__).parent.parent / "frame.png"
    app.save_frame(output)
    print(f"Saved frame to {output}")
    print(f"Render time: {app.renderer.last_render_time*1000:.1f}ms")
    print(app.renderer.get_screen_string())


if __name__ == "__main__":
    main()
