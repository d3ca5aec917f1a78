#!/usr/bin/env python3
"""Generate a placeholder sprite atlas for eSheep."""

from pathlib import Path

from esheep.assets import PlaceholderGenerator


def main():
    """Generate the placeholder atlas."""
    output_dir = Path(__file__).parent.parent / "assets" / "sprites"
    print(f"Generating placeholder atlas in {output_dir}")

    path = PlaceholderGenerator(output_dir).generate_atlas()
    print(f"Generated {path}")


if __name__ == "__main__":
    main()
