"""eSheep: a sheep that walks, falls and gets confused on your desktop."""

__version__ = "0.1.0"
