"""A turn-based tactics game on a square grid, with a pygame window."""

__version__ = "0.1.0"
__all__ = ["__version__"]