"""Weight Lifting Exercises quality classifier."""

__version__ = "0.1.0"
