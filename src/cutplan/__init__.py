"""Weight-loss trajectory planning: TDEE estimation and phased projection."""

__version__ = "0.1.0"
