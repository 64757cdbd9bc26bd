"""statecraft — tick-driven strategy simulation core."""

__version__ = "0.1.0"
