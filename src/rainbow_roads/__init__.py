"""Animate GPS activity tracks as fading comet trails."""

__version__ = "0.1.0"
