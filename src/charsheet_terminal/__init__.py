"""Animated terminal character sheet."""

__version__ = "0.3.0"
