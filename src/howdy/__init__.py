"""Howdy - personal mood journal."""

__version__ = "0.3.0"
