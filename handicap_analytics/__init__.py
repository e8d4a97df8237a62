"""Handicap trajectory projection and scoring analytics."""

__version__ = "0.1.0"
