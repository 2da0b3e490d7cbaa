"""Data access layer for the mini-app platform (games, movies, videos)."""

__version__ = "0.1.0"
