"""Data models for the mini-app platform."""

from .config import AppConfig
from .records import (
    FALLBACK_GAMES,
    FALLBACK_MOVIES,
    FALLBACK_VIDEOS,
    GameRecord,
    MovieRecord,
    VideoRecord,
)
from .results import AddVideoResult

__all__ = [
    "AddVideoResult",
    "AppConfig",
    "FALLBACK_GAMES",
    "FALLBACK_MOVIES",
    "FALLBACK_VIDEOS",
    "GameRecord",
    "MovieRecord",
    "VideoRecord",
]
