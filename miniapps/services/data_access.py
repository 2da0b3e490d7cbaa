"""Data access façade shared by the game, movie and video mini-apps.

Each getter fetches a static JSON fixture and falls back to built-in sample
records on any failure, so callers always receive a list. Videos are also
cached in the local key-value store: once the store has been initialized it
is the source of truth and the fixture is not requested again.
"""

import copy
import json
from collections.abc import Sequence
from typing import Any

import structlog

from ..models import (
    FALLBACK_GAMES,
    FALLBACK_MOVIES,
    FALLBACK_VIDEOS,
    AddVideoResult,
    GameRecord,
    MovieRecord,
    VideoRecord,
)
from .errors import ErrorHandlingService, get_error_service
from .http_client import HttpClientService
from .storage import KeyValueStore

log = structlog.stdlib.get_logger()

GAMES_PATH = "/all_games.json"
MOVIES_PATH = "/all_movies.json"
VIDEOS_PATH = "/videos.json"

OPENED_BEFORE_KEY = "isOpenedBefore"
VIDEOS_KEY = "videos"

COMPONENT = "data_access"


class DataAccessService:
    """Fetch-with-fallback access to the mini-app fixtures."""

    def __init__(
        self,
        http_client: HttpClientService,
        storage: KeyValueStore,
        error_service: ErrorHandlingService | None = None,
    ) -> None:
        """Initialize the data access service.

        Args:
            http_client: Client bound to the static fixture server
            storage: Local store used to cache videos
            error_service: Receives absorbed failures (defaults to the global service)
        """
        self.http_client = http_client
        self.storage = storage
        self._error_service = error_service or get_error_service()

    async def get_all_games(self) -> list[GameRecord]:
        """Games for the comparison view, or the two built-in games on failure."""
        return await self._fetch_or_fallback(GAMES_PATH, FALLBACK_GAMES, "get_all_games")

    async def get_movies(self) -> list[MovieRecord]:
        """Movies for the guessing game, or the built-in movie on failure."""
        return await self._fetch_or_fallback(MOVIES_PATH, FALLBACK_MOVIES, "get_movies")

    async def get_videos(self) -> list[VideoRecord]:
        """Videos for the watcher, served from the local store once initialized.

        On first use the fixture (or the built-in videos when it cannot be
        fetched) is written to the store and the store is marked initialized.
        A failure to write is reported but the videos are still returned.
        """
        cached = self._read_cached_videos()
        if cached is not None:
            log.debug("Serving videos from local storage", count=len(cached))
            return cached

        videos = await self._fetch_or_fallback(VIDEOS_PATH, FALLBACK_VIDEOS, "get_videos")

        try:
            self._persist_videos(videos, previous=self.storage.get_item(VIDEOS_KEY))
        except Exception as e:
            self._report(e, "get_videos", {"key": VIDEOS_KEY})
        else:
            log.info("Videos cached in local storage", count=len(videos))

        return videos

    async def add_video(self, record: VideoRecord) -> AddVideoResult:
        """Append a video to the local store.

        The store is left untouched when any step fails.
        """
        log.info("Adding video", video_id=record.get("id"), platform=record.get("platform"))

        try:
            previous = self.storage.get_item(VIDEOS_KEY)
            videos = self._decode_videos(previous) if previous is not None else []
            videos.append(record)
            self._persist_videos(videos, previous=previous)
        except Exception as e:
            self._report(e, "add_video", {"key": VIDEOS_KEY})
            return AddVideoResult(success=False, error=str(e))

        log.info("Video added", count=len(videos))
        return AddVideoResult(success=True)

    async def _fetch_or_fallback(
        self,
        path: str,
        fallback: Sequence[Any],
        operation: str,
    ) -> list[Any]:
        try:
            data = await self.http_client.get_json(path)
            if not isinstance(data, list):
                raise ValueError(f"Expected a JSON array from {path}, got {type(data).__name__}")
        except Exception as e:
            self._report(e, operation, {"url": path})
            log.warning("Using built-in fallback data", operation=operation, count=len(fallback))
            return copy.deepcopy(list(fallback))

        log.info("Fetched records", path=path, count=len(data))
        return data

    def _read_cached_videos(self) -> list[VideoRecord] | None:
        """Return the stored videos, or None when the network must be consulted."""
        try:
            if self.storage.get_item(OPENED_BEFORE_KEY) != "true":
                return None
            raw = self.storage.get_item(VIDEOS_KEY)
            if raw is None:
                return None
            return self._decode_videos(raw)
        except Exception as e:
            self._report(e, "get_videos", {"key": VIDEOS_KEY, "field": VIDEOS_KEY})
            return None

    @staticmethod
    def _decode_videos(raw: str) -> list[VideoRecord]:
        videos = json.loads(raw)
        if not isinstance(videos, list):
            raise ValueError(f"Stored {VIDEOS_KEY!r} is not a JSON array")
        return videos

    def _persist_videos(self, videos: list[VideoRecord], previous: str | None) -> None:
        """Write the videos and the initialized flag, restoring ``previous`` on failure."""
        payload = json.dumps(videos)
        self.storage.set_item(VIDEOS_KEY, payload)
        try:
            self.storage.set_item(OPENED_BEFORE_KEY, "true")
        except Exception:
            self._restore(VIDEOS_KEY, previous)
            raise

    def _restore(self, key: str, previous: str | None) -> None:
        try:
            if previous is None:
                self.storage.remove_item(key)
            else:
                self.storage.set_item(key, previous)
        except Exception as e:
            log.error("Failed to roll back storage write", key=key, error=str(e))

    def _report(self, error: Exception, operation: str, context: dict[str, Any]) -> None:
        self._error_service.handle_error(error, operation=operation, component=COMPONENT, context=context)
