"""Command-line entry point for the mini-app data layer.

This module provides:
- Command-line argument parsing (one sub-command per data access operation)
- Application initialization and dependency injection
- Resource cleanup on exit
"""

import argparse
import asyncio
import dataclasses
import json
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import structlog

from miniapps import __version__
from miniapps.models import AppConfig, VideoRecord
from miniapps.services.config import VALID_LOG_LEVELS, ConfigurationService
from miniapps.services.data_access import DataAccessService
from miniapps.services.errors import ConfigurationError
from miniapps.services.http_client import HttpClientService
from miniapps.services.logging import setup_logging
from miniapps.services.storage import FileStorage, KeyValueStore

log = structlog.stdlib.get_logger()


class ApplicationContext:
    """Container for application services.

    Services are built lazily from the loaded configuration, with command-line
    overrides applied on top.
    """

    def __init__(
        self,
        config_path: Path | None = None,
        base_url: str | None = None,
        storage_path: Path | None = None,
    ) -> None:
        self._config_path: Path | None = config_path
        self._base_url_override: str | None = base_url
        self._storage_path_override: Path | None = storage_path

        self._config_service: ConfigurationService | None = None
        self._config: AppConfig | None = None
        self._http_client: HttpClientService | None = None
        self._storage: KeyValueStore | None = None
        self._data_access: DataAccessService | None = None

    @property
    def config_service(self) -> ConfigurationService:
        if self._config_service is None:
            self._config_service = ConfigurationService(config_path=self._config_path)
        return self._config_service

    @property
    def config(self) -> AppConfig:
        """Loaded configuration with command-line overrides applied."""
        if self._config is None:
            config = self.config_service.load_config()
            if self._base_url_override:
                config = dataclasses.replace(config, base_url=self._base_url_override)
            if self._storage_path_override:
                config = dataclasses.replace(config, storage_path=self._storage_path_override)
            if self._base_url_override or self._storage_path_override:
                result = self.config_service.validate_config(config)
                if not result.is_valid:
                    raise ConfigurationError(
                        f"Invalid command-line override: {', '.join(result.errors)}",
                        setting="--base-url" if self._base_url_override else "--storage",
                        current_value=self._base_url_override or self._storage_path_override,
                    )
            self._config = config
        return self._config

    @property
    def http_client(self) -> HttpClientService:
        if self._http_client is None:
            self._http_client = HttpClientService(
                base_url=self.config.base_url,
                timeout=self.config.timeout,
                max_retries=self.config.max_retries,
            )
        return self._http_client

    @property
    def storage(self) -> KeyValueStore:
        if self._storage is None:
            self._storage = FileStorage(self.config.storage_path)
        return self._storage

    @property
    def data_access(self) -> DataAccessService:
        if self._data_access is None:
            self._data_access = DataAccessService(
                http_client=self.http_client,
                storage=self.storage,
            )
        return self._data_access

    async def cleanup(self) -> None:
        """Close connections held by the services."""
        if self._http_client is not None:
            await self._http_client.close()


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="miniapps",
        description="Fetch mini-app data (games, movies, videos) with built-in fallbacks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  miniapps games                                   List games for the comparison view
  miniapps --base-url http://localhost:8000 movies List movies from a local server
  miniapps add-video --id abc --url https://youtu.be/abc
        """
    )

    _ = parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    _ = parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: ~/.config/miniapps/config.json)"
    )
    _ = parser.add_argument("--base-url", default=None, help="Override the fixture server URL")
    _ = parser.add_argument("--storage", type=Path, default=None, help="Override the local storage file")
    _ = parser.add_argument(
        "--log-level",
        choices=VALID_LOG_LEVELS,
        default=None,
        help="Set the logging level (default: log_level from the configuration file)"
    )
    _ = parser.add_argument("--log-dir", type=Path, default=None, help="Directory for log files")

    subparsers = parser.add_subparsers(dest="command", required=True)
    _ = subparsers.add_parser("games", help="List games for the comparison view")
    _ = subparsers.add_parser("movies", help="List movies for the guessing game")
    _ = subparsers.add_parser("videos", help="List videos, caching them locally on first use")

    add_video = subparsers.add_parser("add-video", help="Append a video to the local store")
    _ = add_video.add_argument("--id", required=True, dest="video_id", help="Platform-native video id")
    _ = add_video.add_argument("--url", required=True, help="Video URL")
    _ = add_video.add_argument("--platform", default="youtube", help="Video platform (default: youtube)")

    return parser


async def run_command(context: ApplicationContext, args: argparse.Namespace) -> tuple[int, Any]:
    """Run the selected operation.

    Returns:
        Exit code and the JSON-serializable output
    """
    service = context.data_access
    try:
        if args.command == "games":
            return 0, await service.get_all_games()
        if args.command == "movies":
            return 0, await service.get_movies()
        if args.command == "videos":
            return 0, await service.get_videos()

        record: VideoRecord = {"id": args.video_id, "url": args.url, "platform": args.platform}
        result = await service.add_video(record)
        return (0 if result.success else 1), result.to_dict()
    finally:
        await context.cleanup()


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the application."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure before anything logs, so nothing reaches stdout
    _ = setup_logging(log_level=args.log_level or "WARNING", log_dir=args.log_dir)

    context = ApplicationContext(
        config_path=args.config,
        base_url=args.base_url,
        storage_path=args.storage,
    )

    try:
        if args.log_level is None:
            _ = setup_logging(log_level=context.config.log_level, log_dir=args.log_dir)

        log.info("Starting miniapps", version=__version__, command=args.command)

        exit_code, output = asyncio.run(run_command(context, args))
        print(json.dumps(output, indent=2, ensure_ascii=False))

    except KeyboardInterrupt:
        log.info("Interrupted by user")
        exit_code = 130

    except Exception as e:
        log.error("Unhandled exception", error=str(e), exc_info=True)
        print(f"Fatal error: {e}", file=sys.stderr)
        exit_code = 1

    log.info("Exiting", exit_code=exit_code)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
