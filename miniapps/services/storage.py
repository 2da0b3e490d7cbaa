"""Local key-value storage, the desktop counterpart of browser ``localStorage``.

Keys and values are strings. Callers serialize structured values to JSON
themselves, exactly as a browser front end does with ``localStorage``.
"""

import json
from pathlib import Path
from typing import Protocol, runtime_checkable

import structlog

log = structlog.stdlib.get_logger()


@runtime_checkable
class KeyValueStore(Protocol):
    """String-to-string persistent store."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...

    def clear(self) -> None: ...

    def keys(self) -> list[str]: ...


class MemoryStorage:
    """Process-local store, lost when the process exits."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Storage values must be strings, got {type(value).__name__}")
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()

    def keys(self) -> list[str]:
        return list(self._items)


class FileStorage:
    """Store persisted as a single JSON object file.

    Every mutation rewrites the whole file through a temporary file that is
    then moved into place, so the file on disk is always either the old or
    the new map.
    """

    def __init__(self, path: Path) -> None:
        """Initialize the file-backed store.

        Args:
            path: JSON file holding the map; created on first write
        """
        self.path = path
        log.info("File storage initialized", path=str(path))

    def get_item(self, key: str) -> str | None:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Storage values must be strings, got {type(value).__name__}")
        items = self._load()
        items[key] = value
        self._save(items)

    def remove_item(self, key: str) -> None:
        items = self._load()
        if key in items:
            del items[key]
            self._save(items)

    def clear(self) -> None:
        self._save({})

    def keys(self) -> list[str]:
        return list(self._load())

    def _load(self) -> dict[str, str]:
        """Read the map from disk, treating a missing file as empty.

        Raises:
            OSError: If the file cannot be read
            ValueError: If the file does not hold a JSON object of strings
        """
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            log.error("Invalid JSON in storage file", path=str(self.path), error=str(e))
            raise ValueError(f"Invalid JSON in storage file {self.path}: {e}") from e

        if not isinstance(data, dict) or not all(isinstance(v, str) for v in data.values()):
            raise ValueError(f"Storage file {self.path} must contain a JSON object of strings")

        return data

    def _save(self, items: dict[str, str]) -> None:
        """Write the map atomically.

        Raises:
            OSError: If the file cannot be written
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self.path.with_suffix(self.path.suffix + ".tmp")

        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(items, f, indent=2, ensure_ascii=False, sort_keys=True)
            temp_path.replace(self.path)
        except OSError as e:
            log.error("Failed to write storage file", path=str(self.path), error=str(e))
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    log.warning("Failed to clean up temporary storage file", path=str(temp_path))
            raise

        log.debug("Storage file written", path=str(self.path), keys=len(items))
