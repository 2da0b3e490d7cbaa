"""Tests for the local key-value stores."""

import json
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest
from hypothesis import given, strategies as st

from miniapps.services import FileStorage, KeyValueStore, MemoryStorage


storage_maps = st.dictionaries(
    keys=st.text(min_size=1, max_size=20),
    values=st.text(max_size=100),
    max_size=5,
)


@pytest.fixture(params=["memory", "file"])
def store(request: pytest.FixtureRequest, tmp_path: Path) -> KeyValueStore:
    if request.param == "memory":
        return MemoryStorage()
    return FileStorage(tmp_path / "storage.json")


class TestKeyValueStoreContract:
    """Behaviour shared by every store implementation."""

    def test_implements_protocol(self, store: KeyValueStore) -> None:
        assert isinstance(store, KeyValueStore)

    def test_missing_key_is_none(self, store: KeyValueStore) -> None:
        assert store.get_item("videos") is None

    def test_set_get_remove(self, store: KeyValueStore) -> None:
        store.set_item("isOpenedBefore", "true")
        assert store.get_item("isOpenedBefore") == "true"

        store.remove_item("isOpenedBefore")
        assert store.get_item("isOpenedBefore") is None

    def test_remove_missing_key_is_noop(self, store: KeyValueStore) -> None:
        store.remove_item("never-set")
        assert store.keys() == []

    def test_clear(self, store: KeyValueStore) -> None:
        store.set_item("a", "1")
        store.set_item("b", "2")

        store.clear()

        assert store.keys() == []

    def test_rejects_non_string_values(self, store: KeyValueStore) -> None:
        with pytest.raises(TypeError):
            store.set_item("videos", [])  # type: ignore[arg-type]


class TestFileStorage:
    """File-backed store specifics."""

    @given(items=storage_maps)
    def test_persists_across_instances(self, items: dict[str, str]) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "nested" / "storage.json"
            writer = FileStorage(path)
            for key, value in items.items():
                writer.set_item(key, value)

            reader = FileStorage(path)

            assert sorted(reader.keys()) == sorted(items)
            for key, value in items.items():
                assert reader.get_item(key) == value

    def test_file_layout(self, tmp_path: Path) -> None:
        path = tmp_path / "storage.json"
        store = FileStorage(path)
        store.set_item("videos", json.dumps([{"id": "a"}]))
        store.set_item("isOpenedBefore", "true")

        data = json.loads(path.read_text(encoding="utf-8"))

        assert data == {"isOpenedBefore": "true", "videos": '[{"id": "a"}]'}
        assert not path.with_suffix(".json.tmp").exists()

    def test_corrupt_file_raises_value_error(self, tmp_path: Path) -> None:
        path = tmp_path / "storage.json"
        path.write_text("{oops", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid JSON"):
            FileStorage(path).get_item("videos")

    def test_non_object_file_raises_value_error(self, tmp_path: Path) -> None:
        path = tmp_path / "storage.json"
        path.write_text('["videos"]', encoding="utf-8")

        with pytest.raises(ValueError, match="JSON object of strings"):
            FileStorage(path).keys()

    def test_failed_write_keeps_previous_contents(self, tmp_path: Path) -> None:
        path = tmp_path / "storage.json"
        store = FileStorage(path)
        store.set_item("videos", "[]")

        with patch.object(Path, "replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError, match="disk full"):
                store.set_item("videos", '[{"id": "a"}]')

        assert store.get_item("videos") == "[]"
        assert not path.with_suffix(".json.tmp").exists()


class TestMemoryStorage:
    """In-memory store specifics."""

    def test_initial_items_are_copied(self) -> None:
        initial = {"videos": "[]"}
        store = MemoryStorage(initial)

        store.set_item("videos", '[{"id": "a"}]')

        assert initial == {"videos": "[]"}
