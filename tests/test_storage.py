"""
Unit tests for the key-value storage backends.
"""

import asyncio

import pytest

from jobfinder.errors import StorageError
from jobfinder.storage import FileStore, MemoryStore


class TestMemoryStore:
    def test_get_set_remove(self):
        store = MemoryStore({"a": "1"})
        assert asyncio.run(store.get("a")) == "1"
        asyncio.run(store.set("b", "2"))
        asyncio.run(store.remove("a"))
        asyncio.run(store.remove("missing"))
        assert store.data == {"b": "2"}


class TestFileStore:
    def test_missing_key(self, tmp_path):
        assert asyncio.run(FileStore(tmp_path / "nested").get("jobBookmarks")) is None

    def test_write_creates_directory(self, tmp_path):
        root = tmp_path / "nested" / "dir"
        store = FileStore(root)
        asyncio.run(store.set("jobBookmarks", '{"jobs": []}'))
        assert (root / "jobBookmarks.json").read_text(encoding="utf-8") == '{"jobs": []}'
        assert asyncio.run(store.get("jobBookmarks")) == '{"jobs": []}'
        assert not list(root.glob("*.tmp"))

    def test_remove_is_idempotent(self, tmp_path):
        store = FileStore(tmp_path)
        asyncio.run(store.set("k", "v"))
        asyncio.run(store.remove("k"))
        asyncio.run(store.remove("k"))
        assert asyncio.run(store.get("k")) is None

    def test_rejects_path_like_keys(self, tmp_path):
        with pytest.raises(StorageError):
            asyncio.run(FileStore(tmp_path).get("../escape"))

    def test_unreadable_file_raises(self, tmp_path):
        (tmp_path / "k.json").write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(StorageError):
            asyncio.run(FileStore(tmp_path).get("k"))

    def test_write_failure_raises(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory", encoding="utf-8")
        with pytest.raises(StorageError):
            asyncio.run(FileStore(blocker).set("k", "v"))
