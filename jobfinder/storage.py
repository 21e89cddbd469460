"""Durable key-value storage for bookmark bundles.

The bookmark store only needs three operations on string values, so the
backends stay tiny. Every backend raises `StorageError` on I/O failure and
returns `None` for missing keys.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

from .errors import StorageError

logger = logging.getLogger(__name__)

SAFE_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStore(ABC):
    """Abstract async key-value store of strings."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    @abstractmethod
    async def remove(self, key: str) -> None:
        """Delete `key`; deleting a missing key is not an error."""
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    """Dict-backed store, used for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value

    async def remove(self, key: str) -> None:
        self.data.pop(key, None)


class FileStore(KeyValueStore):
    """One UTF-8 file per key under `root`."""

    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(root).expanduser()

    def _path(self, key: str) -> Path:
        if not SAFE_KEY_RE.match(key):
            raise StorageError(f"Invalid storage key: {key!r}")
        return self.root / f"{key}.json"

    async def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageError(f"Failed to read {key!r}: {exc}") from exc

    async def set(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp = path.with_suffix(".tmp")
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            tmp.write_text(value, encoding="utf-8")
            tmp.replace(path)
        except OSError as exc:
            raise StorageError(f"Failed to write {key!r}: {exc}") from exc
        logger.debug("Wrote %d chars to %s", len(value), path)

    async def remove(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(f"Failed to delete {key!r}: {exc}") from exc
