"""Shared loading/error surface read by consumers."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional


class Status:
    """One loading flag and one advisory error slot for the whole store.

    `loading` stays true while any operation is inside `busy()`, so an
    overlapping bookmark load and page fetch don't clear each other's flag.
    """

    def __init__(self) -> None:
        self.error: Optional[str] = None
        self._active = 0

    @property
    def loading(self) -> bool:
        return self._active > 0

    @contextmanager
    def busy(self) -> Iterator[None]:
        self._active += 1
        try:
            yield
        finally:
            self._active -= 1

    def fail(self, message: str) -> None:
        self.error = message

    def clear(self) -> None:
        self.error = None
