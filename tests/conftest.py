"""
Pytest configuration.

Provides fake HTTP transports, in-memory storage and recording side channels
so the store can be exercised without network or disk.
"""

import json
import sys
from pathlib import Path

import httpx
import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from jobfinder.errors import StorageError
from jobfinder.feedback import Haptics, Notifier
from jobfinder.sources.lokal import LokalSource
from jobfinder.storage import MemoryStore
from jobfinder.store import JobStore

BASE_URL = "https://jobs.example.test/common"


class RecordingHaptics(Haptics):
    def __init__(self, fail: bool = False):
        self.calls = []
        self.fail = fail

    def impact(self):
        self.calls.append("impact")
        if self.fail:
            raise RuntimeError("no haptic engine")

    def notification(self):
        self.calls.append("notification")
        if self.fail:
            raise RuntimeError("no haptic engine")


class RecordingNotifier(Notifier):
    def __init__(self, answer: bool = True):
        self.messages = []
        self.prompts = []
        self.answer = answer

    def notify(self, title, message):
        self.messages.append((title, message))

    def confirm(self, title, message, action):
        self.prompts.append((title, action))
        return self.answer


class FailingStore(MemoryStore):
    """MemoryStore whose operations can be made to fail per key."""

    def __init__(self, initial=None, fail_set=(), fail_remove=(), ignore_remove=False):
        super().__init__(initial)
        self.fail_set = set(fail_set)
        self.fail_remove = set(fail_remove)
        self.ignore_remove = ignore_remove
        self.removed = []

    async def set(self, key, value):
        if key in self.fail_set:
            raise StorageError(f"disk full writing {key}")
        await super().set(key, value)

    async def remove(self, key):
        self.removed.append(key)
        if key in self.fail_remove:
            raise StorageError(f"cannot delete {key}")
        if not self.ignore_remove:
            await super().remove(key)


def json_pages(pages, status_code=200):
    """Build an httpx handler serving `pages[n]` for `?page=n`."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        page = int(request.url.params["page"])
        seen.append(page)
        body = pages.get(page, [])
        if isinstance(body, httpx.Response):
            return body
        return httpx.Response(status_code, json=body)

    handler.seen = seen
    return handler


def make_source(handler) -> LokalSource:
    return LokalSource(base_url=BASE_URL, transport=httpx.MockTransport(handler))


def bundle(jobs, timestamp="2024-01-01T00:00:00.000Z"):
    return json.dumps({"timestamp": timestamp, "jobs": jobs})


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def haptics():
    return RecordingHaptics()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def make_store(haptics, notifier):
    """Factory for a JobStore over fake pages and a given storage backend."""

    def factory(pages=None, storage=None, **options):
        handler = json_pages(pages or {})
        store = JobStore(
            make_source(handler),
            storage if storage is not None else MemoryStore(),
            haptics=haptics,
            notifier=notifier,
            **options,
        )
        store.handler = handler
        return store

    return factory
