"""Consumer-facing store.

`JobStore` is the single object a UI layer holds. It exposes read-only state
(`jobs`, `bookmarks`, `loading`, `error`) and the operations that change it;
nothing outside funnels writes any other way.
"""

from __future__ import annotations

import asyncio
from typing import List, Optional

from .bookmarks import BookmarkStore, JobLike
from .config import Settings
from .feedback import Haptics, Notifier
from .listing import ListingFetcher
from .models import JobId, JobRecord
from .sources.base import ListingSource
from .sources.lokal import LokalSource
from .status import Status
from .storage import FileStore, KeyValueStore


class JobStore:
    """Listing fetcher and bookmark store sharing one status surface."""

    def __init__(
        self,
        source: ListingSource,
        storage: KeyValueStore,
        haptics: Optional[Haptics] = None,
        notifier: Optional[Notifier] = None,
        **bookmark_options,
    ) -> None:
        self.status = Status()
        self.listing = ListingFetcher(source, self.status)
        self.saved = BookmarkStore(storage, self.status, haptics=haptics, notifier=notifier, **bookmark_options)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        haptics: Optional[Haptics] = None,
        notifier: Optional[Notifier] = None,
    ) -> "JobStore":
        return cls(
            LokalSource(base_url=settings.base_url, timeout_s=settings.timeout_s),
            FileStore(settings.storage_dir),
            haptics=haptics,
            notifier=notifier,
            primary_key=settings.primary_key,
            backup_key=settings.backup_key,
            clear_backup=settings.clear_backup,
        )

    # ---- state -----------------------------------------------------------------

    @property
    def jobs(self) -> List[JobRecord]:
        return self.listing.jobs

    @property
    def bookmarks(self) -> List[JobRecord]:
        return self.saved.bookmarks

    @property
    def current_page(self) -> int:
        return self.listing.current_page

    @property
    def loading(self) -> bool:
        return self.status.loading

    @property
    def error(self) -> Optional[str]:
        return self.status.error

    # ---- operations ------------------------------------------------------------

    async def start(self) -> None:
        """Load saved bookmarks and the first listing page concurrently."""
        await asyncio.gather(self.load_bookmarks(), self.fetch_jobs(1))

    async def fetch_jobs(self, page: int = 1) -> bool:
        return await self.listing.fetch_page(page)

    async def load_more_jobs(self) -> bool:
        return await self.listing.load_more()

    async def load_bookmarks(self) -> List[JobRecord]:
        return await self.saved.load()

    def is_bookmarked(self, job_id: JobId) -> bool:
        return self.saved.is_bookmarked(job_id)

    async def toggle_bookmark(self, job: JobLike) -> bool:
        return await self.saved.toggle(job)

    async def clear_bookmarks(self) -> bool:
        return await self.saved.clear()

    async def verify_and_repair_bookmarks(self) -> List[JobRecord]:
        return await self.saved.verify_and_repair()
