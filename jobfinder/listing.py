"""Paginated listing state.

Page 1 replaces the collection (pull-to-refresh), later pages append to it
(infinite scroll). Only one fetch runs at a time; overlapping calls are
rejected rather than queued.
"""

from __future__ import annotations

import logging
from typing import List

from .errors import ListingFetchError
from .models import JobRecord
from .normalize import extract_jobs, parse_jobs
from .sources.base import ListingSource
from .status import Status

logger = logging.getLogger(__name__)

FETCH_FAILED = "Failed to fetch jobs. Please try again later."


class ListingFetcher:
    """Owns the fetched jobs and the current page counter."""

    def __init__(self, source: ListingSource, status: Status) -> None:
        self._source = source
        self._status = status
        self._jobs: List[JobRecord] = []
        self._page = 1
        self._in_flight = False

    @property
    def jobs(self) -> List[JobRecord]:
        return list(self._jobs)

    @property
    def current_page(self) -> int:
        return self._page

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    async def fetch_page(self, page: int = 1) -> bool:
        """Fetch `page` and merge it into the listing.

        Returns True when the page was applied, False when the call was
        rejected (another fetch in flight) or failed (error slot set).
        """
        if isinstance(page, bool) or not isinstance(page, int) or page < 1:
            raise ValueError(f"page must be a positive integer, got {page!r}")
        if self._in_flight:
            logger.info("Fetch of page %d ignored, another fetch is in flight", page)
            return False

        self._in_flight = True
        self._status.clear()
        try:
            with self._status.busy():
                try:
                    payload = await self._source.fetch_page(page)
                except ListingFetchError as exc:
                    logger.error("Error fetching jobs: %s", exc)
                    self._status.fail(FETCH_FAILED)
                    return False

                extraction = extract_jobs(payload)
                if not extraction.found:
                    logger.warning("Page %d response held no job array", page)
                jobs = parse_jobs(extraction.items)

                if page == 1:
                    self._jobs = jobs
                else:
                    self._jobs = self._jobs + jobs
                self._page = page
                logger.info("Page %d: %d jobs via %s (total %d)", page, len(jobs), extraction.shape, len(self._jobs))
                return True
        finally:
            self._in_flight = False

    async def load_more(self) -> bool:
        """Fetch the page after the current one; no-op while anything is loading."""
        if self._status.loading or self._in_flight:
            return False
        return await self.fetch_page(self._page + 1)
