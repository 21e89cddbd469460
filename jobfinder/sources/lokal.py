"""Lokal jobs listing connector.

The endpoint is a plain paginated GET: `<base>/jobs?page=<n>`, no auth, JSON
body. The body shape varies between deployments (bare array, or an object
holding the array under `results`, `jobs` or `data`), so this connector only
returns the decoded body and leaves envelope handling to `normalize`.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from ..errors import ListingFetchError
from .base import ListingSource

logger = logging.getLogger(__name__)


class LokalSource(ListingSource):
    """Fetch job listing pages from the Lokal API."""

    name = "lokal"

    def __init__(
        self,
        base_url: str = "https://testapi.getlokalapp.com/common",
        timeout_s: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._timeout = timeout_s
        self._transport = transport

    @property
    def jobs_url(self) -> str:
        return f"{self.base_url}/jobs"

    async def fetch_page(self, page: int) -> Any:
        """GET one listing page and return its decoded JSON body."""
        async with httpx.AsyncClient(
            timeout=self._timeout, follow_redirects=True, transport=self._transport
        ) as client:
            try:
                resp = await client.get(self.jobs_url, params={"page": page})
                resp.raise_for_status()
            except httpx.HTTPStatusError as exc:
                raise ListingFetchError(
                    f"Listing page {page} returned HTTP {exc.response.status_code}"
                ) from exc
            except httpx.HTTPError as exc:
                raise ListingFetchError(f"Listing page {page} request failed: {exc}") from exc

        try:
            return resp.json()
        except ValueError as exc:
            raise ListingFetchError(f"Listing page {page} body is not valid JSON") from exc
