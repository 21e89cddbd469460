"""Base classes for listing sources."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ListingSource(ABC):
    """Abstract base class for a paginated listing endpoint."""

    name: str

    @abstractmethod
    async def fetch_page(self, page: int) -> Any:
        """Fetch one page and return the decoded JSON body.

        Raises `ListingFetchError` on transport failure, non-2xx status or an
        undecodable body.
        """
        raise NotImplementedError
