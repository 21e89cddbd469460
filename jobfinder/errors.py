"""Exception types raised by the lower layers.

`ListingFetcher` and `BookmarkStore` catch these at the operation boundary and
turn them into the advisory error string consumers read from `JobStore.error`.
"""

from __future__ import annotations


class JobFinderError(RuntimeError):
    """Base class for all jobfinder errors."""


class ListingFetchError(JobFinderError):
    """Raised when a listing page can't be fetched or parsed."""


class StorageError(JobFinderError):
    """Raised when the key-value store fails to read, write or delete a key."""


class BookmarkDataError(JobFinderError):
    """Raised for invalid bookmark input or a corrupted persisted bundle."""
