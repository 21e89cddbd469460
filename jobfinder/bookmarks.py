"""Bookmark set with durable, self-healing persistence.

Every mutation writes the whole set, reduced to its essential projection, to
a primary key and to a backup key. A corrupted primary entry found at startup
is deleted and the load retried once; the backup is only consulted on demand
through `verify_and_repair`.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import ValidationError

from .errors import BookmarkDataError, StorageError
from .feedback import Haptics, LogNotifier, NoHaptics, Notifier
from .models import BookmarkBundle, BookmarkState, JobId, JobRecord
from .normalize import parse_jobs, to_essential
from .status import Status
from .storage import KeyValueStore
from .utils import uniq_by_id, utc_timestamp

logger = logging.getLogger(__name__)

PRIMARY_KEY = "jobBookmarks"
BACKUP_KEY = "jobBookmarks_backup"

# First read plus one retry after discarding corrupted data.
MAX_LOAD_ATTEMPTS = 2

LOAD_FAILED = "Failed to load saved jobs"
SAVE_FAILED = "Failed to save job"
CLEAR_FAILED = "Failed to clear bookmarks"

JobLike = Union[JobRecord, Dict[str, Any]]


def _coerce(job: JobLike) -> JobRecord:
    if isinstance(job, JobRecord):
        return job
    if isinstance(job, dict):
        try:
            return JobRecord.model_validate(job)
        except ValidationError as exc:
            raise BookmarkDataError(f"Invalid job record: {exc.errors()[0]['msg']}") from exc
    raise BookmarkDataError(f"Invalid job record type: {type(job).__name__}")


def parse_bundle(raw: str) -> List[JobRecord]:
    """Decode a persisted bundle.

    Raises `BookmarkDataError` only when the JSON or the `{timestamp, jobs}`
    envelope is unreadable. Individual entries that fail validation are
    skipped and the rest of the set survives.
    """
    try:
        bundle = BookmarkBundle.model_validate_json(raw)
    except ValidationError as exc:
        raise BookmarkDataError(f"Corrupted bookmark bundle ({exc.error_count()} errors)") from exc
    jobs = parse_jobs(bundle.jobs)
    if len(jobs) < len(bundle.jobs):
        logger.warning("Dropped %d unreadable bookmark entries", len(bundle.jobs) - len(jobs))
    return uniq_by_id(jobs)


def build_bundle(jobs: Sequence[JobRecord]) -> str:
    """Serialize jobs into the persisted `{timestamp, jobs}` form."""
    return json.dumps(
        {"timestamp": utc_timestamp(), "jobs": [to_essential(j) for j in jobs]},
        ensure_ascii=False,
    )


class BookmarkStore:
    """Owns the bookmark set and its primary/backup persistence."""

    def __init__(
        self,
        storage: KeyValueStore,
        status: Status,
        haptics: Optional[Haptics] = None,
        notifier: Optional[Notifier] = None,
        primary_key: str = PRIMARY_KEY,
        backup_key: str = BACKUP_KEY,
        clear_backup: bool = False,
    ) -> None:
        self._storage = storage
        self._status = status
        self._haptics = haptics or NoHaptics()
        self._notifier = notifier or LogNotifier()
        self.primary_key = primary_key
        self.backup_key = backup_key
        self._clear_backup = clear_backup
        self._bookmarks: List[JobRecord] = []
        self._state = BookmarkState.UNLOADED

    @property
    def bookmarks(self) -> List[JobRecord]:
        return list(self._bookmarks)

    @property
    def state(self) -> BookmarkState:
        return self._state

    @property
    def loaded(self) -> bool:
        """Membership answers are authoritative only once this is True."""
        return self._state is BookmarkState.LOADED

    def is_bookmarked(self, job_id: JobId) -> bool:
        return any(job.id == job_id for job in self._bookmarks)

    # ---- side channels ---------------------------------------------------------

    def _haptic(self, kind: str) -> None:
        try:
            getattr(self._haptics, kind)()
        except Exception as exc:
            logger.debug("Haptic feedback failed: %s", exc)

    def _notify(self, title: str, message: str) -> None:
        try:
            self._notifier.notify(title, message)
        except Exception as exc:
            logger.debug("Notification failed: %s", exc)

    # ---- operations ------------------------------------------------------------

    async def load(self) -> List[JobRecord]:
        """Initial load from the primary key, with one delete-and-retry on corruption."""
        self._state = BookmarkState.LOADING
        loaded: Optional[List[JobRecord]] = None
        with self._status.busy():
            for attempt in range(1, MAX_LOAD_ATTEMPTS + 1):
                try:
                    raw = await self._storage.get(self.primary_key)
                    loaded = parse_bundle(raw) if raw else []
                    break
                except (StorageError, BookmarkDataError) as exc:
                    logger.error("Error loading bookmarks (attempt %d): %s", attempt, exc)
                    if attempt >= MAX_LOAD_ATTEMPTS:
                        break
                    logger.info("Attempting to recover bookmarks data...")
                    try:
                        await self._storage.remove(self.primary_key)
                    except StorageError as clear_exc:
                        logger.error("Failed to clear corrupted bookmarks: %s", clear_exc)
                        break

            if loaded is None:
                self._status.fail(LOAD_FAILED)
                loaded = []
            self._bookmarks = loaded
        self._state = BookmarkState.LOADED
        logger.info("Loaded %d bookmarks", len(self._bookmarks))
        return self.bookmarks

    async def toggle(self, job: JobLike) -> bool:
        """Add or remove `job`; returns whether it is bookmarked afterwards."""
        self._status.clear()
        try:
            record = _coerce(job)
        except BookmarkDataError as exc:
            logger.error("Error toggling bookmark: %s", exc)
            self._status.fail(SAVE_FAILED)
            return False

        self._haptic("impact")
        if self.is_bookmarked(record.id):
            self._bookmarks = [b for b in self._bookmarks if b.id != record.id]
            added = False
        else:
            self._bookmarks = self._bookmarks + [record]
            added = True
            self._notify("Job Bookmarked", "This job is now available for offline viewing")

        await self.save(self._bookmarks)
        return added

    async def save(self, jobs: Sequence[JobLike]) -> bool:
        """Persist `jobs` to the primary and backup keys.

        Both writes are attempted even if the first one fails. The in-memory
        set is never rolled back; a failure only sets the error slot.
        """
        try:
            if not isinstance(jobs, (list, tuple)):
                raise BookmarkDataError("Invalid bookmark data format")
            raw = build_bundle([_coerce(j) for j in jobs])
        except BookmarkDataError as exc:
            self._save_failed(exc)
            return False

        failures: List[StorageError] = []
        for key in (self.primary_key, self.backup_key):
            try:
                await self._storage.set(key, raw)
            except StorageError as exc:
                failures.append(exc)
        if failures:
            self._save_failed(*failures)
            return False
        return True

    def _save_failed(self, *errors: Exception) -> None:
        for exc in errors:
            logger.error("Error saving bookmarks: %s", exc)
        self._status.fail(SAVE_FAILED)
        self._notify("Storage Error", "Failed to save job to local storage. Please try again.")

    async def clear(self) -> bool:
        """Remove every bookmark after the user confirms; returns True if cleared."""
        try:
            confirmed = self._notifier.confirm(
                "Clear All Bookmarks",
                "Are you sure you want to remove all bookmarked jobs?",
                "Clear All",
            )
        except Exception as exc:
            logger.error("Confirmation prompt failed: %s", exc)
            confirmed = False
        if not confirmed:
            return False

        self._status.clear()
        try:
            await self._storage.remove(self.primary_key)
            if self._clear_backup:
                await self._storage.remove(self.backup_key)
        except StorageError as exc:
            logger.error("Error clearing bookmarks: %s", exc)
            self._status.fail(CLEAR_FAILED)
            return False

        if not self._clear_backup:
            logger.warning(
                "Backup key %r still holds the cleared bookmarks; verify_and_repair will restore them",
                self.backup_key,
            )
        self._bookmarks = []
        self._haptic("notification")
        return True

    async def verify_and_repair(self) -> List[JobRecord]:
        """Restore the primary key from the backup when the primary is missing.

        Returns the restored set (which also becomes the in-memory set), the
        parsed primary when it exists, or an empty list.
        """
        try:
            primary = await self._storage.get(self.primary_key)
            backup = await self._storage.get(self.backup_key)

            if not primary and backup:
                restored = parse_bundle(backup)
                await self._storage.set(self.primary_key, backup)
                self._bookmarks = restored
                logger.info("Restored %d bookmarks from backup", len(restored))
                return list(restored)

            return parse_bundle(primary) if primary else []
        except (StorageError, BookmarkDataError) as exc:
            logger.error("Error verifying bookmarks storage: %s", exc)
            return []
