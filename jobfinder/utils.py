"""Utility helpers shared across the package."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Hashable, Iterable, List, Optional, TypeVar

T = TypeVar("T")


def is_number(value: Any) -> bool:
    """True for ints and floats (bools excluded, they are flags not codes)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a `Z` suffix."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def uniq_by_id(items: Iterable[T]) -> List[T]:
    """Deduplicate records on their `id` while preserving first-seen order."""
    seen: set[Hashable] = set()
    out: List[T] = []
    for it in items:
        key = getattr(it, "id", None)
        if key is None:
            continue
        if key in seen:
            continue
        seen.add(key)
        out.append(it)
    return out
