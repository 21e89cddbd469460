"""Data models for the job listing client.

Upstream listing payloads are inconsistent: most fields may be missing, some
arrive as numeric codes instead of display strings, and new keys show up
without notice. `JobRecord` therefore only requires `id` and keeps any extra
keys it doesn't know about, so a bookmarked job can be re-projected later
without re-fetching.

This file uses Pydantic v2.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

JobId = Union[int, str]

# Fields kept in a bookmark's persisted projection, in wire order.
ESSENTIAL_FIELDS = (
    "id",
    "title",
    "company_name",
    "salary",
    "salary_min",
    "salary_max",
    "experience",
    "locality",
    "city_location",
    "job_type",
    "qualification",
    "primary_details",
    "contentV3",
    "other_details",
    "whatsapp_no",
    "phone",
    "job_tags",
    "openings_count",
    "tags",
    "created_on",
    "updated_on",
    "expire_on",
    "views",
)

# Top-level fields that may hold a numeric code, mapped to the
# `primary_details` key carrying their display string.
CODED_FIELDS = {
    "experience": "Experience",
    "job_type": "Job_Type",
    "qualification": "Qualification",
}


class JobRecord(BaseModel):
    """One listing entry as received from the listing endpoint.

    `id` is the only equality key and the only validated field. Everything
    else is kept exactly as the server sent it: fields go missing, change
    type between deployments, or arrive as a list where a mapping was
    expected, and none of that should cost us the job. Readers in
    `normalize` check shapes before using a value.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: JobId

    title: Optional[Any] = None
    company_name: Optional[Any] = None
    locality: Optional[Any] = None
    city_location: Optional[Any] = None

    salary: Optional[Any] = None
    salary_min: Optional[Any] = None
    salary_max: Optional[Any] = None
    fee_details: Optional[Any] = None

    experience: Optional[Any] = None
    job_type: Optional[Any] = None
    qualification: Optional[Any] = None

    primary_details: Optional[Any] = None
    content_v3: Optional[Any] = Field(default=None, alias="contentV3")

    job_tags: Optional[Any] = None
    tags: Optional[Any] = None
    openings_count: Optional[Any] = None
    other_details: Optional[Any] = None
    whatsapp_no: Optional[Any] = None
    phone: Optional[Any] = None
    created_on: Optional[Any] = None
    updated_on: Optional[Any] = None
    expire_on: Optional[Any] = None
    views: Optional[Any] = None

    def to_payload(self) -> Dict[str, Any]:
        """Wire-shaped dict (server key names, unset fields omitted, extras kept)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class BookmarkBundle(BaseModel):
    """Persisted value under the primary and backup bookmark keys."""

    timestamp: str
    # Entries are validated one by one so a single bad job doesn't sink the set.
    jobs: List[Any] = Field(default_factory=list)


class BookmarkState(str, Enum):
    """Lifecycle of the bookmark set."""

    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"
