"""Normalization helpers.

This module contains the deterministic payload handling:
- listing envelope extraction (array or object with `results`/`jobs`/`data`)
- record validation into `JobRecord`
- resolution of numeric codes through `primary_details`
- the essential projection persisted for bookmarks
- small display helpers consumers render from

Keeping these centralized makes the fetcher and the bookmark store thin and
keeps the server's quirks testable in one place.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from .models import CODED_FIELDS, ESSENTIAL_FIELDS, JobRecord
from .utils import is_number

logger = logging.getLogger(__name__)

# Envelope keys probed, in priority order, when the body is an object.
ENVELOPE_KEYS = ("results", "jobs", "data")

NOT_MENTIONED = "Not Mentioned"

# Values the server uses for "no salary given".
SALARY_PLACEHOLDERS = {"v3:[]", "-"}

PRIMARY_DETAIL_LABELS = (
    ("Place", "Location"),
    ("Salary", "Salary"),
    ("Job_Type", "Type"),
    ("Experience", "Experience"),
    ("Fees_Charged", "Fees"),
    ("Qualification", "Qualification"),
)


@dataclass(frozen=True)
class Extraction:
    """Result of pulling the job array out of a listing response.

    `shape` names where the items came from: "array" for a bare list body,
    the envelope key otherwise, or "empty" when nothing usable was found.
    """

    shape: str
    items: List[Any] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.shape != "empty"


def extract_jobs(payload: Any) -> Extraction:
    """Extract the raw job items from a decoded listing response body."""
    if isinstance(payload, list):
        return Extraction("array", list(payload))

    if isinstance(payload, dict):
        for key in ENVELOPE_KEYS:
            value = payload.get(key)
            if isinstance(value, list):
                return Extraction(key, list(value))
            if value is not None:
                logger.debug("Ignoring non-list %r envelope field (%s)", key, type(value).__name__)

    return Extraction("empty")


def _mapping(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Any]:
    """A list as-is, a lone scalar or mapping wrapped, nothing for None."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def parse_jobs(items: Iterable[Any]) -> List[JobRecord]:
    """Validate raw items into `JobRecord`, skipping entries without a usable id.

    Only `id` is checked; odd shapes in optional fields are kept as sent.
    """
    out: List[JobRecord] = []
    for raw in items:
        if isinstance(raw, JobRecord):
            out.append(raw)
            continue
        if not isinstance(raw, dict):
            logger.warning("Skipping non-object job entry: %r", raw)
            continue
        try:
            out.append(JobRecord.model_validate(raw))
        except ValidationError as exc:
            logger.warning("Skipping job entry id=%r: %s", raw.get("id"), exc.errors()[0]["msg"])
    return out


def resolve_coded_field(job: JobRecord, name: str) -> Any:
    """Return the display value of `experience`, `job_type` or `qualification`.

    A numeric top-level value is a server-side code; when `primary_details`
    carries the matching capitalized key, that string wins. Anything else is
    returned as-is.
    """
    value = getattr(job, name)
    detail_key = CODED_FIELDS[name]
    details = _mapping(job.primary_details)
    if is_number(value) and details.get(detail_key):
        return details[detail_key]
    return value


def resolve_salary(job: JobRecord) -> Any:
    """`primary_details.Salary` when present, otherwise the top-level `salary`."""
    return _mapping(job.primary_details).get("Salary") or job.salary


def to_essential(job: JobRecord) -> Dict[str, Any]:
    """Project a job onto the whitelisted fields persisted for offline viewing."""
    payload = job.model_dump(mode="json", by_alias=True)
    projected: Dict[str, Any] = {}
    for name in ESSENTIAL_FIELDS:
        if name in CODED_FIELDS:
            value = resolve_coded_field(job, name)
        elif name == "salary":
            value = resolve_salary(job)
        else:
            value = payload.get(name)
        if value is not None:
            projected[name] = value
    return projected


def content_field(job: JobRecord, key: str) -> Any:
    """Look up `field_value` for `field_key == key` inside `contentV3.V3`."""
    entries = _mapping(job.content_v3).get("V3")
    if not isinstance(entries, list):
        return None
    for entry in entries:
        if isinstance(entry, dict) and entry.get("field_key") == key:
            return entry.get("field_value")
    return None


def _is_salary_placeholder(value: Any) -> bool:
    return isinstance(value, str) and value.strip().lower() in SALARY_PLACEHOLDERS


def salary_display(job: JobRecord) -> str:
    """Human-readable compensation line."""
    salary = _mapping(job.primary_details).get("Salary")
    if salary:
        return NOT_MENTIONED if salary == "-" else display_text(salary)

    if any(_is_salary_placeholder(v) for v in (job.salary, job.salary_min, job.salary_max)):
        return NOT_MENTIONED

    lo, hi = job.salary_min, job.salary_max
    if lo and hi:
        return f"₹{lo} - ₹{hi}"
    if lo:
        return f"₹{lo}+"
    if hi:
        return f"Up to ₹{hi}"

    if not job.fee_details or _is_salary_placeholder(job.fee_details):
        return NOT_MENTIONED
    return display_text(job.fee_details)


def contact_number(job: JobRecord) -> Optional[str]:
    """Number to call for a job; WhatsApp preferred over plain phone."""
    number = job.whatsapp_no or job.phone
    return str(number) if number else None


def _tag_value(tag: Any) -> Any:
    return tag.get("value") if isinstance(tag, dict) else tag


def tag_labels(job: JobRecord) -> List[str]:
    """Flatten `job_tags`, the openings count and plain `tags` into labels.

    `job_tags` entries are usually `{value, bg_color, text_color}` records but
    bare strings show up too; both render by their text.
    """
    labels = [str(v) for v in map(_tag_value, _as_list(job.job_tags)) if v]

    mentions_vacancy = any("Vacanc" in label for label in labels)
    count = job.openings_count
    if isinstance(count, str) and count.strip().isdigit():
        count = int(count)
    if not mentions_vacancy and is_number(count) and count > 0:
        labels.append(f"{count} {'Vacancy' if count == 1 else 'Vacancies'}")

    labels.extend(str(tag) for tag in _as_list(job.tags) if tag)
    return labels


def display_text(value: Any) -> str:
    """Render any payload value as text.

    `primary_details`-like mappings become labelled lines; other mappings and
    lists are flattened from their JSON form.
    """
    if value is None:
        return ""
    if isinstance(value, dict):
        if any(value.get(key) for key, _ in PRIMARY_DETAIL_LABELS):
            return "\n".join(f"{label}: {value[key]}" for key, label in PRIMARY_DETAIL_LABELS if value.get(key))
        flat = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
        for ch in '{}"':
            flat = flat.replace(ch, "")
        return flat.replace(",", ", ")
    if isinstance(value, list):
        return ", ".join(display_text(v) for v in value)
    return str(value)
