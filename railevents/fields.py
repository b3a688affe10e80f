"""
Field alias resolution for raw event records.

The upstream feed has renamed several fields over time, so one semantic
value (e.g. the start date) can live under different keys. Each semantic
field has exactly one entry in FIELD_ALIASES, listing its keys in priority
order. All lookups go through resolve_field().
"""

from __future__ import annotations

import hashlib
import re
from typing import Any, Optional

NOT_SPECIFIED = "Not Specified"

FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "start_date": ("startDate", "start_date", "date"),
    "end_date": ("endDate", "end_date"),
    "organiser": ("organiser", "organizer"),
    "county": ("county",),
    "layout_count": ("layouts", "layout_count", "layoutCount"),
    "trader_count": ("traders", "trader_count", "traderCount"),
}


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


def resolve_field(record: dict[str, Any], field: str) -> Any:
    """
    Return the first present value among the aliases of `field`, or None.
    """
    for key in FIELD_ALIASES[field]:
        value = record.get(key)
        if _is_present(value):
            return value
    return None


def _resolve_text(record: dict[str, Any], field: str) -> Optional[str]:
    value = resolve_field(record, field)
    return None if value is None else str(value).strip()


def resolve_start_date(record: dict[str, Any]) -> Optional[str]:
    return _resolve_text(record, "start_date")


def resolve_end_date(record: dict[str, Any], fallback_to_start: bool = False) -> Optional[str]:
    """
    Return the explicit end date, or the start date when `fallback_to_start`
    is set and no end alias is present (a single-day event).
    """
    end = _resolve_text(record, "end_date")
    if end is None and fallback_to_start:
        return resolve_start_date(record)
    return end


def resolve_organiser(record: dict[str, Any]) -> Optional[str]:
    return _resolve_text(record, "organiser")


def resolve_county(record: dict[str, Any]) -> str:
    return _resolve_text(record, "county") or NOT_SPECIFIED


def _to_count(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float)):
            return int(value)
        return int(float(str(value).strip()))
    except (ValueError, OverflowError):
        return None


def resolve_layout_count(record: dict[str, Any]) -> Optional[int]:
    return _to_count(resolve_field(record, "layout_count"))


def resolve_trader_count(record: dict[str, Any]) -> Optional[int]:
    return _to_count(resolve_field(record, "trader_count"))


def text_field(record: dict[str, Any], key: str) -> str:
    """
    Read a plain (non-aliased) field as stripped text; missing -> "".
    """
    value = record.get(key)
    return "" if value is None else str(value).strip()


def location_text(record: dict[str, Any]) -> str:
    """
    Venue and location joined for display and calendar export.
    """
    parts: list[str] = []
    for key in ("venue", "location"):
        part = text_field(record, key)
        if part and part not in parts:
            parts.append(part)
    return ", ".join(parts)


def slugify(value: str) -> str:
    value = re.sub(r"[^a-zA-Z0-9]+", "-", value.strip().lower()).strip("-")
    return value or "event"


IDENTITY_KEYS = ("name", "venue", "location")


def _identity_hash(record: dict[str, Any]) -> str:
    seed = "|".join(
        [
            *(text_field(record, key).lower() for key in IDENTITY_KEYS),
            resolve_start_date(record) or "",
            resolve_end_date(record) or "",
            resolve_county(record).lower(),
        ]
    )
    return hashlib.sha256(seed.encode("utf-8")).hexdigest()[:8]


def event_slug(record: dict[str, Any]) -> str:
    """
    Stable file name / UID stem: "<start date>-<name>-<hash>".

    The hash covers name, dates, county, venue and location, so two shows
    with the same name on the same day in different places do not collide.
    Description edits do not change it.
    """
    name = slugify(text_field(record, "name"))
    start = resolve_start_date(record)
    stem = f"{slugify(start)}-{name}" if start else name
    return f"{stem}-{_identity_hash(record)}"
