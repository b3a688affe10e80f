"""
Date handling for event records.

Dates in the feed are calendar dates without time of day ("YYYY-MM-DD").
Display strings use fixed English names so output does not depend on the
process locale.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Optional

from railevents.fields import resolve_end_date, resolve_start_date

DATE_TBA = "Date TBA"

WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
MONTH_ABBREVS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    """
    Parse 'YYYY-MM-DD' into a date. Returns None for missing or invalid input.

    A trailing time part ('2026-02-07T10:00:00') is ignored.
    """
    if not value:
        return None
    try:
        return datetime.strptime(value.strip()[:10], "%Y-%m-%d").date()
    except ValueError:
        return None


def start_date_of(record: dict[str, Any]) -> Optional[date]:
    return parse_iso_date(resolve_start_date(record))


def end_date_of(record: dict[str, Any]) -> Optional[date]:
    """
    Inclusive last day of the event; falls back to the start date.
    """
    end = parse_iso_date(resolve_end_date(record))
    return end if end is not None else start_date_of(record)


def as_day(reference: date | datetime) -> date:
    if isinstance(reference, datetime):
        return reference.date()
    return reference


def ordinal_suffix(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def ordinal(day: int) -> str:
    return f"{day}{ordinal_suffix(day)}"


def format_single_date(d: date) -> str:
    # "Saturday, 7th Feb 2026"
    return f"{WEEKDAY_NAMES[d.weekday()]}, {ordinal(d.day)} {MONTH_ABBREVS[d.month - 1]} {d.year}"


def format_date_range(record: dict[str, Any]) -> str:
    """
    Human-readable date (range) for an event card.

    - no start date             -> "Date TBA"
    - single day                -> "Saturday, 7th Feb 2026"
    - same month                -> "7th–9th Feb 2026"
    - different months          -> "28th Jan – 2nd Feb 2026"
    - different years           -> "28th Dec 2025 – 2nd Jan 2026"
    """
    raw_start = resolve_start_date(record)
    if raw_start is None:
        return DATE_TBA

    start = parse_iso_date(raw_start)
    if start is None:
        return raw_start

    end = parse_iso_date(resolve_end_date(record))
    if end is None or end <= start:
        return format_single_date(start)

    start_month = MONTH_ABBREVS[start.month - 1]
    end_month = MONTH_ABBREVS[end.month - 1]

    if start.year != end.year:
        return f"{ordinal(start.day)} {start_month} {start.year} – {ordinal(end.day)} {end_month} {end.year}"
    if start.month != end.month:
        return f"{ordinal(start.day)} {start_month} – {ordinal(end.day)} {end_month} {end.year}"
    return f"{ordinal(start.day)}–{ordinal(end.day)} {end_month} {end.year}"


def expand_date_span(
    record: dict[str, Any], first: Optional[date] = None, last: Optional[date] = None
) -> list[date]:
    """
    Every calendar day the event covers, start to end inclusive.

    `first` and `last` clip the span to a window (e.g. one month grid), so a
    bad end date far in the future costs nothing outside that window.
    """
    start = start_date_of(record)
    if start is None:
        return []
    end = max(end_date_of(record) or start, start)
    if first is not None and start < first:
        start = first
    if last is not None and end > last:
        end = last
    if start > end:
        return []

    days: list[date] = []
    current = start
    while current <= end:
        days.append(current)
        current += timedelta(days=1)
    return days


def export_end_date(record: dict[str, Any]) -> Optional[date]:
    """
    Exclusive end date for all-day calendar exports (day after the last day).

    Not for display: format_date_range() shows the inclusive end.
    """
    start = start_date_of(record)
    if start is None:
        return None
    end = end_date_of(record) or start
    # end before start is treated as a single-day event
    return max(end, start) + timedelta(days=1)
