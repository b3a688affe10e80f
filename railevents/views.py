"""
Derived views over the event list.

Every function returns a new list/dict; input records are never mutated.
Records without a resolvable start date are left out of date-ordered and
date-filtered views, but not out of plain listings such as events_for_county().
"""

from __future__ import annotations

import calendar
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from railevents.dates import as_day, end_date_of, expand_date_span, start_date_of
from railevents.fields import NOT_SPECIFIED, resolve_county, resolve_start_date

# Target year of the month-by-month page. Distinct from "today": the site
# lists one fixed season regardless of when it is built.
MONTH_VIEW_YEAR = 2026


@dataclass
class CalendarDay:
    """
    One cell of a month grid.
    """

    day: date
    in_month: bool
    events: list[dict[str, Any]] = field(default_factory=list)


def _start_key(record: dict[str, Any]) -> str:
    # ISO dates sort lexicographically; missing dates compare as ""
    return resolve_start_date(record) or ""


def sort_descending_by_start_date(records: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Most recent first. Records without a start date end up last.
    """
    return sorted(records, key=_start_key, reverse=True)


def sort_ascending_by_start_date(records: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return sorted(records, key=_start_key)


def is_upcoming(record: dict[str, Any], reference: date | datetime) -> bool:
    """
    True if the event has not finished before the reference day.
    """
    last_day = end_date_of(record)
    if last_day is None:
        return False
    return last_day >= as_day(reference)


def drop_past_events(records: list[dict[str, Any]], today: date | datetime) -> list[dict[str, Any]]:
    """
    Remove events that have finished. Undated records are kept ("Date TBA").
    """
    return [r for r in records if start_date_of(r) is None or is_upcoming(r, today)]


def group_by_county(records: list[dict[str, Any]]) -> dict[str, int]:
    """
    Count events per county: alphabetical, with "Not Specified" last.
    """
    counts: dict[str, int] = defaultdict(int)
    for r in records:
        counts[resolve_county(r)] += 1

    def key(name: str) -> tuple[bool, str, str]:
        return (name == NOT_SPECIFIED, name.casefold(), name)

    return {name: counts[name] for name in sorted(counts, key=key)}


def events_for_county(records: list[dict[str, Any]], county: str) -> list[dict[str, Any]]:
    return [r for r in records if resolve_county(r) == county]


def group_by_month(records: list[dict[str, Any]], year: int) -> dict[int, list[dict[str, Any]]]:
    """
    Bucket events of `year` by month index (0 = January).

    All twelve buckets are present. Events of other years, or without a
    start date, are dropped.
    """
    buckets: dict[int, list[dict[str, Any]]] = {m: [] for m in range(12)}
    for r in sort_ascending_by_start_date(records):
        start = start_date_of(r)
        if start is None or start.year != year:
            continue
        buckets[start.month - 1].append(r)
    return buckets


def filter_by_current_month(records: list[dict[str, Any]], today: date | datetime) -> list[dict[str, Any]]:
    ref = as_day(today)
    out: list[dict[str, Any]] = []
    for r in records:
        start = start_date_of(r)
        if start is not None and start.year == ref.year and start.month == ref.month:
            out.append(r)
    return out


def month_grid(records: list[dict[str, Any]], year: int, month: int) -> list[list[CalendarDay]]:
    """
    Weeks (Monday first) of one month, with every event placed on each day
    it spans. `month` is 1-based.
    """
    grid = calendar.Calendar(firstweekday=0).monthdatescalendar(year, month)
    first, last = grid[0][0], grid[-1][-1]

    by_day: dict[date, list[dict[str, Any]]] = defaultdict(list)
    for r in sort_ascending_by_start_date(records):
        for d in expand_date_span(r, first, last):
            by_day[d].append(r)

    weeks: list[list[CalendarDay]] = []
    for week in grid:
        weeks.append([CalendarDay(day=d, in_month=d.month == month, events=list(by_day.get(d, []))) for d in week])
    return weeks
