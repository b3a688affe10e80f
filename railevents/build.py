"""
Static site build.

Pipeline:
    fetch feed -> drop past events -> sort -> derive views -> write HTML + ICS

Output layout (inside out_dir):
    index.html
    this-month.html
    months.html
    calendar.html
    counties/<county>.html
    events.ics
    ics/<event>.ics
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Optional

from rich.console import Console

from railevents import render
from railevents.dates import start_date_of
from railevents.export_ics import export_events_to_ics
from railevents.fetch import EVENTS_URL, fetch_events
from railevents.fields import event_slug
from railevents.views import (
    MONTH_VIEW_YEAR,
    drop_past_events,
    events_for_county,
    filter_by_current_month,
    group_by_county,
    group_by_month,
    sort_ascending_by_start_date,
    sort_descending_by_start_date,
)

DEFAULT_OUT_DIR = Path("dist")

console = Console()


@dataclass
class BuildResult:
    events: int
    counties: int
    this_month: int
    calendar_entries: int
    written: list[Path] = field(default_factory=list)


def _write(path: Path, text: str, written: list[Path]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    written.append(path)


def build_site(
    events: list[dict[str, Any]],
    out_dir: str | Path = DEFAULT_OUT_DIR,
    today: Optional[date] = None,
    year: int = MONTH_VIEW_YEAR,
    now: Optional[datetime] = None,
) -> BuildResult:
    """
    Render every page and calendar file for the given raw events.
    """
    out = Path(out_dir)
    today = today or date.today()
    now = now or datetime.now(timezone.utc)
    written: list[Path] = []

    upcoming = sort_descending_by_start_date(drop_past_events(events, today))
    county_counts = group_by_county(upcoming)

    _write(out / "index.html", render.render_index(upcoming, county_counts, today), written)

    county_pages = render.county_page_names(list(county_counts))
    for county, page_name in county_pages.items():
        page = render.render_county_page(county, events_for_county(upcoming, county), today)
        _write(out / page_name, page, written)

    this_month = sort_ascending_by_start_date(filter_by_current_month(upcoming, today))
    _write(out / "this-month.html", render.render_this_month(this_month, today), written)

    # month and calendar views cover the whole target year, past events included
    _write(out / "months.html", render.render_months(group_by_month(events, year), year, today), written)
    _write(out / "calendar.html", render.render_calendar(events, year, today), written)

    calendar_entries = export_events_to_ics(upcoming, out / "events.ics", now=now)
    written.append(out / "events.ics")

    # one file per dated event, past ones too: months.html links to them
    for ev in events:
        if start_date_of(ev) is None:
            continue
        path = out / "ics" / f"{event_slug(ev)}.ics"
        export_events_to_ics([ev], path, now=now)
        written.append(path)

    return BuildResult(
        events=len(upcoming),
        counties=len(county_counts),
        this_month=len(this_month),
        calendar_entries=calendar_entries,
        written=written,
    )


def run_build(
    url: str = EVENTS_URL,
    out_dir: str | Path = DEFAULT_OUT_DIR,
    today: Optional[date] = None,
    year: int = MONTH_VIEW_YEAR,
) -> BuildResult:
    """
    Fetch the feed and build the site. FetchError propagates to the caller.
    """
    console.print("[bold]Building Railway Modelling Events website...[/]")
    console.print(f"Fetching events from {url}")
    events = fetch_events(url)
    console.print(f"[green]Fetched {len(events)} events[/]")

    result = build_site(events, out_dir, today=today, year=year)

    console.print(
        f"[green]Generated {len(result.written)} files in {out_dir}[/] "
        f"({result.events} upcoming events, {result.counties} counties, "
        f"{result.this_month} this month, {result.calendar_entries} in events.ics)"
    )
    return result
