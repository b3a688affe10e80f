"""
HTML rendering.

Pages are plain f-string templates. Every value taken from the feed goes
through html.escape(). `root` is the relative path back to the site root
("" for top-level pages, "../" for pages in sub-directories).
"""

from __future__ import annotations

from datetime import date
from html import escape
from typing import Any, Optional

from railevents.dates import MONTH_NAMES, format_date_range
from railevents.fields import (
    event_slug,
    location_text,
    resolve_county,
    resolve_layout_count,
    resolve_organiser,
    resolve_trader_count,
    slugify,
    text_field,
)
from railevents.links import google_calendar_url, outlook_calendar_url
from railevents.views import CalendarDay, month_grid

SITE_TITLE = "Railway Modelling Events"

STYLE = """
* { box-sizing: border-box; }
body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
       line-height: 1.6; color: #333; background: #f5f5f5; margin: 0; padding: 20px; }
.container { max-width: 1200px; margin: 0 auto; }
header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: white;
         padding: 30px; border-radius: 12px; margin-bottom: 20px; }
header a { color: white; }
nav a { margin-right: 16px; }
.events-grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(320px, 1fr)); gap: 20px; }
.event-card { background: white; border-radius: 10px; padding: 20px; box-shadow: 0 2px 8px rgba(0,0,0,.1); }
.event-name { color: #667eea; margin-top: 0; }
.event-details div { padding: 4px 0; border-bottom: 1px solid #f0f0f0; }
.event-description { color: #666; background: #f9f9f9; padding: 10px; border-radius: 6px; }
.add-to-calendar a { margin-right: 10px; font-size: .9rem; }
.filter-buttons a { display: inline-block; margin: 4px; padding: 6px 14px; border-radius: 20px;
                    background: white; border: 2px solid #e0e0e0; text-decoration: none; color: #555; }
table.calendar { width: 100%; border-collapse: collapse; background: white; margin-bottom: 30px; }
table.calendar td { vertical-align: top; border: 1px solid #e0e0e0; height: 80px; width: 14%; padding: 4px; }
table.calendar td.outside { background: #f0f0f0; color: #aaa; }
.calendar-event { font-size: .8rem; background: #eef; border-radius: 4px; margin: 2px 0; padding: 1px 4px; }
footer { text-align: center; padding: 20px; color: #666; font-size: .9rem; }
"""


def _page(title: str, heading: str, body: str, root: str, generated_on: date) -> str:
    nav = (
        f'<nav><a href="{root}index.html">All events</a>'
        f'<a href="{root}this-month.html">This month</a>'
        f'<a href="{root}months.html">By month</a>'
        f'<a href="{root}calendar.html">Calendar</a>'
        f'<a href="{root}events.ics">Subscribe (.ics)</a></nav>'
    )
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{escape(title)}</title>
  <style>{STYLE}</style>
</head>
<body>
  <div class="container">
    <header>
      <h1>{escape(heading)}</h1>
      {nav}
    </header>
    <main>
{body}
    </main>
    <footer>
      <p>Built for the railway modelling community</p>
      <p>Last updated: {generated_on.day} {MONTH_NAMES[generated_on.month - 1]} {generated_on.year}</p>
    </footer>
  </div>
</body>
</html>
"""


def _detail(css: str, label: str, value: Optional[str]) -> str:
    if not value:
        return ""
    return f'<div class="{css}"><strong>{label}:</strong> {escape(value)}</div>'


def render_event_card(record: dict[str, Any], root: str = "") -> str:
    county = resolve_county(record)
    layouts = resolve_layout_count(record)
    traders = resolve_trader_count(record)

    details = "".join(
        [
            _detail("event-date", "Date", format_date_range(record)),
            _detail("event-county", "County", county),
            _detail("event-location", "Location", location_text(record)),
            _detail("event-organiser", "Organiser", resolve_organiser(record)),
            _detail("event-layouts", "Layouts", None if layouts is None else str(layouts)),
            _detail("event-traders", "Traders", None if traders is None else str(traders)),
        ]
    )

    description = text_field(record, "description")
    url = text_field(record, "url")

    parts = [
        f'<div class="event-card" data-county="{escape(county)}">',
        f'<h2 class="event-name">{escape(text_field(record, "name"))}</h2>',
        f'<div class="event-details">{details}</div>',
    ]
    if description:
        parts.append(f'<div class="event-description">{escape(description)}</div>')
    if url:
        parts.append(
            f'<div class="event-link"><a href="{escape(url)}" target="_blank" '
            f'rel="noopener noreferrer">More Information</a></div>'
        )

    google = google_calendar_url(record)
    outlook = outlook_calendar_url(record)
    if google and outlook:
        parts.append(
            '<div class="add-to-calendar">'
            f'<a class="google" href="{escape(google)}" target="_blank" rel="noopener noreferrer">Google</a>'
            f'<a class="outlook" href="{escape(outlook)}" target="_blank" rel="noopener noreferrer">Outlook</a>'
            f'<a class="ics" href="{root}ics/{event_slug(record)}.ics">iCal</a>'
            "</div>"
        )
    parts.append("</div>")
    return "".join(parts)


def _event_grid(events: list[dict[str, Any]], root: str) -> str:
    if not events:
        return '<p class="no-events">No events listed.</p>'
    cards = "\n".join(render_event_card(ev, root) for ev in events)
    return f'<div class="events-grid">\n{cards}\n</div>'


def county_page_names(counties: list[str]) -> dict[str, str]:
    """
    Page path per county. Counties that slugify alike ("Kent", "KENT") get
    numbered suffixes so every county keeps its own page.
    """
    names: dict[str, str] = {}
    used: set[str] = set()
    for county in counties:
        base = slugify(county)
        slug = base
        n = 2
        while slug in used:
            slug = f"{base}-{n}"
            n += 1
        used.add(slug)
        names[county] = f"counties/{slug}.html"
    return names


def render_index(events: list[dict[str, Any]], county_counts: dict[str, int], generated_on: date) -> str:
    pages = county_page_names(list(county_counts))
    buttons = [f'<a class="filter-btn active" href="index.html">All Counties ({len(events)})</a>']
    for county, count in county_counts.items():
        buttons.append(
            f'<a class="filter-btn" href="{pages[county]}">{escape(county)} ({count})</a>'
        )
    body = (
        f'<p class="events-count">{len(events)} Events Listed</p>\n'
        f'<div class="filter-section"><h3>Filter by County</h3>'
        f'<div class="filter-buttons">{"".join(buttons)}</div></div>\n'
        f"{_event_grid(events, '')}"
    )
    return _page(SITE_TITLE, SITE_TITLE, body, "", generated_on)


def render_county_page(county: str, events: list[dict[str, Any]], generated_on: date) -> str:
    body = f'<p class="events-count">{len(events)} events in {escape(county)}</p>\n{_event_grid(events, "../")}'
    return _page(f"{county} | {SITE_TITLE}", f"Events in {county}", body, "../", generated_on)


def render_this_month(events: list[dict[str, Any]], today: date) -> str:
    label = f"{MONTH_NAMES[today.month - 1]} {today.year}"
    body = f'<p class="events-count">{len(events)} events this month</p>\n{_event_grid(events, "")}'
    return _page(f"This month | {SITE_TITLE}", f"Events in {label}", body, "", today)


def render_months(buckets: dict[int, list[dict[str, Any]]], year: int, generated_on: date) -> str:
    sections: list[str] = []
    for month_index in sorted(buckets):
        events = buckets[month_index]
        if not events:
            continue
        sections.append(
            f'<section class="month" id="month-{month_index + 1:02d}">'
            f"<h2>{MONTH_NAMES[month_index]} {year} ({len(events)})</h2>\n"
            f"{_event_grid(events, '')}</section>"
        )
    body = "\n".join(sections) or f'<p class="no-events">No events listed for {year}.</p>'
    return _page(f"{year} by month | {SITE_TITLE}", f"Events in {year}", body, "", generated_on)


def _calendar_cell(cell: CalendarDay) -> str:
    if not cell.in_month:
        return f'<td class="outside">{cell.day.day}</td>'
    items = "".join(
        f'<div class="calendar-event" title="{escape(format_date_range(ev))}">'
        f'{escape(text_field(ev, "name"))}</div>'
        for ev in cell.events
    )
    return f'<td><div class="day-number">{cell.day.day}</div>{items}</td>'


def render_month_table(events: list[dict[str, Any]], year: int, month: int) -> str:
    header = "".join(f"<th>{d}</th>" for d in ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"))
    rows = "".join(
        "<tr>" + "".join(_calendar_cell(cell) for cell in week) + "</tr>" for week in month_grid(events, year, month)
    )
    return (
        f'<h2 id="calendar-{year}-{month:02d}">{MONTH_NAMES[month - 1]} {year}</h2>'
        f'<table class="calendar"><thead><tr>{header}</tr></thead><tbody>{rows}</tbody></table>'
    )


def render_calendar(events: list[dict[str, Any]], year: int, generated_on: date) -> str:
    body = "\n".join(render_month_table(events, year, month) for month in range(1, 13))
    return _page(f"{year} calendar | {SITE_TITLE}", f"Calendar {year}", body, "", generated_on)
