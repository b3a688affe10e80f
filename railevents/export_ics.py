"""
iCalendar (.ics) export.

Events are exported as all-day events so they can be imported into:
- Google Calendar
- Outlook
- Apple Calendar

All-day DTEND is exclusive: an event on 7-9 Feb ends on 10 Feb.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Optional

from bs4 import BeautifulSoup

from railevents.dates import export_end_date, start_date_of
from railevents.fields import event_slug, location_text, text_field

UID_DOMAIN = "railevents"


def _ics_escape(text: str) -> str:
    """
    Escape text for ICS fields (very small subset, sufficient for our use).
    """
    return (
        text.replace("\\", "\\\\").replace("\r\n", "\\n").replace("\n", "\\n").replace(";", "\\;").replace(",", "\\,")
    )


def _fold(line: str, limit: int = 75) -> str:
    """
    Fold a content line at 75 octets (RFC 5545 3.1). Continuation lines
    start with a single space. Multi-byte characters are never split.
    """
    if len(line.encode("utf-8")) <= limit:
        return line

    parts: list[str] = []
    current = ""
    size = 0
    budget = limit
    for ch in line:
        n = len(ch.encode("utf-8"))
        if size + n > budget:
            parts.append(current)
            current, size = "", 0
            # the leading space of a continuation line counts towards the limit
            budget = limit - 1
        current += ch
        size += n
    parts.append(current)
    return "\r\n ".join(parts)


def format_ics_date(value: date) -> str:
    return value.strftime("%Y%m%d")


def plain_description(record: dict[str, Any]) -> str:
    """
    Event description as plain text. Some feed entries carry HTML markup.
    """
    raw = text_field(record, "description")
    if not raw or "<" not in raw:
        return raw
    return BeautifulSoup(raw, "html.parser").get_text(" ", strip=True)


def ics_date_fields(record: dict[str, Any]) -> Optional[tuple[str, str]]:
    """
    (DTSTART, DTEND) values in YYYYMMDD form, or None if the event is undated.
    """
    start = start_date_of(record)
    end = export_end_date(record)
    if start is None or end is None:
        return None
    return format_ics_date(start), format_ics_date(end)


def vevent_lines(record: dict[str, Any], dtstamp: str) -> list[str]:
    """
    VEVENT block for one record; empty list for undated records.
    """
    fields = ics_date_fields(record)
    if fields is None:
        return []
    dtstart, dtend = fields

    summary = text_field(record, "name") or "Railway modelling event"
    location = location_text(record)
    description = plain_description(record)
    url = text_field(record, "url")

    lines = [
        "BEGIN:VEVENT",
        f"UID:{_ics_escape(event_slug(record))}@{UID_DOMAIN}",
        f"DTSTAMP:{dtstamp}",
        f"DTSTART;VALUE=DATE:{dtstart}",
        f"DTEND;VALUE=DATE:{dtend}",
        f"SUMMARY:{_ics_escape(summary)}",
    ]
    if location:
        lines.append(f"LOCATION:{_ics_escape(location)}")
    if description:
        lines.append(f"DESCRIPTION:{_ics_escape(description)}")
    if url:
        # URI value type: no TEXT escaping
        lines.append(f"URL:{url}")
    lines.append("END:VEVENT")
    return lines


def events_to_ics(events: list[dict[str, Any]], now: Optional[datetime] = None) -> tuple[str, int]:
    """
    Render events as an iCalendar document. Returns (text, number of VEVENTs).
    """
    stamp_source = now if now is not None else datetime.now(timezone.utc)
    dtstamp = stamp_source.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")

    lines: list[str] = []
    lines.append("BEGIN:VCALENDAR")
    lines.append("VERSION:2.0")
    lines.append("PRODID:-//railevents//UK Railway Modelling Events//EN")
    lines.append("CALSCALE:GREGORIAN")
    lines.append("METHOD:PUBLISH")

    count = 0
    for ev in events:
        block = vevent_lines(ev, dtstamp)
        if not block:
            continue
        lines.extend(block)
        count += 1

    lines.append("END:VCALENDAR")

    # ICS standard uses CRLF
    return "\r\n".join(_fold(line) for line in lines) + "\r\n", count


def export_events_to_ics(events: list[dict[str, Any]], out_path: str | Path, now: Optional[datetime] = None) -> int:
    """
    Export events to an .ics file. Returns number of exported events.
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    text, count = events_to_ics(events, now=now)
    # newline="" keeps the CRLF line endings untouched
    with out.open("w", encoding="utf-8", newline="") as fh:
        fh.write(text)
    return count
