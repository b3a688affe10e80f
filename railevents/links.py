"""
"Add to calendar" links for Google Calendar and Outlook.

Both services take all-day events with an exclusive end date, same as ICS.
"""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import urlencode

from railevents.dates import export_end_date, start_date_of
from railevents.export_ics import format_ics_date, plain_description
from railevents.fields import location_text, text_field

GOOGLE_CALENDAR_URL = "https://calendar.google.com/calendar/render"
OUTLOOK_CALENDAR_URL = "https://outlook.live.com/calendar/0/deeplink/compose"


def _details(record: dict[str, Any]) -> str:
    parts = [plain_description(record), text_field(record, "url")]
    return "\n\n".join(p for p in parts if p)


def google_calendar_params(record: dict[str, Any]) -> Optional[dict[str, str]]:
    start = start_date_of(record)
    end = export_end_date(record)
    if start is None or end is None:
        return None
    return {
        "action": "TEMPLATE",
        "text": text_field(record, "name"),
        "dates": f"{format_ics_date(start)}/{format_ics_date(end)}",
        "details": _details(record),
        "location": location_text(record),
    }


def outlook_calendar_params(record: dict[str, Any]) -> Optional[dict[str, str]]:
    start = start_date_of(record)
    end = export_end_date(record)
    if start is None or end is None:
        return None
    return {
        "path": "/calendar/action/compose",
        "rru": "addevent",
        "subject": text_field(record, "name"),
        "startdt": start.isoformat(),
        "enddt": end.isoformat(),
        "allday": "true",
        "body": _details(record),
        "location": location_text(record),
    }


def google_calendar_url(record: dict[str, Any]) -> Optional[str]:
    params = google_calendar_params(record)
    return None if params is None else f"{GOOGLE_CALENDAR_URL}?{urlencode(params)}"


def outlook_calendar_url(record: dict[str, Any]) -> Optional[str]:
    params = outlook_calendar_params(record)
    return None if params is None else f"{OUTLOOK_CALENDAR_URL}?{urlencode(params)}"
