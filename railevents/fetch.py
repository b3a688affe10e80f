from __future__ import annotations

from typing import Any

import requests


# ---------------------------------------------------------------------------
# URLs
# ---------------------------------------------------------------------------

EVENTS_URL = "https://raw.githubusercontent.com/johnbeynon/railwaymodellingdirectory/main/uk/events.json"


class FetchError(RuntimeError):
    """
    The events feed could not be downloaded or decoded. Fatal for a build.
    """


# ---------------------------------------------------------------------------
# Core logic
# ---------------------------------------------------------------------------


def extract_events(payload: Any) -> list[dict[str, Any]]:
    """
    Accept both feed shapes: a bare list, or {"events": [...]}.

    Any other shape yields an empty list. Non-object entries are skipped.
    """
    if isinstance(payload, list):
        items = payload
    elif isinstance(payload, dict) and isinstance(payload.get("events"), list):
        items = payload["events"]
    else:
        return []
    return [item for item in items if isinstance(item, dict)]


def fetch_events(url: str = EVENTS_URL, timeout: float = 30) -> list[dict[str, Any]]:
    """
    Download the events feed and return the raw event records.

    Raises:
        FetchError: on network errors, non-2xx status or malformed JSON.
    """
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise FetchError(f"Failed to fetch events from {url}: {exc}") from exc

    try:
        payload = resp.json()
    except ValueError as exc:
        raise FetchError(f"Events feed at {url} is not valid JSON: {exc}") from exc

    return extract_events(payload)
