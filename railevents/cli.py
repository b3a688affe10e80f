"""
CLI (Command Line Interface).

    railevents build [--out DIR] [--year YEAR]
    railevents list [--county NAME] [--this-month]
    railevents counties
    railevents export <file.ics>

Every command accepts --url (events feed) and --today (reference date,
YYYY-MM-DD) so a build can be reproduced for a given day.
"""

from __future__ import annotations

import argparse
from datetime import date
from pathlib import Path
from typing import Any

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from railevents.build import DEFAULT_OUT_DIR, run_build
from railevents.dates import format_date_range, parse_iso_date
from railevents.export_ics import export_events_to_ics
from railevents.fetch import EVENTS_URL, FetchError, fetch_events
from railevents.fields import location_text, resolve_county, text_field
from railevents.views import (
    MONTH_VIEW_YEAR,
    drop_past_events,
    events_for_county,
    filter_by_current_month,
    group_by_county,
    sort_ascending_by_start_date,
    sort_descending_by_start_date,
)

console = Console()


def _iso_date(value: str) -> date:
    parsed = parse_iso_date(value)
    if parsed is None:
        raise argparse.ArgumentTypeError(f"invalid date {value!r} (expected YYYY-MM-DD)")
    return parsed


def _upcoming_events(args: argparse.Namespace) -> list[dict[str, Any]]:
    """
    Fetch the feed and keep events that have not finished yet.
    """
    events = fetch_events(args.url)
    return sort_descending_by_start_date(drop_past_events(events, args.today))


def _cmd_build(args: argparse.Namespace) -> int:
    run_build(url=args.url, out_dir=args.out, today=args.today, year=args.year)
    return 0


def _cmd_list(args: argparse.Namespace) -> int:
    """
    Print upcoming events as a table.
    """
    events = _upcoming_events(args)
    if args.county:
        events = events_for_county(events, args.county.strip())
    if args.this_month:
        events = sort_ascending_by_start_date(filter_by_current_month(events, args.today))

    if not events:
        console.print("No events.")
        return 0

    table = Table(title=f"Events ({len(events)})", box=box.SIMPLE)
    table.add_column("Date")
    table.add_column("Event")
    table.add_column("County")
    table.add_column("Location")
    for ev in events:
        table.add_row(format_date_range(ev), text_field(ev, "name"), resolve_county(ev), location_text(ev))
    console.print(table)
    return 0


def _cmd_counties(args: argparse.Namespace) -> int:
    counts = group_by_county(_upcoming_events(args))
    if not counts:
        console.print("No events.")
        return 0

    table = Table(title="Events per county", box=box.SIMPLE)
    table.add_column("County")
    table.add_column("Events", justify="right")
    for county, n in counts.items():
        table.add_row(county, str(n))
    console.print(table)
    return 0


def _cmd_export(args: argparse.Namespace) -> int:
    """
    Export upcoming events into an iCalendar (.ics) file.
    """
    out_path = (args.out or "").strip()
    if not out_path:
        console.print("Please provide output .ics path.")
        return 1

    events = _upcoming_events(args)
    if not events:
        console.print("No upcoming events to export.")
        return 0

    n = export_events_to_ics(events, out_path)
    console.print(f"Exported {n} events to: {out_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--url", type=str, default=EVENTS_URL, help="Events feed URL")
    common.add_argument(
        "--today", type=_iso_date, default=None, help="Reference date YYYY-MM-DD (default: current date)"
    )

    parser = argparse.ArgumentParser(prog="railevents", description="Railway modelling events site builder")
    sub = parser.add_subparsers(dest="command", required=True)

    p_build = sub.add_parser("build", parents=[common], help="Build the static site")
    p_build.add_argument("--out", type=Path, default=DEFAULT_OUT_DIR, help="Output directory (default: dist)")
    p_build.add_argument(
        "--year", type=int, default=MONTH_VIEW_YEAR, help=f"Year of the month/calendar pages (default: {MONTH_VIEW_YEAR})"
    )

    p_list = sub.add_parser("list", parents=[common], help="List upcoming events")
    p_list.add_argument("--county", type=str, default=None, help="Only events in this county")
    p_list.add_argument("--this-month", action="store_true", help="Only events starting this month")

    sub.add_parser("counties", parents=[common], help="Show event counts per county")

    p_export = sub.add_parser("export", parents=[common], help="Export upcoming events to .ics")
    p_export.add_argument("out", type=str, help="Output file path (e.g. events.ics)")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.today is None:
        args.today = date.today()

    handlers = {
        "build": _cmd_build,
        "list": _cmd_list,
        "counties": _cmd_counties,
        "export": _cmd_export,
    }
    handler = handlers.get(args.command)
    if handler is None:
        raise SystemExit(2)

    try:
        raise SystemExit(handler(args))
    except FetchError as exc:
        console.print(f"[bold red]Build failed:[/] {escape(str(exc))}")
        raise SystemExit(1)
