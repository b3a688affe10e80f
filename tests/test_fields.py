"""
Unit tests for field alias resolution.

Alias precedence:
- start date: startDate > start_date > date
- end date:   endDate > end_date
- organiser:  organiser > organizer
Empty strings count as absent.
"""

import unittest

from railevents.fields import (
    NOT_SPECIFIED,
    event_slug,
    location_text,
    resolve_county,
    resolve_end_date,
    resolve_layout_count,
    resolve_organiser,
    resolve_start_date,
    resolve_trader_count,
)


class TestStartDate(unittest.TestCase):
    def test_priority_order(self) -> None:
        rec = {"date": "2026-01-03", "start_date": "2026-01-02", "startDate": "2026-01-01"}
        self.assertEqual(resolve_start_date(rec), "2026-01-01")

        rec = {"date": "2026-01-03", "start_date": "2026-01-02"}
        self.assertEqual(resolve_start_date(rec), "2026-01-02")

        rec = {"date": "2026-01-03"}
        self.assertEqual(resolve_start_date(rec), "2026-01-03")

    def test_empty_alias_is_skipped(self) -> None:
        rec = {"startDate": "", "start_date": None, "date": "2026-05-05"}
        self.assertEqual(resolve_start_date(rec), "2026-05-05")

    def test_absent(self) -> None:
        self.assertIsNone(resolve_start_date({"name": "No date"}))


class TestEndDate(unittest.TestCase):
    def test_priority_order(self) -> None:
        rec = {"end_date": "2026-02-10", "endDate": "2026-02-09"}
        self.assertEqual(resolve_end_date(rec), "2026-02-09")

    def test_no_fallback_by_default(self) -> None:
        self.assertIsNone(resolve_end_date({"date": "2026-02-07"}))

    def test_fallback_to_start(self) -> None:
        rec = {"date": "2026-02-07"}
        self.assertEqual(resolve_end_date(rec, fallback_to_start=True), "2026-02-07")

    def test_explicit_end_wins_over_fallback(self) -> None:
        rec = {"date": "2026-02-07", "end_date": "2026-02-08"}
        self.assertEqual(resolve_end_date(rec, fallback_to_start=True), "2026-02-08")


class TestOtherFields(unittest.TestCase):
    def test_organiser_spellings(self) -> None:
        self.assertEqual(resolve_organiser({"organizer": "MRC"}), "MRC")
        self.assertEqual(resolve_organiser({"organiser": "A", "organizer": "B"}), "A")
        self.assertIsNone(resolve_organiser({}))

    def test_county_default(self) -> None:
        self.assertEqual(resolve_county({}), NOT_SPECIFIED)
        self.assertEqual(resolve_county({"county": "  "}), NOT_SPECIFIED)
        self.assertEqual(resolve_county({"county": "Kent"}), "Kent")

    def test_counts_accept_strings_and_numbers(self) -> None:
        self.assertEqual(resolve_layout_count({"layouts": "12"}), 12)
        self.assertEqual(resolve_layout_count({"layoutCount": 7}), 7)
        self.assertEqual(resolve_trader_count({"trader_count": 3.0}), 3)
        self.assertIsNone(resolve_trader_count({"traders": "lots"}))
        self.assertIsNone(resolve_trader_count({}))

    def test_location_text_joins_venue_and_location(self) -> None:
        rec = {"venue": "Village Hall", "location": "Ashford"}
        self.assertEqual(location_text(rec), "Village Hall, Ashford")
        self.assertEqual(location_text({"location": "Ashford"}), "Ashford")
        self.assertEqual(location_text({"venue": "Hall", "location": "Hall"}), "Hall")
        self.assertEqual(location_text({}), "")

    def test_event_slug(self) -> None:
        rec = {"name": "Ashford Model Railway Show!", "date": "2026-02-07"}
        slug = event_slug(rec)
        self.assertRegex(slug, r"^2026-02-07-ashford-model-railway-show-[0-9a-f]{8}$")
        self.assertEqual(slug, event_slug(dict(rec)))
        self.assertRegex(event_slug({"name": "TBA Show"}), r"^tba-show-[0-9a-f]{8}$")

    def test_event_slug_differs_by_place(self) -> None:
        kent = {"name": "Model Railway Exhibition", "date": "2026-03-07", "county": "Kent"}
        devon = {"name": "Model Railway Exhibition", "date": "2026-03-07", "county": "Devon"}
        self.assertNotEqual(event_slug(kent), event_slug(devon))

    def test_event_slug_ignores_description(self) -> None:
        rec = {"name": "Show", "date": "2026-03-07", "description": "old"}
        self.assertEqual(event_slug(rec), event_slug({**rec, "description": "new"}))


if __name__ == "__main__":
    unittest.main()
