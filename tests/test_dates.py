"""
Unit tests for date formatting and date arithmetic.
"""

import unittest
from datetime import date

from railevents.dates import (
    DATE_TBA,
    expand_date_span,
    export_end_date,
    format_date_range,
    ordinal_suffix,
    parse_iso_date,
)


class TestOrdinalSuffix(unittest.TestCase):
    def test_st_nd_rd(self) -> None:
        for day in (1, 21, 31):
            self.assertEqual(ordinal_suffix(day), "st", day)
        for day in (2, 22):
            self.assertEqual(ordinal_suffix(day), "nd", day)
        for day in (3, 23):
            self.assertEqual(ordinal_suffix(day), "rd", day)

    def test_th(self) -> None:
        for day in (4, 5, 9, 10, 11, 12, 13, 14, 19, 20, 24, 25, 28, 29, 30):
            self.assertEqual(ordinal_suffix(day), "th", day)


class TestFormatDateRange(unittest.TestCase):
    def test_no_start_date(self) -> None:
        self.assertEqual(format_date_range({"name": "x"}), DATE_TBA)
        self.assertEqual(format_date_range({"name": "x", "end_date": "2026-02-09"}), DATE_TBA)

    def test_single_day(self) -> None:
        self.assertEqual(format_date_range({"date": "2026-02-07"}), "Saturday, 7th Feb 2026")

    def test_equal_start_and_end_is_single_day(self) -> None:
        rec = {"startDate": "2026-03-01", "endDate": "2026-03-01"}
        self.assertEqual(format_date_range(rec), "Sunday, 1st Mar 2026")

    def test_same_month_range(self) -> None:
        rec = {"start_date": "2026-02-07", "end_date": "2026-02-09"}
        self.assertEqual(format_date_range(rec), "7th–9th Feb 2026")

    def test_cross_month_range(self) -> None:
        rec = {"start_date": "2026-01-28", "end_date": "2026-02-02"}
        self.assertEqual(format_date_range(rec), "28th Jan – 2nd Feb 2026")

    def test_cross_year_range(self) -> None:
        rec = {"start_date": "2025-12-28", "end_date": "2026-01-02"}
        self.assertEqual(format_date_range(rec), "28th Dec 2025 – 2nd Jan 2026")

    def test_unparsable_start_is_shown_raw(self) -> None:
        self.assertEqual(format_date_range({"date": "Spring 2026"}), "Spring 2026")


class TestExpandDateSpan(unittest.TestCase):
    def test_multi_day(self) -> None:
        rec = {"start_date": "2026-02-07", "end_date": "2026-02-09"}
        days = [d.isoformat() for d in expand_date_span(rec)]
        self.assertEqual(days, ["2026-02-07", "2026-02-08", "2026-02-09"])

    def test_single_day(self) -> None:
        self.assertEqual(expand_date_span({"date": "2026-02-07"}), [date(2026, 2, 7)])

    def test_end_before_start(self) -> None:
        rec = {"start_date": "2026-02-07", "end_date": "2026-02-01"}
        self.assertEqual(expand_date_span(rec), [date(2026, 2, 7)])

    def test_no_start(self) -> None:
        self.assertEqual(expand_date_span({"end_date": "2026-02-07"}), [])

    def test_clipped_to_window(self) -> None:
        rec = {"start_date": "2026-01-30", "end_date": "2902-02-09"}
        days = expand_date_span(rec, date(2026, 2, 1), date(2026, 2, 3))
        self.assertEqual(days, [date(2026, 2, 1), date(2026, 2, 2), date(2026, 2, 3)])

    def test_window_outside_span(self) -> None:
        rec = {"start_date": "2026-02-07", "end_date": "2026-02-09"}
        self.assertEqual(expand_date_span(rec, date(2026, 3, 1), date(2026, 3, 31)), [])

    def test_restartable(self) -> None:
        rec = {"start_date": "2026-02-27", "end_date": "2026-03-01"}
        self.assertEqual(expand_date_span(rec), expand_date_span(rec))
        self.assertEqual(len(expand_date_span(rec)), 3)


class TestExportEndDate(unittest.TestCase):
    def test_exclusive_end(self) -> None:
        rec = {"start_date": "2026-02-07", "end_date": "2026-02-09"}
        self.assertEqual(export_end_date(rec), date(2026, 2, 10))

    def test_single_day_event(self) -> None:
        self.assertEqual(export_end_date({"date": "2026-12-31"}), date(2027, 1, 1))

    def test_undated(self) -> None:
        self.assertIsNone(export_end_date({"name": "x"}))

    def test_display_end_is_not_shifted(self) -> None:
        rec = {"start_date": "2026-02-07", "end_date": "2026-02-09"}
        self.assertIn("9th", format_date_range(rec))
        self.assertNotIn("10th", format_date_range(rec))


class TestParseIsoDate(unittest.TestCase):
    def test_valid_and_invalid(self) -> None:
        self.assertEqual(parse_iso_date("2026-02-07"), date(2026, 2, 7))
        self.assertEqual(parse_iso_date("2026-02-07T10:00:00Z"), date(2026, 2, 7))
        self.assertIsNone(parse_iso_date("2026-02-30"))
        self.assertIsNone(parse_iso_date(""))
        self.assertIsNone(parse_iso_date(None))


if __name__ == "__main__":
    unittest.main()
