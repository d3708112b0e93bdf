"""
Unit tests for date parsing

Covers ISO and day-first text, native spreadsheet values and the sentinel.
"""

import unittest
from datetime import date, datetime

import numpy as np
import pandas as pd

from helpdesk.domains.tickets.dates import EPOCH, is_known, parse_date


class TestParseDateText(unittest.TestCase):
    """Test suite for text cells."""

    def test_day_first_equals_iso(self):
        """Test that DD-MM-YYYY and ISO text give the same instant."""
        self.assertEqual(parse_date("15-03-2024"), datetime(2024, 3, 15))
        self.assertEqual(parse_date("2024-03-15"), datetime(2024, 3, 15))

    def test_ambiguous_dates_are_day_first(self):
        """Test that 03-04-2024 is read as 3 April."""
        self.assertEqual(parse_date("03-04-2024"), datetime(2024, 4, 3))

    def test_separators_and_time(self):
        """Test dotted and slashed dates with a time part."""
        self.assertEqual(parse_date("15.03.2024 14:30"), datetime(2024, 3, 15, 14, 30))
        self.assertEqual(parse_date("15/03/2024 08:05:09"), datetime(2024, 3, 15, 8, 5, 9))

    def test_us_dates_with_day_over_twelve(self):
        """Test that month-first dates that cannot be day-first are kept."""
        self.assertEqual(parse_date("03/15/2024"), datetime(2024, 3, 15))
        self.assertEqual(parse_date("12/31/2024 10:00"), datetime(2024, 12, 31, 10, 0))
        self.assertEqual(parse_date("03/04/2024"), datetime(2024, 4, 3))

    def test_year_first_with_slashes(self):
        self.assertEqual(parse_date("2024/03/15"), datetime(2024, 3, 15))

    def test_two_digit_year(self):
        self.assertEqual(parse_date("15-03-24"), datetime(2024, 3, 15))

    def test_named_month(self):
        self.assertEqual(parse_date("15 Mar 2024"), datetime(2024, 3, 15))
        self.assertEqual(parse_date("March 15, 2024"), datetime(2024, 3, 15))

    def test_timezone_converted_to_utc(self):
        """Test that offsets are normalized to naive UTC."""
        self.assertEqual(
            parse_date("2024-03-15T10:00:00+02:00"),
            datetime(2024, 3, 15, 8, 0),
        )

    def test_sentinel_values(self):
        """Test that empty, dash and null cells give the sentinel."""
        for value in ("", "  ", "-", "---", "null", "NULL", None, float("nan")):
            with self.subTest(value=value):
                self.assertEqual(parse_date(value), EPOCH)

    def test_unreadable_text(self):
        """Test that garbage and impossible dates give the sentinel."""
        for value in ("garbage", "31-02-2024", "15-13-2024", "1-2"):
            with self.subTest(value=value):
                self.assertEqual(parse_date(value), EPOCH)


class TestParseDateNative(unittest.TestCase):
    """Test suite for values a spreadsheet reader already typed."""

    def test_datetime_passthrough(self):
        value = datetime(2024, 3, 15, 9, 30)
        self.assertEqual(parse_date(value), value)

    def test_timestamp(self):
        self.assertEqual(parse_date(pd.Timestamp("2024-03-15 09:00")), datetime(2024, 3, 15, 9))

    def test_date(self):
        self.assertEqual(parse_date(date(2024, 3, 15)), datetime(2024, 3, 15))

    def test_numpy_datetime(self):
        self.assertEqual(parse_date(np.datetime64("2024-03-15T06:00")), datetime(2024, 3, 15, 6))

    def test_nat(self):
        self.assertEqual(parse_date(pd.NaT), EPOCH)


class TestIsKnown(unittest.TestCase):

    def test_is_known(self):
        self.assertTrue(is_known(datetime(2024, 1, 1)))
        self.assertFalse(is_known(EPOCH))
        self.assertFalse(is_known(None))


if __name__ == "__main__":
    unittest.main()
