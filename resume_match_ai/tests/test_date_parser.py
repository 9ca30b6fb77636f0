"""Tests for duration parsing into MM/YYYY ranges."""

import unittest
from datetime import date

from resume_match_ai.utils.date_parser import (
    PRESENT,
    months_between,
    parse_duration,
    to_year_month,
    today_year_month,
)


class TestParseDuration(unittest.TestCase):

    def test_month_range_to_present(self):
        result = parse_duration("Jan 2019 - Present")
        self.assertEqual(result.start_date, "01/2019")
        self.assertEqual(result.end_date, PRESENT)
        self.assertTrue(result.current)
        self.assertTrue(result.is_range)

    def test_year_range(self):
        result = parse_duration("2018 - 2020")
        self.assertEqual(result.start_date, "01/2018")
        self.assertEqual(result.end_date, "12/2020")
        self.assertFalse(result.current)

    def test_year_range_to_present(self):
        result = parse_duration("2017 – present")
        self.assertEqual(result.start_date, "01/2017")
        self.assertEqual(result.end_date, PRESENT)
        self.assertTrue(result.current)

    def test_single_year(self):
        result = parse_duration("2021")
        self.assertEqual(result.start_date, "01/2021")
        self.assertEqual(result.end_date, "12/2021")
        self.assertFalse(result.is_range)

    def test_full_month_names(self):
        result = parse_duration("January 2020 to March 2021")
        self.assertEqual((result.start_date, result.end_date), ("01/2020", "03/2021"))

    def test_numeric_months(self):
        result = parse_duration("03/2020 - 06/2022")
        self.assertEqual((result.start_date, result.end_date), ("03/2020", "06/2022"))

    def test_month_start_year_end(self):
        result = parse_duration("Jun 2015 - 2017")
        self.assertEqual((result.start_date, result.end_date), ("06/2015", "12/2017"))

    def test_short_month_range(self):
        result = parse_duration("AI Research Intern | Nov-Dec 2024")
        self.assertEqual((result.start_date, result.end_date), ("11/2024", "12/2024"))

    def test_short_month_range_is_not_a_single_year(self):
        result = parse_duration("Nov-Dec 2024")
        self.assertTrue(result.is_range)
        self.assertNotEqual((result.start_date, result.end_date), ("01/2024", "12/2024"))

    def test_duration_inside_line(self):
        result = parse_duration("Acme Corp | Sept 2016 - Aug 2018 | Remote")
        self.assertEqual((result.start_date, result.end_date), ("09/2016", "08/2018"))
        self.assertEqual(result.matched_text, "Sept 2016 - Aug 2018")

    def test_current_does_not_clear_end_date(self):
        result = parse_duration("Jan 2020 - Dec 2021, presently part-time")
        self.assertEqual(result.end_date, "12/2021")
        self.assertTrue(result.current)

    def test_unparsed_text(self):
        result = parse_duration("No dates here")
        self.assertEqual((result.start_date, result.end_date), ("", ""))
        self.assertFalse(result.current)
        self.assertFalse(result.parsed)

    def test_empty_text(self):
        self.assertFalse(parse_duration("").parsed)


class TestMonthArithmetic(unittest.TestCase):

    def test_to_year_month(self):
        self.assertEqual(to_year_month("05/2020"), (2020, 5))
        self.assertIsNone(to_year_month("2020-05"))
        self.assertIsNone(to_year_month(PRESENT))

    def test_months_between(self):
        self.assertEqual(months_between((2019, 1), (2020, 1)), 12)
        self.assertEqual(months_between((2020, 6), (2020, 3)), -3)

    def test_today_year_month(self):
        self.assertEqual(today_year_month(date(2024, 7, 15)), (2024, 7))


if __name__ == "__main__":
    unittest.main()
