"""Tests for experience and CTC parsing."""
import pytest

from resume_intake.services.compensation import parse_ctc
from resume_intake.services.experience import parse_experience


class TestParseExperience:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("5 years 6 months", 5.5),
            ("6 months", 0.5),
            ("3", 3.0),
            ("", 0),
            ("garbage", 0),
            ("3 yrs", 3.0),
            ("5.5 years", 5.5),
            ("2 Years 4 Months", 2.3),
            ("18 months", 1.5),
            ("3 months", 0.3),
        ],
    )
    def test_parses_durations(self, text, expected):
        assert parse_experience(text) == expected

    def test_year_and_month_quantities_are_summed(self):
        assert parse_experience("1 year and 12 months") == 2.0

    def test_none_and_non_strings_yield_zero(self):
        assert parse_experience(None) == 0
        assert parse_experience(7) == 0

    @pytest.mark.parametrize("text", ["-3", "minus 2 years?", "n/a", "  ", "fresher"])
    def test_never_negative(self, text):
        assert parse_experience(text) >= 0


class TestParseCtc:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("12 LPA", 1200000),
            ("50k", 50000),
            ("$80,000", 80000),
            ("", 0),
            ("₹ 7.5 lakh", 750000),
            ("4.2L", 420000),
            ("Negotiable", 0),
        ],
    )
    def test_parses_magnitudes(self, text, expected):
        assert parse_ctc(text) == pytest.approx(expected)

    def test_lakh_takes_precedence_over_bare_number(self):
        # the bare 2024 comes first but the lakh figure wins
        assert parse_ctc("2024: 10 LPA") == 1000000

    def test_only_first_match_is_used(self):
        assert parse_ctc("12 LPA + 3 LPA bonus") == 1200000
