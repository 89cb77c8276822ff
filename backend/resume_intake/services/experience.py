"""
Experience duration parsing.

The model returns experience exactly as written on the resume ("5 years 6
months", "3 yrs", "18 months"); this module turns that into fractional years.
"""
import math
import re

_YEARS_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*(?:y|yr|year)")
_MONTHS_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*(?:m|mon|month)")
_BARE_NUMBER_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)$")


def parse_experience(text) -> float:
    """
    Convert a free-text duration to years, rounded to one decimal place.

    A year quantity and a month quantity are summed when both are present.
    A bare number is read as years. Anything unparseable yields 0.0.
    """
    if not text or not isinstance(text, str):
        return 0.0

    lowered = text.lower().strip()
    total_years = 0.0

    year_match = _YEARS_PATTERN.search(lowered)
    month_match = _MONTHS_PATTERN.search(lowered)

    if year_match:
        total_years += float(year_match.group(1))
    if month_match:
        total_years += float(month_match.group(1)) / 12

    if not year_match and not month_match:
        number_match = _BARE_NUMBER_PATTERN.match(lowered)
        if number_match:
            total_years = float(number_match.group(1))

    # Half-up rounding, so "3 months" reads as 0.3 years
    return math.floor(total_years * 10 + 0.5) / 10
