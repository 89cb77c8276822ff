"""
Compensation (CTC) magnitude parsing, used as a sort key only.
"""
import re

_STRIP_PATTERN = re.compile(r"[,₹$€£]")
_LAKH_PATTERN = re.compile(r"(\d+\.?\d*)\s*(?:lpa|lakh|l)")
_THOUSAND_PATTERN = re.compile(r"(\d+\.?\d*)\s*k")
_NUMBER_PATTERN = re.compile(r"(\d+\.?\d*)")


def parse_ctc(text) -> float:
    """
    Return a comparable magnitude for strings like "12 LPA", "50k" or "$80,000".

    Precedence is lakh, then thousand, then the first bare number; only the
    first pattern that matches is applied.
    """
    if not text or not isinstance(text, str):
        return 0.0

    lowered = _STRIP_PATTERN.sub("", text.lower())

    lakh_match = _LAKH_PATTERN.search(lowered)
    if lakh_match:
        return float(lakh_match.group(1)) * 100000

    thousand_match = _THOUSAND_PATTERN.search(lowered)
    if thousand_match:
        return float(thousand_match.group(1)) * 1000

    number_match = _NUMBER_PATTERN.search(lowered)
    if number_match:
        return float(number_match.group(1))
    return 0.0
