"""
Page selection strings such as "1-3, 5" used by the preview step.
"""
from typing import Iterable, List


def parse_page_selection(text: str, page_count: int) -> List[int]:
    """
    Parse comma-separated pages and ranges into sorted 1-indexed page numbers.

    Ranges may be written in either order ("5-3"). Non-numeric parts and pages
    outside [1, page_count] are dropped silently.
    """
    selected = set()
    for part in (text or "").split(","):
        part = part.strip()
        if not part:
            continue
        if "-" in part:
            start_text, _, end_text = part.partition("-")
            try:
                start, end = int(start_text.strip()), int(end_text.strip())
            except ValueError:
                continue
            low, high = min(start, end), max(start, end)
            selected.update(p for p in range(max(low, 1), min(high, page_count) + 1))
        else:
            try:
                page = int(part)
            except ValueError:
                continue
            if 1 <= page <= page_count:
                selected.add(page)
    return sorted(selected)


def format_page_ranges(pages: Iterable[int]) -> str:
    """Render a selection compactly, e.g. [1, 2, 3, 5] -> "1-3, 5"."""
    ordered = sorted(set(pages))
    if not ordered:
        return ""

    ranges = []
    start = prev = ordered[0]
    for page in ordered[1:]:
        if page == prev + 1:
            prev = page
            continue
        ranges.append(f"{start}" if start == prev else f"{start}-{prev}")
        start = prev = page
    ranges.append(f"{start}" if start == prev else f"{start}-{prev}")
    return ", ".join(ranges)
