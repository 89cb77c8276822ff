"""
In-memory candidate collection for the current session.
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from ..models import Candidate
from .compensation import parse_ctc

NUMERIC_SORT_KEYS = {"total_experience", "relevant_experience"}
CTC_SORT_KEYS = {"current_ctc", "expected_ctc"}
TEXT_SORT_KEYS = {
    "full_name",
    "email",
    "mobile",
    "dob",
    "current_company",
    "designation",
    "notice_period",
    "highest_qualification",
    "education_field",
    "current_location",
    "file_name",
}
SORT_KEYS = {"match_score"} | NUMERIC_SORT_KEYS | CTC_SORT_KEYS | TEXT_SORT_KEYS


@dataclass
class CandidateFilters:
    """Case-insensitive substring filters; empty values are ignored."""
    designation: str = ""
    notice_period: str = ""
    current_location: str = ""
    skills: str = ""

    def matches(self, candidate: Candidate) -> bool:
        if self.designation and self.designation.lower() not in candidate.designation.lower():
            return False
        if self.notice_period and self.notice_period.lower() not in candidate.notice_period.lower():
            return False
        if self.current_location and self.current_location.lower() not in candidate.current_location.lower():
            return False
        if self.skills:
            needle = self.skills.lower()
            if not any(needle in skill.lower() for skill in candidate.skills):
                return False
        return True


def sort_value(candidate: Candidate, key: str):
    if key == "match_score":
        return candidate.match_score if candidate.match_score is not None else -1
    if key in NUMERIC_SORT_KEYS:
        return getattr(candidate, key)
    if key in CTC_SORT_KEYS:
        return parse_ctc(getattr(candidate, key))
    return str(getattr(candidate, key) or "").lower()


class CandidateStore:
    """Insertion-ordered collection keyed by candidate id."""

    def __init__(self):
        self._candidates: Dict[str, Candidate] = {}

    def __len__(self) -> int:
        return len(self._candidates)

    def add(self, candidate: Candidate) -> None:
        self._candidates[candidate.id] = candidate

    def all(self) -> List[Candidate]:
        return list(self._candidates.values())

    def get(self, candidate_id: str) -> Optional[Candidate]:
        return self._candidates.get(candidate_id)

    def update(self, scored: Iterable[Candidate]) -> None:
        """
        Merge match results into records that are still present.

        Only match_score and match_reason are taken from `scored`; anything
        changed on the stored record meanwhile (shortlisting) is kept.
        """
        for candidate in scored:
            current = self._candidates.get(candidate.id)
            if current is not None and candidate.match_score is not None:
                self._candidates[candidate.id] = current.with_match(
                    candidate.match_score, candidate.match_reason
                )

    def shortlist(self, ids: Iterable[str]) -> int:
        count = 0
        for candidate_id in set(ids):
            candidate = self._candidates.get(candidate_id)
            if candidate is not None:
                self._candidates[candidate_id] = candidate.model_copy(update={"is_shortlisted": True})
                count += 1
        return count

    def delete(self, ids: Iterable[str]) -> int:
        count = 0
        for candidate_id in set(ids):
            if self._candidates.pop(candidate_id, None) is not None:
                count += 1
        return count

    def clear(self) -> None:
        self._candidates.clear()

    def query(
        self,
        filters: Optional[CandidateFilters] = None,
        sort_key: Optional[str] = None,
        descending: bool = False,
    ) -> List[Candidate]:
        """The displayed view: filtered, then optionally sorted (stable)."""
        filters = filters or CandidateFilters()
        result = [c for c in self._candidates.values() if filters.matches(c)]
        if sort_key in SORT_KEYS:
            result.sort(key=lambda c: sort_value(c, sort_key), reverse=descending)
        return result
