"""
Candidate record - one per successfully parsed resume file.
"""
import uuid
from typing import List, Optional
from pydantic import BaseModel, Field, model_validator


def new_candidate_id() -> str:
    return uuid.uuid4().hex


class Candidate(BaseModel):
    """
    Canonical extracted record.

    CTC values stay as the original text for display; numeric magnitudes are
    derived on demand when sorting. match_score and match_reason are either
    both set or both absent.
    """
    id: str = Field(default_factory=new_candidate_id)
    full_name: str = ""
    email: str = ""
    mobile: str = ""  # digits only
    dob: str = ""
    current_company: str = ""
    designation: str = ""
    total_experience: float = Field(default=0.0, ge=0)
    relevant_experience: float = Field(default=0.0, ge=0)
    skills: List[str] = Field(default_factory=list)
    current_ctc: str = ""
    expected_ctc: str = ""
    notice_period: str = ""
    highest_qualification: str = ""
    education_field: str = ""
    current_location: str = ""
    file_name: str = ""

    # Job description analysis
    match_score: Optional[int] = Field(default=None, ge=0, le=100)
    match_reason: Optional[str] = None
    is_shortlisted: bool = False

    @model_validator(mode="after")
    def _match_fields_paired(self):
        if (self.match_score is None) != (self.match_reason is None):
            raise ValueError("match_score and match_reason must be set together")
        return self

    def with_match(self, score: int, reason: str) -> "Candidate":
        """Return a copy carrying a match analysis result."""
        return self.model_copy(update={"match_score": score, "match_reason": reason})
