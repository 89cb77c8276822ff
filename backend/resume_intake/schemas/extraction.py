"""
Wire contract with the AI capability.

The dict schemas are sent as `response_schema`; the pydantic models validate
what comes back. A missing required field or a wrongly typed value fails
validation instead of being silently defaulted.
"""
from typing import List
from pydantic import BaseModel, Field, field_validator


# ============================================================================
# Resume extraction
# ============================================================================

RESUME_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "fullName": {"type": "STRING"},
        "email": {"type": "STRING"},
        "mobile": {"type": "STRING"},
        "dob": {"type": "STRING", "description": "Date of Birth, e.g., YYYY-MM-DD or DD/MM/YYYY"},
        "currentCompany": {"type": "STRING"},
        "designation": {"type": "STRING", "description": "Designation in Current Company"},
        "totalExperience": {"type": "STRING", "description": "e.g., '5 years', '3 months'"},
        "relevantExperience": {"type": "STRING", "description": "e.g., '3 years'"},
        "skills": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "A list of key technical and soft skills found in the resume.",
        },
        "currentCTC": {"type": "STRING", "description": "e.g., '12 LPA', '$80,000'"},
        "expectedCTC": {"type": "STRING", "description": "e.g., '15 LPA', '$95,000'"},
        "noticePeriod": {"type": "STRING", "description": "e.g., '30 days', 'Immediate Joiner'"},
        "highestQualification": {"type": "STRING"},
        "educationField": {"type": "STRING", "description": "Education in/Branch/Field"},
        "currentLocation": {"type": "STRING"},
    },
    "required": [
        "fullName",
        "email",
        "mobile",
        "totalExperience",
        "highestQualification",
        "currentLocation",
        "skills",
    ],
}


class ResumeExtraction(BaseModel):
    """Validated resume fields as returned by the model (experience still text)."""
    full_name: str = Field(alias="fullName")
    email: str
    mobile: str
    dob: str = ""
    current_company: str = Field(default="", alias="currentCompany")
    designation: str = ""
    total_experience: str = Field(alias="totalExperience")
    relevant_experience: str = Field(default="", alias="relevantExperience")
    skills: List[str]
    current_ctc: str = Field(default="", alias="currentCTC")
    expected_ctc: str = Field(default="", alias="expectedCTC")
    notice_period: str = Field(default="", alias="noticePeriod")
    highest_qualification: str = Field(alias="highestQualification")
    education_field: str = Field(default="", alias="educationField")
    current_location: str = Field(alias="currentLocation")

    class Config:
        populate_by_name = True

    @field_validator(
        "dob",
        "current_company",
        "designation",
        "relevant_experience",
        "current_ctc",
        "expected_ctc",
        "notice_period",
        "education_field",
        mode="before",
    )
    @classmethod
    def _absent_as_empty(cls, value):
        # Optional fields the model left out entirely may come back as null
        return "" if value is None else value


# ============================================================================
# Job description matching
# ============================================================================

MATCH_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "matchScore": {
            "type": "INTEGER",
            "description": "A score from 0 to 100 indicating how well the candidate matches the job description.",
        },
        "matchReason": {
            "type": "STRING",
            "description": (
                "A detailed explanation highlighting specific strong matches (skills/experience) "
                "and specific missing critical requirements relative to the JD."
            ),
        },
    },
    "required": ["matchScore", "matchReason"],
}


class MatchAnalysis(BaseModel):
    match_score: int = Field(alias="matchScore")
    match_reason: str = Field(alias="matchReason")

    class Config:
        populate_by_name = True

    @field_validator("match_score")
    @classmethod
    def _clamp_score(cls, value: int) -> int:
        return max(0, min(100, value))
