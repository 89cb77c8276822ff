"""
Candidate API schemas
"""
from typing import List
from pydantic import BaseModel, Field

from ..models import Candidate


class CandidateListResponse(BaseModel):
    total: int
    candidates: List[Candidate] = Field(default_factory=list)


class BulkActionRequest(BaseModel):
    ids: List[str] = Field(default_factory=list)


class BulkActionResponse(BaseModel):
    affected: int


class JobMatchRequest(BaseModel):
    job_description: str


class JobMatchResponse(BaseModel):
    analyzed: int
    candidates: List[Candidate] = Field(default_factory=list)
