"""
Job description matching.

Each candidate is scored in its own Gemini call; all calls run concurrently
and a failing call degrades only its own candidate.
"""
import asyncio
import json
import logging
from typing import List

from ..models import Candidate
from ..schemas.extraction import MATCH_SCHEMA, MatchAnalysis
from .gemini_client import StructuredGenerator

logger = logging.getLogger(__name__)

FAILED_MATCH_SCORE = 0
FAILED_MATCH_REASON = "Failed to analyze match."

MATCH_PROMPT_TEMPLATE = """
You are an expert AI Recruiter.
Compare the following Candidate Profile against the provided Job Description.

**Candidate Profile:**
{candidate_summary}

**Job Description:**
"{job_description}"

**Task:**
1. Calculate a match percentage score (0-100) based on skills, experience, and relevance.
2. Provide a detailed match reason.
   - Explicitly list the **Strong Matches**: What key skills or experience does the candidate possess that align with the JD?
   - Explicitly list the **Gaps/Missing**: What critical skills or experience are missing or insufficient?
   - Be specific (e.g., "Matches: React, Node.js. Missing: AWS certification").

Return JSON.
"""


def candidate_summary(candidate: Candidate) -> dict:
    """Lightweight view of a candidate sent to the model to save tokens."""
    return {
        "skills": candidate.skills,
        "totalExperience": candidate.total_experience,
        "designation": candidate.designation,
        "currentCompany": candidate.current_company,
        "education": candidate.highest_qualification,
        "location": candidate.current_location,
    }


async def analyze_candidate_match(
    generator: StructuredGenerator,
    candidate: Candidate,
    job_description: str,
) -> MatchAnalysis:
    prompt = MATCH_PROMPT_TEMPLATE.format(
        candidate_summary=json.dumps(candidate_summary(candidate)),
        job_description=job_description,
    )
    raw = await generator.generate_json(prompt, MATCH_SCHEMA)
    return MatchAnalysis.model_validate_json(raw)


async def _score_one(
    generator: StructuredGenerator,
    candidate: Candidate,
    job_description: str,
) -> Candidate:
    try:
        result = await analyze_candidate_match(generator, candidate, job_description)
    except Exception as e:
        logger.warning(f"Match analysis failed for candidate {candidate.id} ({candidate.file_name}): {e}")
        return candidate.with_match(FAILED_MATCH_SCORE, FAILED_MATCH_REASON)
    return candidate.with_match(result.match_score, result.match_reason)


async def score_candidates(
    generator: StructuredGenerator,
    candidates: List[Candidate],
    job_description: str,
) -> List[Candidate]:
    """
    Score every candidate against the job description.

    Returns the candidates in input order, each carrying match_score and
    match_reason. Never raises for an individual candidate; sorting is left
    to the caller.
    """
    if not candidates:
        return []
    return list(
        await asyncio.gather(
            *(_score_one(generator, candidate, job_description) for candidate in candidates)
        )
    )
