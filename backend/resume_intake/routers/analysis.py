"""
Analysis Router - scores the candidate collection against a job description.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ..schemas.candidate import JobMatchRequest, JobMatchResponse
from ..services.session import ScreeningSession, get_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/analysis", tags=["Analysis"])


@router.post("/job-match", response_model=JobMatchResponse)
async def analyze_job_match(
    payload: JobMatchRequest,
    session: ScreeningSession = Depends(get_session),
):
    """
    Score every candidate against the pasted job description.

    Individual candidates that cannot be analyzed get a score of 0 instead of
    failing the request. Results come back best match first.
    """
    job_description = payload.job_description.strip()
    if not job_description:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Job description is required"
        )
    if len(session.store) == 0:
        return JobMatchResponse(analyzed=0)

    try:
        scored = await session.analyze_job_match(job_description)
    except Exception:
        logger.exception("Job match analysis failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while analyzing candidates against the job description."
        )
    return JobMatchResponse(analyzed=len(scored), candidates=scored)
