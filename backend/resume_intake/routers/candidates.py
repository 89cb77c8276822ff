"""
Candidates Router - the displayed candidate view, bulk actions and export.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import PlainTextResponse, Response

from ..models import Candidate
from ..schemas.candidate import BulkActionRequest, BulkActionResponse, CandidateListResponse
from ..services.candidate_store import SORT_KEYS, CandidateFilters
from ..services.export import candidates_to_tsv, candidates_to_xlsx
from ..services.session import ScreeningSession, get_session

router = APIRouter(prefix="/api/candidates", tags=["Candidates"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def displayed_candidates(
    designation: str = "",
    notice_period: str = "",
    current_location: str = "",
    skills: str = "",
    sort_by: Optional[str] = None,
    direction: str = Query("ascending", pattern="^(ascending|descending)$"),
    session: ScreeningSession = Depends(get_session),
) -> List[Candidate]:
    """Filtered and sorted candidates, shared by listing and export."""
    if sort_by is not None and sort_by not in SORT_KEYS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot sort by '{sort_by}'"
        )
    filters = CandidateFilters(
        designation=designation,
        notice_period=notice_period,
        current_location=current_location,
        skills=skills,
    )
    return session.store.query(filters, sort_by, descending=direction == "descending")


@router.get("", response_model=CandidateListResponse)
async def list_candidates(candidates: List[Candidate] = Depends(displayed_candidates)):
    return CandidateListResponse(total=len(candidates), candidates=candidates)


@router.post("/shortlist", response_model=BulkActionResponse)
async def shortlist_candidates(
    payload: BulkActionRequest,
    session: ScreeningSession = Depends(get_session),
):
    return BulkActionResponse(affected=session.store.shortlist(payload.ids))


@router.post("/delete", response_model=BulkActionResponse)
async def delete_candidates(
    payload: BulkActionRequest,
    session: ScreeningSession = Depends(get_session),
):
    return BulkActionResponse(affected=session.store.delete(payload.ids))


@router.get("/export.xlsx")
async def export_xlsx(candidates: List[Candidate] = Depends(displayed_candidates)):
    if not candidates:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No candidates to export")
    return Response(
        content=candidates_to_xlsx(candidates),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="CandidateData.xlsx"'},
    )


@router.get("/export.tsv", response_class=PlainTextResponse)
async def export_tsv(candidates: List[Candidate] = Depends(displayed_candidates)):
    """Tab-separated rows ready to paste into a spreadsheet."""
    if not candidates:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No candidates to export")
    return PlainTextResponse(candidates_to_tsv(candidates))
