"""
Resumes Router - uploads, per-file progress and the page-selection preview.
"""
import asyncio
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from ..config import get_settings
from ..schemas.ingestion import (
    ModeUpdate,
    PreviewConfirmRequest,
    PreviewResponse,
    QueueStatusResponse,
    UploadResponse,
)
from ..services.document_preview import inspect_document
from ..services.document_renderer import UploadedResume, count_pages, document_kind, resolve_content_type
from ..services.errors import QueueStateError, ResumeIntakeError
from ..services.page_selection import format_page_ranges, parse_page_selection
from ..services.session import ScreeningSession, get_session

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(prefix="/api/resumes", tags=["Resumes"])


def _queue_status(session: ScreeningSession) -> QueueStatusResponse:
    queue = session.queue
    preview = queue.preview
    return QueueStatusResponse(
        auto_parse=queue.auto_parse,
        queued=queue.queued,
        awaiting_preview=preview.name if preview else None,
        statuses={name: s.model_copy() for name, s in queue.statuses.items()},
    )


@router.post("/upload", response_model=UploadResponse)
async def upload_resumes(
    files: List[UploadFile] = File(...),
    session: ScreeningSession = Depends(get_session),
):
    """
    Admit resumes to the ingestion queue.

    Files whose name is already known to the session are dropped. Oversized
    files are rejected up front; unsupported types are admitted and end up
    as per-file errors.
    """
    max_bytes = settings.max_upload_mb * 1024 * 1024
    accepted: List[UploadedResume] = []
    rejected = {}

    for file in files:
        data = await file.read()
        if len(data) > max_bytes:
            rejected[file.filename] = f"File size must be less than {settings.max_upload_mb}MB"
            continue
        accepted.append(
            UploadedResume(
                name=file.filename,
                content_type=resolve_content_type(file.filename, file.content_type),
                data=data,
            )
        )

    admitted, dropped = session.queue.admit(accepted)
    return UploadResponse(admitted=admitted, dropped=dropped, rejected=rejected)


@router.get("/status", response_model=QueueStatusResponse)
async def get_status(session: ScreeningSession = Depends(get_session)):
    """Per-file progress plus what is still queued or awaiting preview."""
    return _queue_status(session)


@router.get("/mode", response_model=ModeUpdate)
async def get_mode(session: ScreeningSession = Depends(get_session)):
    return ModeUpdate(auto_parse=session.queue.auto_parse)


@router.put("/mode", response_model=QueueStatusResponse)
async def set_mode(payload: ModeUpdate, session: ScreeningSession = Depends(get_session)):
    session.queue.set_auto_parse(payload.auto_parse)
    return _queue_status(session)


@router.get("/preview", response_model=PreviewResponse)
async def get_preview(session: ScreeningSession = Depends(get_session)):
    """Thumbnails / text for the file awaiting page selection."""
    resume = session.queue.preview
    if resume is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No file is awaiting preview"
        )

    response = PreviewResponse(
        file_name=resume.name,
        content_type=resume.content_type,
        kind="unknown",
    )
    try:
        preview = await inspect_document(resume)
    except Exception as e:
        logger.warning(f"Could not build preview for {resume.name}: {e}")
        response.error = str(e) or "Failed to load preview"
        return response

    response.kind = preview.kind
    response.page_count = preview.page_count
    response.default_pages = preview.default_pages
    response.default_selection = format_page_ranges(preview.default_pages)
    response.thumbnails = preview.thumbnails
    response.thumbnail_mime_type = preview.thumbnail_mime_type
    response.text = preview.text
    return response


@router.post("/preview/confirm", response_model=QueueStatusResponse)
async def confirm_preview(
    payload: Optional[PreviewConfirmRequest] = None,
    session: ScreeningSession = Depends(get_session),
):
    """
    Parse the previewed file.

    Page selection only applies to PDFs; an empty selection means all pages.
    """
    resume = session.queue.preview
    if resume is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="No file is awaiting preview confirmation"
        )

    pages = None
    try:
        is_pdf = document_kind(resume.content_type) == "pdf"
    except ResumeIntakeError:
        is_pdf = False

    if is_pdf and payload is not None:
        if payload.pages:
            pages = sorted(set(payload.pages))
        elif payload.selection:
            try:
                page_count = await asyncio.to_thread(count_pages, resume)
            except ResumeIntakeError:
                page_count = 0
            pages = parse_page_selection(payload.selection, page_count)

    try:
        session.queue.confirm_preview(pages, expected=resume)
    except QueueStateError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return _queue_status(session)


@router.post("/preview/cancel", response_model=QueueStatusResponse)
async def cancel_preview(session: ScreeningSession = Depends(get_session)):
    try:
        session.queue.cancel_preview()
    except QueueStateError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return _queue_status(session)


@router.delete("", response_model=QueueStatusResponse)
async def clear_all(session: ScreeningSession = Depends(get_session)):
    """Clear statuses, queue, preview and every extracted candidate."""
    session.clear()
    return _queue_status(session)
