"""
Ingestion API schemas - uploads, progress and the preview step.
"""
from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from ..models import FileStatus


class UploadResponse(BaseModel):
    admitted: List[str] = Field(default_factory=list)
    dropped: List[str] = Field(default_factory=list)
    rejected: Dict[str, str] = Field(default_factory=dict)


class QueueStatusResponse(BaseModel):
    auto_parse: bool
    queued: List[str] = Field(default_factory=list)
    awaiting_preview: Optional[str] = None
    statuses: Dict[str, FileStatus] = Field(default_factory=dict)


class ModeUpdate(BaseModel):
    auto_parse: bool


class PreviewResponse(BaseModel):
    file_name: str
    content_type: str
    kind: str
    page_count: int = 0
    default_pages: List[int] = Field(default_factory=list)
    default_selection: str = ""
    thumbnails: List[str] = Field(default_factory=list)
    thumbnail_mime_type: str = ""
    text: str = ""
    error: Optional[str] = None


class PreviewConfirmRequest(BaseModel):
    """Either an explicit page list or a selection string such as "1-3, 5"."""
    pages: Optional[List[int]] = None
    selection: Optional[str] = None
