from .candidate import (
    CandidateListResponse,
    BulkActionRequest,
    BulkActionResponse,
    JobMatchRequest,
    JobMatchResponse,
)
from .extraction import RESUME_SCHEMA, MATCH_SCHEMA, ResumeExtraction, MatchAnalysis
from .ingestion import (
    UploadResponse,
    QueueStatusResponse,
    ModeUpdate,
    PreviewResponse,
    PreviewConfirmRequest,
)

__all__ = [
    "CandidateListResponse",
    "BulkActionRequest",
    "BulkActionResponse",
    "JobMatchRequest",
    "JobMatchResponse",
    "RESUME_SCHEMA",
    "MATCH_SCHEMA",
    "ResumeExtraction",
    "MatchAnalysis",
    "UploadResponse",
    "QueueStatusResponse",
    "ModeUpdate",
    "PreviewResponse",
    "PreviewConfirmRequest",
]
