from .errors import (
    ResumeIntakeError,
    UnsupportedFileTypeError,
    RenderError,
    InvalidAiResponseError,
    AiUnavailableError,
    ExtractionError,
    QueueStateError,
)
from .experience import parse_experience
from .compensation import parse_ctc
from .page_selection import parse_page_selection, format_page_ranges
from .document_renderer import (
    UploadedResume,
    ImagePayload,
    TextPayload,
    render_document,
    resolve_content_type,
)
from .document_preview import DocumentPreview, inspect_document
from .gemini_client import GeminiGenerator, StructuredGenerator
from .resume_parser import ResumeParser
from .match_scorer import score_candidates, FAILED_MATCH_REASON
from .ingestion_queue import IngestionQueue
from .candidate_store import CandidateStore, CandidateFilters
from .export import candidates_to_xlsx, candidates_to_tsv
from .session import ScreeningSession, get_session

__all__ = [
    # Errors
    "ResumeIntakeError",
    "UnsupportedFileTypeError",
    "RenderError",
    "InvalidAiResponseError",
    "AiUnavailableError",
    "ExtractionError",
    "QueueStateError",
    # Normalization
    "parse_experience",
    "parse_ctc",
    "parse_page_selection",
    "format_page_ranges",
    # Rendering
    "UploadedResume",
    "ImagePayload",
    "TextPayload",
    "render_document",
    "resolve_content_type",
    "DocumentPreview",
    "inspect_document",
    # AI
    "GeminiGenerator",
    "StructuredGenerator",
    "ResumeParser",
    "score_candidates",
    "FAILED_MATCH_REASON",
    # Session
    "IngestionQueue",
    "CandidateStore",
    "CandidateFilters",
    "candidates_to_xlsx",
    "candidates_to_tsv",
    "ScreeningSession",
    "get_session",
]
