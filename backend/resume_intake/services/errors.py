"""
Error taxonomy for the resume pipeline.

Every per-file failure ends up as an ExtractionError, whose message is what
the ingestion queue records on the file's status entry.
"""
from typing import Optional


class ResumeIntakeError(Exception):
    """Base class for pipeline errors."""


class UnsupportedFileTypeError(ResumeIntakeError):
    def __init__(self, content_type: str):
        self.content_type = content_type
        super().__init__(f"Unsupported file type: {content_type}")


class RenderError(ResumeIntakeError):
    """The document produced no usable pages or text."""


class InvalidAiResponseError(ResumeIntakeError):
    def __init__(self, message: str, raw_response: Optional[str] = None):
        self.raw_response = raw_response
        super().__init__(message)


class AiUnavailableError(ResumeIntakeError):
    """The AI capability is not configured (e.g. missing API key)."""


class ExtractionError(ResumeIntakeError):
    """Wraps any failure while turning one file into a candidate."""


class QueueStateError(ResumeIntakeError):
    """A queue action was requested in a state that does not allow it."""
