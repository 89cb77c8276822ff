"""
Per-file processing status, keyed by file name.
"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class FileState(str, Enum):
    """Observable position of a file in the ingestion pipeline."""
    QUEUED = "queued"
    AWAITING_PREVIEW = "awaiting-preview"
    PARSING = "parsing"
    SUCCESS = "success"
    ERROR = "error"


class FileStatus(BaseModel):
    """
    Progress/outcome record for one dispatched file.

    Only dispatched files get one: queued and previewing files are tracked by
    the queue itself. Progress never goes backwards while parsing.
    """
    status: FileState = FileState.PARSING
    progress: int = Field(default=0, ge=0, le=100)
    error: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in (FileState.SUCCESS, FileState.ERROR)

    def advance(self, progress: int) -> None:
        if self.is_terminal:
            return
        self.progress = max(self.progress, min(100, max(0, int(progress))))

    def succeed(self) -> None:
        self.status = FileState.SUCCESS
        self.progress = 100
        self.error = None

    def fail(self, message: str) -> None:
        self.status = FileState.ERROR
        self.progress = 100
        self.error = message
