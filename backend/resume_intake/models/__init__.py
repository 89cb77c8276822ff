from .candidate import Candidate, new_candidate_id
from .file_status import FileState, FileStatus

__all__ = [
    "Candidate",
    "new_candidate_id",
    "FileState",
    "FileStatus",
]
