"""
Ingestion queue - admits uploaded files and drives each one through parsing.

Auto-parse mode dispatches every queued file straight away with all pages
selected. Manual mode presents one file at a time for page selection; the
next file is only presented once the current one was cancelled or its
confirmed parse has finished.

All methods must be called from the event loop thread. Dispatch spawns one
asyncio task per file, and a failing file never affects the others.
"""
import asyncio
import logging
from collections import deque
from typing import Awaitable, Callable, Deque, Dict, Iterable, List, Optional, Set, Tuple

from ..models import Candidate, FileState, FileStatus
from .document_renderer import ProgressCallback, UploadedResume
from .errors import QueueStateError

logger = logging.getLogger(__name__)

Extractor = Callable[[UploadedResume, Optional[List[int]], ProgressCallback], Awaitable[Candidate]]


class IngestionQueue:
    def __init__(
        self,
        extract: Extractor,
        on_candidate: Callable[[Candidate], None],
        auto_parse: bool = False,
    ):
        self._extract = extract
        self._on_candidate = on_candidate
        self.auto_parse = auto_parse

        self.statuses: Dict[str, FileStatus] = {}
        self._pending: Deque[UploadedResume] = deque()
        self._preview: Optional[UploadedResume] = None
        self._preview_dispatched = False
        self._tasks: Set[asyncio.Task] = set()
        self._generation = 0

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def preview(self) -> Optional[UploadedResume]:
        """The file awaiting page selection, if any."""
        if self._preview is not None and not self._preview_dispatched:
            return self._preview
        return None

    @property
    def queued(self) -> List[str]:
        return [resume.name for resume in self._pending]

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    def is_known(self, name: str) -> bool:
        if name in self.statuses:
            return True
        if self._preview is not None and self._preview.name == name:
            return True
        return any(resume.name == name for resume in self._pending)

    def state_of(self, name: str) -> Optional[FileState]:
        preview = self.preview
        if preview is not None and preview.name == name:
            return FileState.AWAITING_PREVIEW
        if any(resume.name == name for resume in self._pending):
            return FileState.QUEUED
        status = self.statuses.get(name)
        return status.status if status else None

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    def admit(self, files: Iterable[UploadedResume]) -> Tuple[List[str], List[str]]:
        """
        Queue new files, dropping any whose name is already known.

        Returns (admitted names, dropped names).
        """
        admitted, dropped = [], []
        for resume in files:
            if self.is_known(resume.name):
                logger.info(f"Skipping duplicate upload: {resume.name}")
                dropped.append(resume.name)
                continue
            self._pending.append(resume)
            admitted.append(resume.name)
        if admitted:
            logger.info(f"Admitted {len(admitted)} file(s) to the ingestion queue")
        self._drain()
        return admitted, dropped

    def confirm_preview(
        self,
        pages: Optional[List[int]] = None,
        expected: Optional[UploadedResume] = None,
    ) -> UploadedResume:
        """
        Start parsing the previewed file with the chosen pages.

        When `expected` is given, the preview must still be that file; a
        cancel, clear or mode switch in between raises QueueStateError.
        """
        resume = self.preview
        if resume is None:
            raise QueueStateError("No file is awaiting preview confirmation")
        if expected is not None and resume is not expected:
            raise QueueStateError(f"{expected.name} is no longer awaiting preview confirmation")
        logger.info(f"Preview confirmed for {resume.name} (pages={pages or 'all'})")
        self._preview_dispatched = True
        self._dispatch(resume, pages, owns_preview=True)
        return resume

    def cancel_preview(self) -> UploadedResume:
        """Drop the previewed file without ever parsing it."""
        resume = self.preview
        if resume is None:
            raise QueueStateError("No file is awaiting preview confirmation")
        logger.info(f"Preview cancelled for {resume.name}")
        self._preview = None
        self._drain()
        return resume

    def set_auto_parse(self, enabled: bool) -> None:
        if enabled != self.auto_parse:
            logger.info(f"Auto-parse {'enabled' if enabled else 'disabled'}")
        self.auto_parse = enabled
        self._drain()

    def clear(self) -> None:
        """
        Forget every status, queued file and preview.

        Parses already in flight run to completion but their results are
        discarded.
        """
        self._generation += 1
        self.statuses.clear()
        self._pending.clear()
        self._preview = None
        self._preview_dispatched = False

    async def wait_idle(self) -> None:
        """Wait until no parse is in flight."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _drain(self) -> None:
        # Mode is read at every decision point, not captured per file.
        if self.auto_parse:
            if self._preview is not None and not self._preview_dispatched:
                # Switched to auto while a preview was open: parse it with defaults
                self._preview_dispatched = True
                self._dispatch(self._preview, None, owns_preview=True)
            while self._pending:
                self._dispatch(self._pending.popleft(), None)
            return

        if self._preview is None and self._pending:
            self._preview = self._pending.popleft()
            self._preview_dispatched = False
            logger.info(f"Awaiting preview confirmation: {self._preview.name}")

    def _dispatch(self, resume: UploadedResume, pages: Optional[List[int]], owns_preview: bool = False) -> None:
        status = FileStatus(status=FileState.PARSING, progress=0)
        self.statuses[resume.name] = status
        logger.info(f"Dispatching {resume.name} for parsing")
        task = asyncio.get_running_loop().create_task(
            self._process(resume, pages, status, owns_preview, self._generation)
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _process(
        self,
        resume: UploadedResume,
        pages: Optional[List[int]],
        status: FileStatus,
        owns_preview: bool,
        generation: int,
    ) -> None:
        try:
            candidate = await self._extract(resume, pages, status.advance)
        except Exception as e:
            logger.exception(f"Failed to parse {resume.name}")
            status.fail(str(e) or "Unknown error")
        else:
            if generation == self._generation:
                self._on_candidate(candidate)
            status.succeed()
        finally:
            if owns_preview and self._preview is resume:
                self._preview = None
                self._preview_dispatched = False
            self._drain()
