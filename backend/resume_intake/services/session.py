"""
Process-wide screening session: the live candidate collection, the
ingestion queue feeding it and the AI-backed services around them.
"""
from functools import lru_cache
from typing import List, Optional

from ..config import get_settings
from ..models import Candidate
from .candidate_store import CandidateStore
from .gemini_client import GeminiGenerator, StructuredGenerator
from .ingestion_queue import IngestionQueue
from .match_scorer import score_candidates
from .resume_parser import ResumeParser


class ScreeningSession:
    def __init__(
        self,
        generator: StructuredGenerator,
        parser: Optional[ResumeParser] = None,
        auto_parse: bool = False,
    ):
        self.generator = generator
        self.parser = parser or ResumeParser(generator)
        self.store = CandidateStore()
        self.queue = IngestionQueue(
            extract=self.parser.parse,
            on_candidate=self.store.add,
            auto_parse=auto_parse,
        )

    async def analyze_job_match(self, job_description: str) -> List[Candidate]:
        """Score all candidates, store the results and return them best first."""
        scored = await score_candidates(self.generator, self.store.all(), job_description)
        self.store.update(scored)
        # Records may have been shortlisted or deleted while scoring ran
        current = [self.store.get(c.id) for c in scored]
        current = [c for c in current if c is not None]
        return sorted(current, key=lambda c: c.match_score, reverse=True)

    def clear(self) -> None:
        self.queue.clear()
        self.store.clear()


@lru_cache()
def get_session() -> ScreeningSession:
    settings = get_settings()
    return ScreeningSession(GeminiGenerator(), auto_parse=settings.auto_parse_default)
