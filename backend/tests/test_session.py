"""Tests for the screening session wiring."""
import asyncio
import json

import pytest

from resume_intake.models import Candidate
from resume_intake.services.session import ScreeningSession


class HeldMatchGenerator:
    """Answers every match request only once `release` is set."""

    def __init__(self):
        self.release = asyncio.Event()
        self.calls = 0

    async def generate_json(self, prompt, schema, payload=None):
        self.calls += 1
        await self.release.wait()
        return json.dumps({"matchScore": 60, "matchReason": "Partial match."})


@pytest.mark.asyncio
async def test_changes_made_while_scoring_are_kept():
    generator = HeldMatchGenerator()
    session = ScreeningSession(generator)
    ann = Candidate(full_name="Ann", skills=["Python"])
    bob = Candidate(full_name="Bob", skills=["Go"])
    session.store.add(ann)
    session.store.add(bob)

    analysis = asyncio.create_task(session.analyze_job_match("Python developer"))
    while generator.calls < 2:
        await asyncio.sleep(0)

    session.store.shortlist([ann.id])
    session.store.delete([bob.id])
    generator.release.set()
    ranked = await analysis

    stored = session.store.get(ann.id)
    assert stored.is_shortlisted is True
    assert stored.match_score == 60
    assert session.store.get(bob.id) is None
    assert [c.id for c in ranked] == [ann.id]
    assert ranked[0].is_shortlisted is True


@pytest.mark.asyncio
async def test_clear_empties_store_and_queue():
    session = ScreeningSession(HeldMatchGenerator())
    session.store.add(Candidate(full_name="Ann"))
    session.clear()
    assert len(session.store) == 0
    assert session.queue.statuses == {}
